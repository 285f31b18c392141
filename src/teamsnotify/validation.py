"""웹훅 URL 및 MessageCard 검증."""

from __future__ import annotations

import re
import threading
from collections.abc import Iterable

import httpx

from teamsnotify.errors import (
    InvalidMessageCardError,
    MalformedWebhookURLError,
    UnrecognizedWebhookHostError,
)
from teamsnotify.messagecard import Card

# 알려진 Teams 웹훅 URL prefix
WEBHOOK_URL_OFFICECOM_PREFIX = "https://outlook.office.com"
WEBHOOK_URL_OFFICE365_PREFIX = "https://outlook.office365.com"

# outlook.office(365).com 과 *.webhook.office.com 호스트만 허용 (호스트 끝까지 고정)
DEFAULT_WEBHOOK_URL_VALIDATION_PATTERN = r"^https://(?:[^/?#@]*\.webhook|outlook)\.office(?:365)?\.com(?:[:/?#]|$)"


def parse_webhook_url(webhook_url: str) -> httpx.URL:
    """웹훅 URL 파싱.

    빈 문자열, 파싱 불가 문자열, scheme/host 가 없는 값은 모두
    MalformedWebhookURLError 로 보고한다.
    """
    if not webhook_url:
        raise MalformedWebhookURLError(webhook_url, "empty URL")
    try:
        url = httpx.URL(webhook_url)
    except httpx.InvalidURL as e:
        raise MalformedWebhookURLError(webhook_url, str(e)) from e
    if not url.scheme or not url.host:
        raise MalformedWebhookURLError(webhook_url, "missing scheme or host")
    return url


class WebhookURLValidator:
    """정규식 패턴 기반 웹훅 URL 검증기.

    패턴은 등록 순서대로 검사하며 하나라도 일치하면 통과한다.
    ``patterns`` 를 생략하면 기본 패턴만 사용하고, 명시하면 기본 패턴을 대체한다.
    """

    def __init__(self, patterns: Iterable[str] | None = None) -> None:
        self._lock = threading.Lock()
        if patterns is None:
            patterns = (DEFAULT_WEBHOOK_URL_VALIDATION_PATTERN,)
        self._patterns: list[re.Pattern[str]] = [re.compile(p) for p in patterns]

    @property
    def patterns(self) -> tuple[str, ...]:
        with self._lock:
            return tuple(p.pattern for p in self._patterns)

    def add_patterns(self, *patterns: str) -> None:
        """기존 패턴 목록 뒤에 추가 (누적)."""
        compiled = [re.compile(p) for p in patterns]
        with self._lock:
            self._patterns.extend(compiled)

    def replace_patterns(self, *patterns: str) -> None:
        """활성 패턴 목록 전체 교체 (기본 패턴도 제거됨)."""
        compiled = [re.compile(p) for p in patterns]
        with self._lock:
            self._patterns = compiled

    def validate(self, webhook_url: str, *, skip: bool = False) -> httpx.URL:
        """URL 검증 후 파싱된 URL 반환.

        Args:
            webhook_url: 검증할 웹훅 URL
            skip: True 이면 패턴 검사를 건너뛴다 (파싱 가능 여부만 확인)
        """
        url = parse_webhook_url(webhook_url)
        if skip:
            return url

        with self._lock:
            active = list(self._patterns)

        for pattern in active:
            if pattern.search(webhook_url):
                return url

        raise UnrecognizedWebhookHostError(
            webhook_url,
            f"{url.scheme}://{url.host}",
            [p.pattern for p in active],
        )


def validate_message_card(card: Card) -> None:
    """원격 API 최소 요구사항 검사 (text 또는 summary 필수).

    둘 다 비어 있으면 Teams 는 400 "Summary or Text is required." 로 응답한다.
    """
    if not card.text and not card.summary:
        raise InvalidMessageCardError("invalid message card: summary or text field is required")
