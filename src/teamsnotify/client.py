"""Teams Incoming Webhook 기반 MessageCard 전송."""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable
from typing import Any

import httpx

from teamsnotify import __version__
from teamsnotify.errors import RemoteRejectionError, TeamsTransportError
from teamsnotify.logging import DiagnosticSink, NullSink, SimpleLogger
from teamsnotify.messagecard import Card
from teamsnotify.settings import TeamsSettings
from teamsnotify.validation import WebhookURLValidator, validate_message_card

DEFAULT_TIMEOUT = 5.0
DEFAULT_USER_AGENT = f"teamsnotify/{__version__}"
REQUEST_HEADERS = {"Content-Type": "application/json;charset=utf-8"}


class _TeamsClientBase:
    """검증/직렬화/응답 처리 공통 로직. 전송 자체는 하위 클래스가 담당한다."""

    def __init__(
        self,
        *,
        validation_patterns: Iterable[str] | None = None,
        skip_webhook_url_validation: bool = False,
        sink: DiagnosticSink | None = None,
    ) -> None:
        self._validator = WebhookURLValidator(validation_patterns)
        self._skip_validation = skip_webhook_url_validation
        self._sink: DiagnosticSink = sink if sink is not None else NullSink()

    @classmethod
    def _kwargs_from_settings(cls, settings: TeamsSettings) -> dict[str, Any]:
        return {
            "timeout": settings.timeout,
            "validation_patterns": settings.webhook_url_validation_patterns or None,
            "skip_webhook_url_validation": settings.skip_webhook_url_validation,
            "sink": SimpleLogger(log_level=logging.DEBUG) if settings.debug else None,
        }

    @property
    def validation_patterns(self) -> tuple[str, ...]:
        return self._validator.patterns

    @property
    def skip_webhook_url_validation(self) -> bool:
        return self._skip_validation

    def add_webhook_url_validation_patterns(self, *patterns: str) -> None:
        """검증 패턴 추가 (기존 패턴 유지). 동시 전송 시작 전에 호출해야 한다."""
        self._validator.add_patterns(*patterns)

    def set_webhook_url_validation_patterns(self, *patterns: str) -> None:
        """검증 패턴 교체 (기본 패턴도 제거됨)."""
        self._validator.replace_patterns(*patterns)

    def skip_webhook_url_validation_on_send(self, skip: bool) -> None:
        """True 이면 전송 시 URL 패턴 검사를 생략한다. 파싱 가능 여부는 계속 확인한다."""
        self._skip_validation = skip

    def validate_input(self, webhook_url: str, card: Card) -> httpx.URL:
        """URL 검증 후 문서 검증. 문서 검증은 skip 설정과 무관하게 항상 수행된다."""
        skip = self._skip_validation
        self._sink.emit(f"validating webhook URL (skip pattern check: {skip})")
        url = self._validator.validate(webhook_url, skip=skip)
        validate_message_card(card)
        return url

    def _prepare(self, webhook_url: str, card: Card) -> tuple[httpx.URL, bytes]:
        url = self.validate_input(webhook_url, card)
        body = card.to_json()
        self._sink.emit(f"payload: {body.decode('utf-8')}")
        return url, body

    def _transport_error(self, url: httpx.URL, exc: httpx.TransportError) -> TeamsTransportError:
        self._sink.emit(f"transport error while posting to {url.host}: {exc!r}")
        return TeamsTransportError(f"error on notification to {url.host}: {exc}", original=exc)

    def _handle_response(self, url: httpx.URL, response: httpx.Response, started: float) -> None:
        elapsed = time.monotonic() - started
        self._sink.emit(f"response from {url.host}: {response.status_code} ({elapsed:.3f}s)")
        if not 200 <= response.status_code < 299:
            raise RemoteRejectionError(response.status_code, response.reason_phrase, response.text)


class TeamsClient(_TeamsClientBase):
    """동기 Teams 웹훅 클라이언트.

    여러 스레드에서 ``send`` 를 동시에 호출해도 된다. 패턴 추가/skip 설정은
    설정 단계에서만 호출하는 것을 전제로 한다.

    참고:
    - 웹훅 URL 자체가 비밀값이므로 로그에는 호스트만 남긴다.
    - 타임아웃은 전송 단위가 아니라 소유한 httpx.Client 단위로 설정된다.
    """

    def __init__(
        self,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        http_client: httpx.Client | None = None,
        validation_patterns: Iterable[str] | None = None,
        skip_webhook_url_validation: bool = False,
        sink: DiagnosticSink | None = None,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        super().__init__(
            validation_patterns=validation_patterns,
            skip_webhook_url_validation=skip_webhook_url_validation,
            sink=sink,
        )
        # 직접 만든 클라이언트만 close() 에서 닫는다. 주입된 transport 는 호출자 소유.
        self._owned_client: httpx.Client | None = None
        if http_client is None:
            http_client = self._owned_client = httpx.Client(timeout=timeout, headers={"User-Agent": user_agent})
        self._client = http_client

    @classmethod
    def from_settings(cls, settings: TeamsSettings) -> TeamsClient:
        return cls(**cls._kwargs_from_settings(settings))

    @property
    def http_client(self) -> httpx.Client:
        return self._client

    def set_http_client(self, http_client: httpx.Client) -> None:
        """전송에 사용할 httpx.Client 교체 (타임아웃/프록시 변경용).

        교체된 클라이언트는 호출자가 닫는다. 내부에서 만든 기본 클라이언트는 close() 에서 닫힌다.
        """
        self._client = http_client

    def close(self) -> None:
        if self._owned_client is not None:
            self._owned_client.close()

    def __enter__(self) -> TeamsClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def send(self, webhook_url: str, card: Card) -> None:
        """MessageCard 를 웹훅으로 한 번 전송한다 (재시도 없음)."""
        url, body = self._prepare(webhook_url, card)
        started = time.monotonic()
        try:
            response = self._client.post(url, content=body, headers=REQUEST_HEADERS)
        except httpx.TransportError as e:
            raise self._transport_error(url, e) from e
        self._handle_response(url, response, started)


class AsyncTeamsClient(_TeamsClientBase):
    """비동기 Teams 웹훅 클라이언트 (httpx.AsyncClient 기반)."""

    def __init__(
        self,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        http_client: httpx.AsyncClient | None = None,
        validation_patterns: Iterable[str] | None = None,
        skip_webhook_url_validation: bool = False,
        sink: DiagnosticSink | None = None,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        super().__init__(
            validation_patterns=validation_patterns,
            skip_webhook_url_validation=skip_webhook_url_validation,
            sink=sink,
        )
        self._owned_client: httpx.AsyncClient | None = None
        if http_client is None:
            http_client = self._owned_client = httpx.AsyncClient(
                timeout=timeout, headers={"User-Agent": user_agent}
            )
        self._client = http_client

    @classmethod
    def from_settings(cls, settings: TeamsSettings) -> AsyncTeamsClient:
        return cls(**cls._kwargs_from_settings(settings))

    @property
    def http_client(self) -> httpx.AsyncClient:
        return self._client

    def set_http_client(self, http_client: httpx.AsyncClient) -> None:
        self._client = http_client

    async def aclose(self) -> None:
        if self._owned_client is not None:
            await self._owned_client.aclose()

    async def __aenter__(self) -> AsyncTeamsClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def send(self, webhook_url: str, card: Card) -> None:
        url, body = self._prepare(webhook_url, card)
        started = time.monotonic()
        try:
            response = await self._client.post(url, content=body, headers=REQUEST_HEADERS)
        except httpx.TransportError as e:
            raise self._transport_error(url, e) from e
        self._handle_response(url, response, started)
