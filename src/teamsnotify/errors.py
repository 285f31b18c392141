"""teamsnotify 예외 계층."""

from __future__ import annotations

from collections.abc import Sequence

import httpx


class TeamsNotifyError(Exception):
    """teamsnotify 예외 기본 클래스."""


class WebhookURLError(TeamsNotifyError, ValueError):
    """웹훅 URL 검증 오류."""


class MalformedWebhookURLError(WebhookURLError):
    """URL로 해석할 수 없는 웹훅 주소."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"unable to parse webhook URL {url!r}: {reason}")


class UnrecognizedWebhookHostError(WebhookURLError):
    """어떤 검증 패턴과도 일치하지 않는 웹훅 주소."""

    def __init__(self, url: str, prefix: str, patterns: Sequence[str]) -> None:
        self.url = url
        self.prefix = prefix
        self.patterns = tuple(patterns)
        super().__init__(
            f"webhook URL does not match any expected pattern; got {prefix!r}, "
            f"expected one of {list(self.patterns)!r}"
        )


class InvalidMessageCardError(TeamsNotifyError, ValueError):
    """MessageCard 구성/검증 오류."""


class SerializationError(TeamsNotifyError):
    """MessageCard를 JSON으로 직렬화하지 못함."""


class TeamsTransportError(TeamsNotifyError):
    """네트워크 계층 오류 (타임아웃, 연결 거부, DNS 등).

    원본 httpx 예외는 ``original`` 과 ``__cause__`` 로 보존된다.
    """

    def __init__(self, message: str, original: httpx.TransportError) -> None:
        self.original = original
        super().__init__(message)

    @property
    def is_timeout(self) -> bool:
        return isinstance(self.original, httpx.TimeoutException)


class RemoteRejectionError(TeamsNotifyError):
    """웹훅 엔드포인트가 2xx 이외의 상태로 응답함.

    Teams는 거부 사유를 평문 바디로 알려주는 경우가 많다
    (예: "Summary or Text is required.").
    """

    def __init__(self, status_code: int, reason_phrase: str, body: str) -> None:
        self.status_code = status_code
        self.status_line = f"{status_code} {reason_phrase}".strip()
        self.body = body
        super().__init__(f"error on notification: {self.status_line}, {body!r}")
