"""간단한 콘솔 로거와 진단 싱크."""

import logging
import sys
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class DiagnosticSink(Protocol):
    """진단 라인을 받는 싱크. 클라이언트 제어 흐름은 싱크에 의존하지 않는다."""

    def emit(self, line: str) -> None:
        ...


class NullSink:
    """아무것도 출력하지 않는 기본 싱크."""

    def emit(self, line: str) -> None:
        return None


class SimpleLogger:
    """간단한 콘솔 로거.

    ``emit`` 을 구현하므로 TeamsClient 의 진단 싱크로 바로 넘길 수 있다.
    """

    def __init__(
        self,
        name: str = "teamsnotify",
        console_output: bool = True,
        log_level: int = logging.INFO,
    ) -> None:
        """로거 초기화.

        Args:
            name: 로거 이름
            console_output: 콘솔 출력 여부
            log_level: 로그 레벨
        """
        self.name = name
        self.console_output = console_output
        self.log_level = log_level

        self.logger = logging.getLogger(name)
        self.logger.setLevel(log_level)
        self.logger.handlers.clear()

        if console_output:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(log_level)
            console_format = logging.Formatter(
                "[%(asctime)s] %(levelname)s | %(message)s",
                datefmt="%Y-%m-%dT%H:%M:%S",
            )
            console_handler.setFormatter(console_format)
            self.logger.addHandler(console_handler)

    def emit(self, line: str) -> None:
        """진단 라인 (DEBUG 레벨)."""
        self.debug(line)

    def info(self, message: str, **extra: Any) -> None:
        """INFO 레벨 로그."""
        self._log(logging.INFO, message, extra)

    def warning(self, message: str, **extra: Any) -> None:
        """WARNING 레벨 로그."""
        self._log(logging.WARNING, message, extra)

    def error(self, message: str, exc_info: bool = False, **extra: Any) -> None:
        """ERROR 레벨 로그."""
        self._log(logging.ERROR, message, extra, exc_info=exc_info)

    def debug(self, message: str, **extra: Any) -> None:
        """DEBUG 레벨 로그."""
        self._log(logging.DEBUG, message, extra)

    def _log(
        self,
        level: int,
        message: str,
        extra: dict[str, Any],
        exc_info: bool = False,
    ) -> None:
        """로그 메시지 출력."""
        # 구조화된 데이터를 메시지에 포함
        if extra:
            extra_str = " | ".join(f"{k}={v}" for k, v in extra.items())
            full_message = f"{message} | {extra_str}"
        else:
            full_message = message

        self.logger.log(level, full_message, exc_info=exc_info)


def get_logger(name: str = "teamsnotify", log_level: int = logging.INFO) -> SimpleLogger:
    """로거 인스턴스 반환.

    Args:
        name: 로거 이름
        log_level: 로그 레벨
    """
    return SimpleLogger(name=name, log_level=log_level)
