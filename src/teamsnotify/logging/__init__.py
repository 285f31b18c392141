"""진단 로그 출력 모듈."""

from teamsnotify.logging.console_logger import DiagnosticSink, NullSink, SimpleLogger, get_logger

__all__ = ["DiagnosticSink", "NullSink", "SimpleLogger", "get_logger"]
