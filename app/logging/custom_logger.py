"""
Custom logger with per-level formatting and structured context.
Levels: info, warning, error, request, slow, audit
"""
import logging
from typing import Any, Dict

from app.logging.formatters import get_formatter_for_level
from app.logging.log_levels import LogLevel, STDLIB_LEVELS


class CustomLogger:
    """
    Thin wrapper around a stdlib logger.

    Usage:
        logger = CustomLogger("billing")
        logger.info("Client created", client_id=12)
        logger.audit("Payment recorded", bill_id=3, amount="1500.00")
        logger.slow("Slow request", duration=2.4, path="/api/clients")

    Records propagate to the root handlers configured by
    `app.core.logging.setup_logging`; the formatted message and the raw
    context are attached to the record.
    """

    def __init__(self, name: str):
        self.name = name
        self.logger = logging.getLogger(name)

    def _log(self, level: LogLevel, message: str, exc_info: bool = False, **context: Any) -> None:
        record = logging.LogRecord(
            name=self.name,
            level=STDLIB_LEVELS[level],
            pathname="",
            lineno=0,
            msg=message,
            args=(),
            exc_info=None,
        )
        record.context = context
        formatted_message = get_formatter_for_level(level).format(record)

        self.logger.log(
            STDLIB_LEVELS[level],
            formatted_message,
            extra={"custom_data": {"level": level.value, **context}},
            exc_info=exc_info,
        )

    def info(self, message: str, **context: Any) -> None:
        self._log(LogLevel.INFO, message, **context)

    def warning(self, message: str, **context: Any) -> None:
        self._log(LogLevel.WARNING, message, **context)

    def error(self, message: str, exc_info: bool = True, **context: Any) -> None:
        """
        Log a failure. Attaches the active traceback by default.

        Example:
            try:
                ...
            except SQLAlchemyError:
                logger.error("Failed to record payment", bill_id=4)
        """
        self._log(LogLevel.ERROR, message, exc_info=exc_info, **context)

    def request(
        self,
        message: str,
        method: str,
        path: str,
        status_code: int,
        duration: float,
        **context: Any
    ) -> None:
        self._log(
            LogLevel.REQUEST,
            message,
            method=method,
            path=path,
            status_code=status_code,
            duration=duration,
            **context
        )

    def slow(self, message: str, duration: float, threshold: float = 1.0, **context: Any) -> None:
        self._log(LogLevel.SLOW, message, duration=duration, threshold=threshold, **context)

    def audit(self, message: str, **context: Any) -> None:
        """Changes to amounts or bill status."""
        self._log(LogLevel.AUDIT, message, **context)


_loggers: Dict[str, CustomLogger] = {}


def get_logger(name: str) -> CustomLogger:
    """
    Get (or create) the custom logger for a module.

    Usage:
        from app.logging import get_logger
        logger = get_logger(__name__)
    """
    if name not in _loggers:
        _loggers[name] = CustomLogger(name)
    return _loggers[name]
