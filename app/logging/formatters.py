import logging
from app.logging.log_levels import LogLevel

# Timestamp, logger name and level are added by the root handler
_LEVEL_FORMATS = {
    LogLevel.ERROR: '[ERROR] %(message)s%(context)s',
    LogLevel.WARNING: '[WARNING] %(message)s%(context)s',
    LogLevel.INFO: '[INFO] %(message)s%(context)s',
    LogLevel.REQUEST: '[REQUEST] %(message)s%(context)s',
    LogLevel.SLOW: '[SLOW] %(message)s%(context)s',
    LogLevel.AUDIT: '[AUDIT] %(message)s%(context)s',
}


class ContextFormatter(logging.Formatter):
    """Appends the key=value context passed to CustomLogger after the message"""

    def format(self, record: logging.LogRecord) -> str:
        context = getattr(record, "context", None) or {}
        record.context = (" | " + " ".join(f"{k}={v}" for k, v in context.items())) if context else ""
        return super().format(record)


def get_formatter_for_level(level: LogLevel) -> logging.Formatter:
    """Returns the formatter for a custom log level"""
    return ContextFormatter(_LEVEL_FORMATS.get(level, '%(message)s%(context)s'))
