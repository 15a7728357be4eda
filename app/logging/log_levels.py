"""
Custom log levels used by CustomLogger
"""
from enum import Enum
import logging


class LogLevel(str, Enum):
    """Custom log levels"""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    REQUEST = "request"
    SLOW = "slow"
    AUDIT = "audit"   # state changes to money: payments, overrides


# Mapping onto the standard library levels
STDLIB_LEVELS = {
    LogLevel.INFO: logging.INFO,
    LogLevel.WARNING: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
    LogLevel.REQUEST: logging.INFO,
    LogLevel.SLOW: logging.WARNING,
    LogLevel.AUDIT: logging.INFO,
}
