"""
Centralized logging configuration with Sentry integration.

Provides root logger setup, error tracking and the sensitive-data filter
applied to every Sentry event.
"""

import logging
import sys
from typing import Dict, Any, Optional

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

from app.core.config import settings

SENSITIVE_FIELDS = (
    'password', 'token', 'secret', 'authorization', 'api_key',
    'user_id', 'user_role',
)

SENSITIVE_HEADERS = ('Authorization', 'Cookie', 'Set-Cookie')


def init_sentry() -> bool:
    """
    Initialize Sentry for error tracking.

    Only initializes if SENTRY_DSN is configured. Returns whether Sentry
    is active.
    """
    if not settings.SENTRY_DSN:
        logging.info("SENTRY_DSN not configured. Sentry disabled.")
        return False

    try:
        sentry_sdk.init(
            dsn=settings.SENTRY_DSN,
            environment=settings.SENTRY_ENVIRONMENT or settings.MODE,
            traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
            integrations=[
                FastApiIntegration(),
                SqlalchemyIntegration(),
            ],
            before_send=filter_sensitive_data,
            send_default_pii=False,
            attach_stacktrace=True,
            max_breadcrumbs=50,
        )
        logging.info(f"Sentry initialized for environment: {settings.MODE}")
        return True
    except Exception as e:
        logging.error(f"Failed to initialize Sentry: {e}")
        return False


def filter_sensitive_data(event: Dict[str, Any], hint: Dict[str, Any] = None) -> Optional[Dict[str, Any]]:
    """
    Filter sensitive data before sending to Sentry.

    Masks passwords, session cookies and auth headers in the request
    payload attached to the event.

    Args:
        event: Sentry event dictionary
        hint: Sentry hint dictionary

    Returns:
        The event with sensitive values replaced by '[FILTERED]'
    """
    request = event.get('request') or {}

    data = request.get('data')
    if isinstance(data, dict):
        for field in SENSITIVE_FIELDS:
            if field in data:
                data[field] = '[FILTERED]'

    headers = request.get('headers')
    if isinstance(headers, dict):
        for header in SENSITIVE_HEADERS:
            if header in headers:
                headers[header] = '[FILTERED]'

    cookies = request.get('cookies')
    if isinstance(cookies, dict):
        for name in cookies:
            cookies[name] = '[FILTERED]'

    return event


def capture_error(
    error: Exception,
    context: Optional[Dict[str, Any]] = None,
    user: Optional[Dict[str, Any]] = None,
    tags: Optional[Dict[str, str]] = None
) -> Optional[str]:
    """
    Send an error to Sentry with context.

    Args:
        error: Exception to capture
        context: Additional context dict to attach
        user: User information dict (id, email, role)
        tags: Tags to attach to the event

    Returns:
        Sentry event ID if sent, None otherwise
    """
    if not settings.SENTRY_DSN:
        return None

    try:
        with sentry_sdk.new_scope() as scope:
            if user:
                scope.set_user({
                    "id": user.get("id"),
                    "email": user.get("email"),
                    "role": user.get("role"),
                })
            if context:
                for key, value in context.items():
                    scope.set_context(key, value)
            if tags:
                for key, value in tags.items():
                    scope.set_tag(key, value)

            event_id = sentry_sdk.capture_exception(error)
            logging.info(f"Error captured in Sentry with event ID: {event_id}")
            return event_id
    except Exception as e:
        logging.error(f"Failed to capture error in Sentry: {e}")
        return None


def setup_logging():
    """
    Configure the root logger from settings.LOG_LEVEL.
    """
    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    logger = logging.getLogger()
    logger.setLevel(log_level)
    logger.handlers = []

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    ))
    logger.addHandler(console_handler)

    logging.info(f"Logging configured with level: {settings.LOG_LEVEL}")
