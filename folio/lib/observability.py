"""Observability facade wrapping Pydantic Logfire.

Provides structured tracing and request instrumentation. Gracefully no-ops
when logfire is not installed or not enabled in configuration.

Also owns credential redaction: the upstream API key travels in the query
string of every upstream request, so anything that might end up in a log
record is scrubbed first.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from folio.config import Settings

REDACTED = "[REDACTED]"

_logfire = None
_configured = False


def is_available() -> bool:
    return _logfire is not None and _configured


def configure(settings: Settings) -> None:
    """Initialize logfire from LogfireConfig settings.

    No-ops if logfire is not installed or not enabled.
    """
    global _logfire, _configured

    if not settings.logfire.enabled:
        return

    try:
        import logfire as lf
    except ImportError:
        return

    kwargs: dict[str, Any] = {
        "service_name": settings.logfire.service_name,
        "send_to_logfire": "if-token-present",
    }
    if settings.logfire.environment:
        kwargs["environment"] = settings.logfire.environment
    if settings.logfire.sample_rate != 1.0:
        kwargs["trace_sample_rate"] = settings.logfire.sample_rate
    if settings.logfire.console:
        kwargs["console"] = lf.ConsoleOptions()

    lf.configure(**kwargs)
    _logfire = lf
    _configured = True


def instrument_app(app):
    """Wrap an ASGI app with logfire instrumentation. Returns the app unchanged if unavailable."""
    if not is_available():
        return app
    return _logfire.instrument_asgi(app)


@contextmanager
def span(name: str, **attrs: Any):
    """Context manager that yields a logfire span, or None if unavailable."""
    if is_available():
        with _logfire.span(name, **attrs) as s:
            yield s
    else:
        yield None


def info(msg: str, **kwargs: Any) -> None:
    if is_available():
        _logfire.info(msg, **kwargs)


def error(msg: str, **kwargs: Any) -> None:
    if is_available():
        _logfire.error(msg, **kwargs)


def warning(msg: str, **kwargs: Any) -> None:
    if is_available():
        _logfire.warn(msg, **kwargs)


def exception(msg: str, **kwargs: Any) -> bool:
    """Log an exception with traceback via logfire. Returns True if logged, False if unavailable."""
    if is_available():
        _logfire.exception(msg, **kwargs)
        return True
    return False


def redact(text: str, secret: str | None) -> str:
    """Replace every occurrence of *secret* in *text*."""
    if not secret:
        return text
    return text.replace(secret, REDACTED)


class CredentialRedactingFilter(logging.Filter):
    """Logging filter that scrubs a secret from formatted log messages."""

    def __init__(self, secret: str | None) -> None:
        super().__init__()
        self.secret = secret

    def filter(self, record: logging.LogRecord) -> bool:
        if self.secret:
            message = record.getMessage()
            if self.secret in message:
                record.msg = redact(message, self.secret)
                record.args = None
        return True


def install_redaction(secret: str | None, logger_names: tuple[str, ...] = ("httpx", "httpcore")) -> None:
    """Attach a redacting filter for *secret* to the given loggers (once per secret)."""
    if not secret:
        return
    for name in logger_names:
        target = logging.getLogger(name)
        if any(
            isinstance(f, CredentialRedactingFilter) and f.secret == secret
            for f in target.filters
        ):
            continue
        target.addFilter(CredentialRedactingFilter(secret))
