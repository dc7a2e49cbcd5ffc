import logging

from DayLog.config import Settings
from DayLog.formatters.base import LocalFormatter, SummaryFormatter
from DayLog.formatters.errors import (
    AuthenticationError,
    ContentError,
    EmptyNoteError,
    RemoteServerError,
    SummaryError,
    TransientError,
)
from DayLog.formatters.gemini import GeminiFormatter

log = logging.getLogger(__name__)

__all__ = [
    "AuthenticationError",
    "ContentError",
    "EmptyNoteError",
    "GeminiFormatter",
    "LocalFormatter",
    "RemoteServerError",
    "SummaryError",
    "SummaryFormatter",
    "TransientError",
    "get_formatter",
]


def get_formatter(settings: Settings) -> SummaryFormatter:
    """Pick the formatter for the configured provider. No API key means local."""
    if settings.provider == "local":
        return LocalFormatter()
    if not (settings.api_key or "").strip():
        log.warning("Remote provider selected but no API key is set. Falling back to the local formatter.")
        return LocalFormatter()
    return GeminiFormatter(settings)
