from typing import Optional


class SummaryError(Exception):
    """Base class for every failure reported to the user as 'Summary failed: ...'."""


class EmptyNoteError(SummaryError):
    pass


class AuthenticationError(SummaryError):
    pass


class RemoteServerError(SummaryError):
    def __init__(self, status: Optional[int], body: str):
        self.status = status
        self.body = body
        prefix = f"HTTP {status}" if status is not None else "Request failed"
        super().__init__(f"{prefix}: {body}")


class TransientError(RemoteServerError):
    """Server busy (HTTP 429 / 503). Retried before being raised."""


class ContentError(SummaryError):
    """The response was blocked or contained no usable text."""
