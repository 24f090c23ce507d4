"""Error taxonomy for sentimetrics.

Network adapters translate transport failures into these classes so callers
never have to catch `requests` exceptions directly.
"""

from __future__ import annotations

from typing import Optional


class SentimetricsError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(SentimetricsError):
    """A required credential or setting is missing. Never retried."""


class NewsFetchError(SentimetricsError):
    """Base class for news acquisition failures."""


class RateLimitError(SentimetricsError):
    """Upstream answered HTTP 429 (news provider or sentiment service)."""


class NetworkError(SentimetricsError):
    """The remote service could not be reached."""


class NetworkTimeoutError(NetworkError):
    """The remote service did not answer within the configured timeout."""


class ProviderError(NewsFetchError):
    """Non-success response that is not rate limiting."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class NoArticlesError(NewsFetchError):
    """The provider answered successfully but returned zero articles."""


class RetryExhaustedError(NewsFetchError):
    """All retry attempts failed; `last_error` holds the final cause."""

    def __init__(self, attempts: int, last_error: Optional[BaseException]) -> None:
        detail = str(last_error) if last_error is not None else "unknown error"
        super().__init__(f"Failed to fetch news after {attempts} attempts: {detail}")
        self.attempts = attempts
        self.last_error = last_error


class SentimentServiceError(SentimetricsError):
    """The sentiment (text-generation) service call failed."""


class MalformedResponseError(SentimetricsError):
    """The sentiment service reply does not follow the expected line grammar."""

    def __init__(self, message: str, line_no: Optional[int] = None) -> None:
        if line_no is not None:
            message = f"{message} (line {line_no})"
        super().__init__(message)
        self.line_no = line_no
