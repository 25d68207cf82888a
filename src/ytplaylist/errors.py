"""Error taxonomy and error handling utilities."""

import functools
import time
from typing import Any, Callable, Optional, TypeVar

import httpx

from .logging_config import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

# Network failures are raised by httpx and passed through untouched.
TransportError = httpx.HTTPError


class PlaylistError(Exception):
    """Base class for ytplaylist errors."""

    pass


class InvalidInputError(PlaylistError):
    """Error raised when a caller passes an unusable argument."""

    pass


class ParseError(PlaylistError):
    """Error raised when a page carries no usable embedded data."""

    pass


class ReferenceResolutionError(PlaylistError):
    """Base class for errors turning a reference into a playlist id."""

    pass


class UnknownLinkError(ReferenceResolutionError):
    """Error raised for links outside the known YouTube hosts or shapes."""

    def __init__(self, message: str = "not a known youtube link"):
        super().__init__(message)


class MissingIdError(ReferenceResolutionError):
    """Error raised when a link has no usable id in its path."""

    def __init__(self, reference: str):
        self.reference = reference
        super().__init__(f'Unable to find a id in "{reference}"')


class InvalidListQueryError(ReferenceResolutionError):
    """Error raised when the list query parameter is not a known list id."""

    def __init__(self, message: str = "invalid or unknown list query in url"):
        super().__init__(message)


class MixesNotSupportedError(ReferenceResolutionError):
    """Error raised for radio mixes, which cannot be enumerated."""

    def __init__(self, message: str = "Mixes not supported"):
        super().__init__(message)


class UnresolvableReferenceError(ReferenceResolutionError):
    """Error raised when a user or short-channel page has no channel id."""

    def __init__(self, reference: str):
        self.reference = reference
        super().__init__(f"unable to resolve the ref: {reference}")


class ApiError(PlaylistError):
    """Error reported by YouTube itself on the playlist page."""

    def __init__(self, reason: str):
        """Initialize error.

        Args:
            reason: Message shown by YouTube, without the API-Error prefix
        """
        self.reason = reason
        super().__init__(f"API-Error: {reason}")


class PlaylistNotFoundError(ApiError):
    """Error raised when the playlist does not exist."""

    def __init__(self, reason: str = "The playlist does not exist."):
        super().__init__(reason)


class PlaylistPrivateError(ApiError):
    """Error raised when the playlist is private."""

    def __init__(self, reason: str = "This playlist is private."):
        super().__init__(reason)


class ContinuationValidationError(PlaylistError):
    """Base class for malformed continuation cursors."""

    default_message = "invalid continuation"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)


class InvalidContinuationError(ContinuationValidationError):
    default_message = "invalid continuation array"


class InvalidApiKeyError(ContinuationValidationError):
    default_message = "invalid apiKey"


class InvalidTokenError(ContinuationValidationError):
    default_message = "invalid token"


class InvalidContextError(ContinuationValidationError):
    default_message = "invalid context"


class InvalidOptionsError(ContinuationValidationError):
    default_message = "invalid opts"


class PagedOnlyError(ContinuationValidationError):
    default_message = "continueReq only allowed for paged requests"


def with_retry(
    max_retries: int = 3,
    initial_delay: float = 2.0,
    max_delay: float = 60.0,
    backoff_factor: float = 2.0,
    retryable_exceptions: Optional[tuple] = None,
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Decorator to retry a function on failure.

    The library never retries on its own; callers wrap a top-level call
    (or a continuation request with their last good cursor) in this.

    Args:
        max_retries: Maximum number of retries
        initial_delay: Initial delay between retries in seconds
        max_delay: Maximum delay between retries in seconds
        backoff_factor: Factor to multiply delay by after each retry
        retryable_exceptions: Tuple of exceptions to retry on

    Returns:
        Decorated function
    """
    if retryable_exceptions is None:
        retryable_exceptions = (httpx.TransportError,)

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            delay = initial_delay
            last_exception = None

            for attempt in range(max_retries + 1):  # +1 for initial attempt
                try:
                    return func(*args, **kwargs)
                except retryable_exceptions as e:
                    last_exception = e
                    if attempt < max_retries:
                        logger.warning(
                            "Error in %s: %s. Retrying in %s seconds... (attempt %d/%d)",
                            func.__name__,
                            str(e),
                            delay,
                            attempt + 1,
                            max_retries,
                        )
                        time.sleep(delay)
                        delay = min(delay * backoff_factor, max_delay)
                    else:
                        logger.error(
                            "Error in %s: %s. Max retries (%d) exceeded.",
                            func.__name__,
                            str(e),
                            max_retries,
                        )
                        raise

            raise last_exception

        return wrapper

    return decorator
