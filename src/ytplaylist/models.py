"""Data models shared by the fetcher, parser and paginator."""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional

from . import config
from .errors import (
    InvalidApiKeyError,
    InvalidContextError,
    InvalidContinuationError,
    InvalidInputError,
    InvalidOptionsError,
    InvalidTokenError,
    PagedOnlyError,
)


def _check_count(name: str, value: Any) -> Optional[int]:
    """Validate an optional positive integer option.

    Args:
        name: Option name used in the error message
        value: Value to check

    Returns:
        The value, or None when unset

    Raises:
        InvalidInputError: If the value is not a positive integer
    """
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise InvalidInputError(f"{name} has to be a positive integer")
    return value


@dataclass
class Options:
    """Options for a playlist request.

    ``limit`` bounds the number of collected items, ``pages`` the number
    of fetch rounds. A paged request is never limit-bounded, so setting
    ``pages`` clears ``limit``.
    """

    limit: Optional[int] = None
    pages: Optional[int] = None
    gl: str = config.DEFAULT_GL
    hl: str = config.DEFAULT_HL
    request_options: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.limit = _check_count("limit", self.limit)
        self.pages = _check_count("pages", self.pages)
        if self.pages is not None:
            self.limit = None
        if not isinstance(self.gl, str) or not self.gl:
            raise InvalidInputError("gl has to be a non-empty string")
        if not isinstance(self.hl, str) or not self.hl:
            raise InvalidInputError("hl has to be a non-empty string")
        if not isinstance(self.request_options, dict):
            raise InvalidInputError("request_options has to be a dict")

    @property
    def headers(self) -> Dict[str, str]:
        """Caller supplied headers merged onto every request."""
        return dict(self.request_options.get("headers") or {})

    @property
    def is_paged(self) -> bool:
        return self.limit is None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize options for a continuation cursor."""
        return {
            "limit": self.limit,
            "pages": self.pages,
            "gl": self.gl,
            "hl": self.hl,
            "request_options": dict(self.request_options),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Options":
        """Build options from a plain dictionary.

        Accepts the ``requestOptions`` spelling used by older cursors.
        """
        request_options = data.get("request_options")
        if request_options is None:
            request_options = data.get("requestOptions")
        return cls(
            limit=data.get("limit"),
            pages=data.get("pages"),
            gl=data.get("gl") or config.DEFAULT_GL,
            hl=data.get("hl") or config.DEFAULT_HL,
            request_options=request_options or {},
        )


@dataclass(frozen=True)
class ContinuationCursor:
    """Resumable state for fetching the page after the last one seen.

    Exposed to callers as the ordered list
    ``[api_key, token, context, options]``.
    """

    api_key: str
    token: str
    context: Dict[str, Any]
    options: Options

    def with_token(self, token: str) -> "ContinuationCursor":
        """Return a cursor for the next page sharing key, context and options."""
        return replace(self, token=token)

    def to_list(self) -> List[Any]:
        return [self.api_key, self.token, self.context, self.options.to_dict()]

    @classmethod
    def from_list(cls, data: Any) -> "ContinuationCursor":
        """Validate and load a cursor in its list form.

        Fields are checked in order: array shape, api key, token, context,
        options, and finally that the options describe a paged request.

        Args:
            data: Cursor as returned by ``to_list`` (or already a cursor)

        Returns:
            ContinuationCursor instance

        Raises:
            ContinuationValidationError: The matching subclass for the first
                malformed field
        """
        if isinstance(data, ContinuationCursor):
            return data
        if not isinstance(data, (list, tuple)) or len(data) != 4:
            raise InvalidContinuationError()

        api_key, token, context, options = data
        if not isinstance(api_key, str) or not api_key:
            raise InvalidApiKeyError()
        if not isinstance(token, str) or not token:
            raise InvalidTokenError()
        if not isinstance(context, dict):
            raise InvalidContextError()
        if isinstance(options, Options):
            options = options.to_dict()
        if not isinstance(options, dict):
            raise InvalidOptionsError()
        if options.get("limit") is not None:
            raise PagedOnlyError()

        try:
            parsed_options = Options.from_dict(options)
        except InvalidInputError as e:
            raise InvalidOptionsError(f"invalid opts: {e}") from e
        return cls(api_key=api_key, token=token, context=context, options=parsed_options)


@dataclass
class Page:
    """Items of one fetched page and the cursor for the page after it."""

    items: List[Dict[str, Any]] = field(default_factory=list)
    continuation: Optional[ContinuationCursor] = None


@dataclass
class FirstPage(Page):
    """First page of a playlist, which also carries the playlist metadata."""

    info: Dict[str, Any] = field(default_factory=dict)


@dataclass
class PlaylistResult:
    """Result of a playlist request."""

    items: List[Dict[str, Any]] = field(default_factory=list)
    continuation: Optional[ContinuationCursor] = None
    info: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Flatten into a JSON-ready dictionary with metadata at the top level."""
        result = dict(self.info)
        result["items"] = list(self.items)
        result["continuation"] = self.continuation.to_list() if self.continuation else None
        return result
