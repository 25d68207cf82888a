"""Fetch the items of YouTube playlists through the web interface."""

__version__ = "0.1.0"

# Import all public components
from .api import PlaylistAPI, continue_request, get_playlist, get_playlist_id, validate_id
from .errors import (  # noqa: F401
    ApiError,
    ContinuationValidationError,
    InvalidInputError,
    ParseError,
    PlaylistError,
    PlaylistNotFoundError,
    PlaylistPrivateError,
    ReferenceResolutionError,
    TransportError,
)
from .fetcher import PageFetcher
from .logging_config import configure_logging, get_logger
from .models import ContinuationCursor, Options, PlaylistResult
from .pagination import Paginator

# Configure logging
configure_logging()
