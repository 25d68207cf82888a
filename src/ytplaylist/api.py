"""Public entry points for fetching YouTube playlists."""

import logging
from typing import Any, Dict, Optional

from . import config, resolver
from .fetcher import PageFetcher
from .models import Options, PlaylistResult
from .pagination import PageCallback, Paginator

logger = logging.getLogger(__name__)


def get_playlist(
    reference: str,
    limit: Optional[int] = None,
    pages: Optional[int] = None,
    gl: Optional[str] = None,
    hl: Optional[str] = None,
    request_options: Optional[Dict[str, Any]] = None,
    on_page: Optional[PageCallback] = None,
) -> PlaylistResult:
    """Get the items of a playlist.

    Args:
        reference: Playlist id, channel id or YouTube url
        limit: Maximum number of items to collect
        pages: Maximum number of pages to fetch; overrides ``limit``
        gl: Country code sent with every request
        hl: Interface language sent with every request
        request_options: Transport overrides, e.g. ``{"headers": {...}}``
        on_page: Progress callback receiving (pages fetched, items collected)

    Returns:
        PlaylistResult with items, metadata and a continuation cursor

    Raises:
        InvalidInputError: If an argument is unusable
        ReferenceResolutionError: If the reference cannot be resolved
        ApiError: If the playlist does not exist or is private
        httpx.HTTPError: If a request fails
    """
    options = Options(
        limit=limit,
        pages=pages,
        gl=gl or config.DEFAULT_GL,
        hl=hl or config.DEFAULT_HL,
        request_options=request_options or {},
    )
    with PageFetcher() as fetcher:
        return PlaylistAPI(fetcher).get_playlist(reference, options, on_page=on_page)


def continue_request(cursor: Any) -> PlaylistResult:
    """Fetch the page after a previously returned continuation cursor.

    Args:
        cursor: ContinuationCursor or its list form

    Returns:
        PlaylistResult with one page of items and the next cursor

    Raises:
        ContinuationValidationError: If the cursor is malformed
        httpx.HTTPError: If the request fails
    """
    with PageFetcher() as fetcher:
        return PlaylistAPI(fetcher).continue_request(cursor)


def get_playlist_id(reference: str) -> str:
    """Resolve a reference to a canonical playlist id.

    Raises:
        InvalidInputError: If the reference is not a non-empty string
        ReferenceResolutionError: If the reference cannot be resolved
    """
    with PageFetcher() as fetcher:
        return PlaylistAPI(fetcher).get_playlist_id(reference)


def validate_id(reference: Any) -> bool:
    """Check whether a reference looks resolvable. Never raises."""
    return resolver.validate_id(reference)


class PlaylistAPI:
    """Playlist operations bound to one fetcher."""

    def __init__(self, fetcher: PageFetcher):
        """Initialize API wrapper.

        Args:
            fetcher: Page fetcher used for all requests
        """
        self.fetcher = fetcher
        self.paginator = Paginator(fetcher)

    def get_playlist_id(self, reference: str) -> str:
        return resolver.resolve(reference, self.fetcher)

    def get_playlist(
        self,
        reference: str,
        options: Optional[Options] = None,
        on_page: Optional[PageCallback] = None,
    ) -> PlaylistResult:
        """Resolve a reference and collect its items.

        Args:
            reference: Playlist id, channel id or YouTube url
            options: Request options, defaults to an unlimited request
            on_page: Progress callback

        Returns:
            PlaylistResult
        """
        playlist_id = self.get_playlist_id(reference)
        if playlist_id != reference:
            logger.debug("Resolved %s to %s", reference, playlist_id)
        return self.paginator.run(playlist_id, options or Options(), on_page=on_page)

    def continue_request(self, cursor: Any) -> PlaylistResult:
        return self.paginator.continue_run(cursor)
