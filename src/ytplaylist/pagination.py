"""Fetch, parse and continue loop over the pages of a playlist."""

from typing import Any, Callable, List, Optional

from .fetcher import PageFetcher
from .logging_config import get_logger
from .models import ContinuationCursor, Options, PlaylistResult
from .parser import parse_continuation, parse_first

logger = get_logger(__name__)

PageCallback = Callable[[int, int], None]


class Paginator:
    """Collects playlist items page by page.

    Each continuation request depends on the previous response, so pages
    are fetched strictly one after another. A paginator holds no state
    between calls.
    """

    def __init__(self, fetcher: PageFetcher):
        """Initialize paginator.

        Args:
            fetcher: Fetcher used for every request
        """
        self.fetcher = fetcher

    def run(
        self,
        playlist_id: str,
        options: Options,
        on_page: Optional[PageCallback] = None,
    ) -> PlaylistResult:
        """Fetch a playlist until a stopping condition is met.

        After every page, in this order:

        1. ``limit`` reached: truncate to ``limit`` items, no continuation.
        2. ``pages`` reached: keep the cursor of the last page so the caller
           can resume past its own page cap.
        3. The last page had no continuation: end of the list.
        4. Otherwise fetch the next page.

        Args:
            playlist_id: Canonical playlist id
            options: Request options
            on_page: Called with (pages fetched, items collected) after each page

        Returns:
            PlaylistResult with items in source order and playlist metadata

        Raises:
            ApiError: If the playlist does not exist or is private
            ParseError: If the first page cannot be read
            httpx.HTTPError: If a request fails
        """
        logger.info("Fetching playlist %s", playlist_id)
        first = parse_first(self.fetcher.fetch_first(playlist_id, options), playlist_id, options)
        items: List[Any] = list(first.items)
        cursor = first.continuation
        pages_fetched = 1

        while True:
            if on_page:
                on_page(pages_fetched, len(items))

            if options.limit is not None and len(items) >= options.limit:
                logger.debug("Limit of %d items reached", options.limit)
                return PlaylistResult(items=items[: options.limit], continuation=None, info=first.info)
            if options.pages is not None and pages_fetched >= options.pages:
                logger.debug("Page cap of %d reached", options.pages)
                return PlaylistResult(items=items, continuation=cursor, info=first.info)
            if cursor is None:
                return PlaylistResult(items=items, continuation=None, info=first.info)

            page = parse_continuation(self.fetcher.fetch_continuation(cursor), cursor)
            items.extend(page.items)
            cursor = page.continuation
            pages_fetched += 1
            logger.debug("Fetched page %d of %s, %d items so far", pages_fetched, playlist_id, len(items))

    def continue_run(self, cursor: Any) -> PlaylistResult:
        """Fetch exactly one page from a previously returned cursor.

        Args:
            cursor: ContinuationCursor or its list form
                ``[api_key, token, context, options]``

        Returns:
            PlaylistResult with that page's items and the next cursor

        Raises:
            ContinuationValidationError: If the cursor is malformed or was
                produced by a limit-bounded request
            httpx.HTTPError: If the request fails
        """
        current = ContinuationCursor.from_list(cursor)
        page = parse_continuation(self.fetcher.fetch_continuation(current), current)
        logger.info("Fetched continuation page with %d items", len(page.items))
        return PlaylistResult(items=page.items, continuation=page.continuation)
