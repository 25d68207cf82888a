"""Parsing of playlist pages into items, metadata and continuation cursors."""

import json
from typing import Any, Dict, List, Optional

from . import extractor
from .errors import ApiError, ParseError, PlaylistNotFoundError, PlaylistPrivateError
from .items import parse_item, parse_number, parse_text, prep_thumbnails
from .logging_config import get_logger
from .models import ContinuationCursor, FirstPage, Options, Page

logger = get_logger(__name__)

PLAYLIST_URL = "https://www.youtube.com/playlist?list="


def _error_alert_text(data: Dict[str, Any]) -> Optional[str]:
    for alert in data.get("alerts") or []:
        if not isinstance(alert, dict):
            continue
        for renderer in alert.values():
            if isinstance(renderer, dict) and renderer.get("type") == "ERROR":
                return parse_text(renderer.get("text"), "* no message *")
    return None


def check_alerts(data: Dict[str, Any]) -> None:
    """Raise the matching ApiError when YouTube served an error page.

    Error pages carry ``alerts`` but no ``contents``. Informational
    alerts shown next to real contents are ignored.

    Raises:
        PlaylistNotFoundError: If the playlist does not exist
        PlaylistPrivateError: If the playlist is private
        ApiError: For any other error alert
        ParseError: If the page has neither contents nor an error alert
    """
    if data.get("contents"):
        return
    text = _error_alert_text(data)
    if text is None:
        raise ParseError("Unsupported playlist")

    lowered = text.lower()
    if "does not exist" in lowered:
        raise PlaylistNotFoundError()
    if "private" in lowered:
        raise PlaylistPrivateError()
    raise ApiError(text)


def _first_list(data: Any, key: str) -> List[Any]:
    for value in extractor.find_key(data, key):
        if isinstance(value, list):
            return value
    return []


def _video_list(data: Dict[str, Any]) -> List[Any]:
    for renderer in extractor.find_key(data, "playlistVideoListRenderer"):
        if isinstance(renderer, dict) and isinstance(renderer.get("contents"), list):
            return renderer["contents"]
    return []


def find_continuation_token(entries: List[Any]) -> Optional[str]:
    """Find the token of the trailing continuation marker in a list of entries.

    The command may sit directly on the endpoint or be nested inside a
    command executor, so it is searched for rather than addressed by path.

    Returns:
        The token, or None when the list is the last page
    """
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        renderer = entry.get("continuationItemRenderer")
        if not isinstance(renderer, dict):
            continue
        for command in extractor.find_key(renderer, "continuationCommand"):
            if isinstance(command, dict) and command.get("token"):
                return command["token"]
    return None


def parse_items(entries: List[Any]) -> List[Dict[str, Any]]:
    items = []
    for entry in entries:
        if isinstance(entry, dict):
            item = parse_item(entry)
            if item is not None:
                items.append(item)
    return items


def _sidebar_renderer(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    sidebar = data.get("sidebar", {}).get("playlistSidebarRenderer", {})
    for entry in sidebar.get("items", []):
        if isinstance(entry, dict) and name in entry:
            return entry[name]
    return {}


def parse_info(data: Dict[str, Any], playlist_id: str) -> Dict[str, Any]:
    """Collect playlist metadata from the first page.

    Missing pieces come back as None rather than raising.
    """
    primary = _sidebar_renderer(data, "playlistSidebarPrimaryInfoRenderer")
    secondary = _sidebar_renderer(data, "playlistSidebarSecondaryInfoRenderer")
    metadata = data.get("metadata", {}).get("playlistMetadataRenderer", {})

    stats = primary.get("stats") or []
    thumbnail_renderer = primary.get("thumbnailRenderer", {})
    thumbnail_source = (
        thumbnail_renderer.get("playlistVideoThumbnailRenderer")
        or thumbnail_renderer.get("playlistCustomThumbnailRenderer")
        or {}
    )
    thumbnails = prep_thumbnails(thumbnail_source.get("thumbnail", {}).get("thumbnails", []))

    owner = secondary.get("videoOwner", {}).get("videoOwnerRenderer")
    author = None
    if owner:
        owner_runs = owner.get("title", {}).get("runs") or [{}]
        owner_endpoint = owner_runs[0].get("navigationEndpoint", {})
        avatars = prep_thumbnails(owner.get("thumbnail", {}).get("thumbnails", []))
        canonical = owner_endpoint.get("browseEndpoint", {}).get("canonicalBaseUrl")
        author = {
            "name": parse_text(owner.get("title")),
            "url": f"https://www.youtube.com{canonical}" if canonical else None,
            "channel_id": owner_endpoint.get("browseEndpoint", {}).get("browseId"),
            "avatars": avatars,
            "best_avatar": avatars[0] if avatars else None,
        }

    return {
        "id": playlist_id,
        "url": f"{PLAYLIST_URL}{playlist_id}",
        "title": parse_text(primary.get("title")) or metadata.get("title"),
        "total_items": parse_number(stats[0]) if stats else None,
        "views": parse_number(stats[1]) if len(stats) == 3 else 0,
        "last_updated": parse_text(stats[-1]) if stats else None,
        "description": parse_text(primary.get("description")) or metadata.get("description"),
        "visibility": "unlisted" if "UNLISTED" in json.dumps(primary.get("badges", [])) else "everyone",
        "thumbnails": thumbnails,
        "best_thumbnail": thumbnails[0] if thumbnails else None,
        "author": author,
    }


def parse_first(html: str, playlist_id: str, options: Options) -> FirstPage:
    """Parse the first page of a playlist.

    Args:
        html: Raw HTML of the playlist page
        playlist_id: Canonical id the page was requested for
        options: Options of the request, embedded in the returned cursor

    Returns:
        FirstPage with items, metadata and the cursor for page two (or None)

    Raises:
        ParseError: If the page carries no embedded data
        ApiError: If YouTube reports the playlist missing or private
    """
    body = extractor.parse_body(html, options.gl, options.hl)
    if body.data is None:
        raise ParseError("Unsupported playlist")
    check_alerts(body.data)

    entries = _video_list(body.data)
    items = parse_items(entries)
    token = find_continuation_token(entries)
    logger.debug("First page of %s: %d items, continuation=%s", playlist_id, len(items), bool(token))

    continuation = None
    if token:
        if not body.api_key:
            raise ParseError("Unable to find the api key")
        continuation = ContinuationCursor(
            api_key=body.api_key, token=token, context=body.context, options=options
        )
    return FirstPage(items=items, continuation=continuation, info=parse_info(body.data, playlist_id))


def parse_continuation(payload: Dict[str, Any], cursor: ContinuationCursor) -> Page:
    """Parse a browse API response to a continuation request.

    A response without continuation items is treated as the end of the
    list, not as an error.

    Args:
        payload: Decoded JSON response
        cursor: Cursor the request was made with

    Returns:
        Page with the items and the cursor for the following page (or None)
    """
    entries = _first_list(payload, "continuationItems")
    items = parse_items(entries)
    token = find_continuation_token(entries)
    logger.debug("Continuation page: %d items, continuation=%s", len(items), bool(token))
    return Page(items=items, continuation=cursor.with_token(token) if token else None)
