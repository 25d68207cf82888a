"""Mapping of raw playlist renderers to item dictionaries."""

import re
from typing import Any, Dict, List, Optional
from urllib.parse import urljoin

VIDEO_BASE_URL = "https://www.youtube.com/watch?v="
_BASE_URL = "https://www.youtube.com/"


def parse_text(text: Any, default: Optional[str] = None) -> Optional[str]:
    """Flatten a YouTube text object (``simpleText`` or ``runs``) to a string."""
    if not isinstance(text, dict):
        return default
    if "simpleText" in text:
        return text["simpleText"]
    runs = text.get("runs")
    if runs:
        return "".join(run.get("text", "") for run in runs)
    return default


def parse_number(text: Any) -> Optional[int]:
    """Read the digits of a text object such as ``"1,234 views"``."""
    value = parse_text(text) if isinstance(text, dict) else text
    if not isinstance(value, str):
        return None
    digits = re.sub(r"\D", "", value)
    return int(digits) if digits else None


def _parse_int(value: Any) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def prep_thumbnails(thumbnails: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Return thumbnails largest first with absolute urls."""
    prepared = []
    for thumb in thumbnails or []:
        url = thumb.get("url")
        if not url:
            continue
        prepared.append({
            "url": urljoin(_BASE_URL, url),
            "width": thumb.get("width"),
            "height": thumb.get("height"),
        })
    return sorted(prepared, key=lambda t: t["width"] or 0, reverse=True)


def _command_url(endpoint: Dict[str, Any]) -> Optional[str]:
    url = (
        endpoint.get("commandMetadata", {})
        .get("webCommandMetadata", {})
        .get("url")
    )
    return urljoin(_BASE_URL, url) if url else None


def parse_item(renderer: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """Map one entry of a playlist list to an item dictionary.

    Args:
        renderer: Single-key dictionary such as ``{"playlistVideoRenderer": {...}}``

    Returns:
        Item dictionary, or None for continuation markers, unknown
        renderers and deleted or private videos (they have no owner)
    """
    info = renderer.get("playlistVideoRenderer")
    if not isinstance(info, dict):
        return None
    byline = info.get("shortBylineText") or {}
    runs = byline.get("runs") or []
    if not runs:
        return None

    owner = runs[0]
    owner_endpoint = owner.get("navigationEndpoint", {})
    thumbnails = prep_thumbnails(info.get("thumbnail", {}).get("thumbnails", []))
    overlays = info.get("thumbnailOverlays") or []
    is_live = any(
        overlay.get("thumbnailOverlayTimeStatusRenderer", {}).get("style") == "LIVE"
        for overlay in overlays
    )
    video_id = info.get("videoId")

    return {
        "title": parse_text(info.get("title"), ""),
        "index": parse_number(info.get("index")),
        "id": video_id,
        "short_url": f"{VIDEO_BASE_URL}{video_id}",
        "url": _command_url(info.get("navigationEndpoint", {})) or f"{VIDEO_BASE_URL}{video_id}",
        "author": {
            "name": owner.get("text"),
            "url": _command_url(owner_endpoint),
            "channel_id": owner_endpoint.get("browseEndpoint", {}).get("browseId"),
        },
        "thumbnails": thumbnails,
        "best_thumbnail": thumbnails[0] if thumbnails else None,
        "is_live": is_live,
        "duration": parse_text(info.get("lengthText")),
        "duration_sec": _parse_int(info.get("lengthSeconds")),
        "is_playable": bool(info.get("isPlayable", False)),
    }
