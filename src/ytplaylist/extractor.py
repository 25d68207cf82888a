"""Extraction of the state YouTube embeds in its HTML pages.

Playlist and channel pages ship their data as a ``ytInitialData``
JavaScript assignment, and the innertube API key and client version as
fragments of the ``ytcfg`` blob. This module pulls those out of the raw
HTML without an HTML parser.
"""

import json
import re
from dataclasses import dataclass
from typing import Any, Dict, Iterator, Optional

from .logging_config import get_logger

logger = get_logger(__name__)

# Matches the start of the assignment; the object itself is decoded with
# raw_decode so nested braces and strings are handled by the JSON parser.
# Handles: var ytInitialData = {...};
#          window["ytInitialData"] = {...};
_YT_INITIAL_DATA_RE = re.compile(r'(?:var\s+|window\["|)ytInitialData(?:"\])?\s*=\s*')

_API_KEY_MARKERS = ('INNERTUBE_API_KEY":"', 'innertubeApiKey":"')
_CLIENT_VERSION_MARKERS = (
    'INNERTUBE_CONTEXT_CLIENT_VERSION":"',
    'innertube_context_client_version":"',
)
_BROWSE_ID_MARKERS = ('{"key":"browse_id","value":"', '"externalId":"')

_decoder = json.JSONDecoder()


@dataclass
class PageBody:
    """State extracted from a playlist page."""

    data: Optional[Dict[str, Any]]
    api_key: Optional[str]
    context: Dict[str, Any]


def between(haystack: str, left: str, right: str) -> Optional[str]:
    """Return the text between the first ``left`` and the following ``right``.

    Args:
        haystack: Text to search
        left: Marker preceding the wanted text
        right: Marker following the wanted text

    Returns:
        The enclosed text, or None if either marker is missing
    """
    start = haystack.find(left)
    if start < 0:
        return None
    start += len(left)
    end = haystack.find(right, start)
    if end < 0:
        return None
    return haystack[start:end]


def _first_between(html: str, markers, right: str = '"') -> Optional[str]:
    for marker in markers:
        value = between(html, marker, right)
        if value:
            return value
    return None


def find_initial_data(html: str) -> Optional[Dict[str, Any]]:
    """Decode the ``ytInitialData`` object embedded in a page.

    Args:
        html: Raw page HTML

    Returns:
        The decoded object, or None when no well-formed assignment is found
    """
    for match in _YT_INITIAL_DATA_RE.finditer(html):
        start = match.end()
        if not html.startswith("{", start):
            continue
        try:
            data, _ = _decoder.raw_decode(html, start)
        except ValueError:
            logger.warning("Malformed ytInitialData JSON at offset %d", start)
            continue
        if isinstance(data, dict):
            return data
    return None


def find_api_key(html: str) -> Optional[str]:
    return _first_between(html, _API_KEY_MARKERS)


def find_client_version(html: str) -> Optional[str]:
    return _first_between(html, _CLIENT_VERSION_MARKERS)


def find_browse_id(html: str) -> Optional[str]:
    """Find the channel id a user or short-channel page resolves to."""
    return _first_between(html, _BROWSE_ID_MARKERS)


def build_post_context(client_version: Optional[str], gl: str, hl: str) -> Dict[str, Any]:
    """Build the ``context`` object the browse API expects in every POST body.

    Args:
        client_version: Web client version announced by the first page
        gl: Country code
        hl: Interface language

    Returns:
        Context dictionary, echoed back verbatim on every continuation
    """
    return {
        "client": {
            "utcOffsetMinutes": 0,
            "gl": gl,
            "hl": hl,
            "clientName": "WEB",
            "clientVersion": client_version,
        },
        "user": {},
        "request": {},
    }


def parse_body(html: str, gl: str, hl: str) -> PageBody:
    """Extract initial data, API key and post context from a playlist page."""
    return PageBody(
        data=find_initial_data(html),
        api_key=find_api_key(html),
        context=build_post_context(find_client_version(html), gl, hl),
    )


def find_key(obj: Any, key: str) -> Iterator[Any]:
    """Yield every value stored under ``key`` anywhere inside ``obj``.

    Walks nested dicts and lists depth-first in document order, so the
    first value yielded is the outermost, earliest occurrence.
    """
    stack = [obj]
    while stack:
        current = stack.pop()
        if isinstance(current, dict):
            if key in current:
                yield current[key]
            stack.extend(reversed(list(current.values())))
        elif isinstance(current, list):
            stack.extend(reversed(current))
