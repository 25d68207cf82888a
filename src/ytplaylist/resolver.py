"""Resolution of user supplied references to canonical playlist ids.

A reference is first classified into one of the parsed shapes below
without touching the network. ``resolve`` then maps each shape to an id
or to its error; ``validate_id`` only reports whether the shape can be
resolved.
"""

import re
from dataclasses import dataclass
from typing import Optional, Union
from urllib.parse import parse_qs, urljoin, urlsplit

from . import extractor
from .errors import (
    InvalidInputError,
    InvalidListQueryError,
    MissingIdError,
    MixesNotSupportedError,
    UnknownLinkError,
    UnresolvableReferenceError,
)
from .fetcher import PageFetcher
from .logging_config import get_logger

logger = get_logger(__name__)

PLAYLIST_REGEX = re.compile(r"^(FL|PL|UU|LL|RD)[a-zA-Z0-9_-]{16,41}$")
ALBUM_REGEX = re.compile(r"^OLAK5uy_[a-zA-Z0-9_-]{33}$")
CHANNEL_REGEX = re.compile(r"^UC[a-zA-Z0-9_-]{22,32}$")

BASE_URL = "https://www.youtube.com/"
YT_HOSTS = ("www.youtube.com", "youtube.com", "m.youtube.com", "music.youtube.com")
PROFILE_KINDS = ("user", "c")


@dataclass(frozen=True)
class RawId:
    value: str


@dataclass(frozen=True)
class ListQuery:
    value: str
    reference: str


@dataclass(frozen=True)
class ChannelPath:
    channel_id: str
    reference: str


@dataclass(frozen=True)
class ProfilePath:
    kind: str
    name: str
    reference: str


@dataclass(frozen=True)
class MissingId:
    reference: str


@dataclass(frozen=True)
class UnknownLink:
    reference: str


ParsedReference = Union[RawId, ListQuery, ChannelPath, ProfilePath, MissingId, UnknownLink]


def is_playlist_id(value: str) -> bool:
    """Check whether a value is a playlist or album id."""
    return bool(PLAYLIST_REGEX.fullmatch(value) or ALBUM_REGEX.fullmatch(value))


def is_channel_id(value: str) -> bool:
    return bool(CHANNEL_REGEX.fullmatch(value))


def to_uploads(playlist_id: str) -> str:
    """Turn a channel id into the id of its uploads list.

    Ids that are not channel ids are returned unchanged.
    """
    if is_channel_id(playlist_id):
        return f"UU{playlist_id[2:]}"
    return playlist_id


def classify(reference: str) -> ParsedReference:
    """Classify a reference by its shape.

    Args:
        reference: Raw id or YouTube url

    Returns:
        The parsed reference variant

    Raises:
        InvalidInputError: If the reference is not a non-empty string
    """
    if not isinstance(reference, str) or not reference:
        raise InvalidInputError("The reference has to be a non-empty string")

    if is_playlist_id(reference) or is_channel_id(reference):
        return RawId(reference)

    try:
        parts = urlsplit(urljoin(BASE_URL, reference))
        hostname = parts.hostname
    except ValueError:
        return UnknownLink(reference)
    if (hostname or "").lower() not in YT_HOSTS:
        return UnknownLink(reference)

    query = parse_qs(parts.query, keep_blank_values=True)
    if "list" in query:
        return ListQuery(query["list"][0], reference)

    segments = parts.path[1:].split("/")
    if len(segments) < 2 or not all(segments):
        return MissingId(reference)

    kind, value = segments[-2], segments[-1]
    if kind == "channel" and is_channel_id(value):
        return ChannelPath(value, reference)
    if kind in PROFILE_KINDS:
        return ProfilePath(kind, value, reference)
    return MissingId(reference)


def validate_id(reference) -> bool:
    """Check whether a reference can be resolved, without any network access.

    Never raises. Profile urls (``/user/`` and ``/c/``) count as valid
    since only their resolution needs a request.
    """
    try:
        parsed = classify(reference)
    except InvalidInputError:
        return False

    if isinstance(parsed, ListQuery):
        return is_playlist_id(parsed.value) or is_channel_id(parsed.value)
    return isinstance(parsed, (RawId, ChannelPath, ProfilePath))


def _resolve_profile(parsed: ProfilePath, fetcher: PageFetcher) -> str:
    logger.info("Resolving %s/%s to a channel", parsed.kind, parsed.name)
    html = fetcher.fetch_profile(parsed.kind, parsed.name)
    channel_id = extractor.find_browse_id(html)
    if not channel_id or not is_channel_id(channel_id):
        raise UnresolvableReferenceError(parsed.reference)
    return to_uploads(channel_id)


def resolve(reference: str, fetcher: Optional[PageFetcher] = None) -> str:
    """Resolve a reference to a canonical playlist id.

    Channel ids and channel urls resolve to the channel's uploads list.
    User and short-channel urls cost one request to find their channel.

    Args:
        reference: Raw id or YouTube url
        fetcher: Fetcher used for user and short-channel pages. A
            temporary one is created when needed and omitted.

    Returns:
        Canonical playlist id

    Raises:
        InvalidInputError: If the reference is not a non-empty string
        ReferenceResolutionError: The matching subclass when the reference
            cannot be resolved
        httpx.HTTPError: If the profile page request fails
    """
    parsed = classify(reference)

    if isinstance(parsed, RawId):
        return to_uploads(parsed.value)
    if isinstance(parsed, UnknownLink):
        raise UnknownLinkError()
    if isinstance(parsed, ListQuery):
        if is_playlist_id(parsed.value) or is_channel_id(parsed.value):
            return to_uploads(parsed.value)
        if parsed.value.startswith("RD"):
            raise MixesNotSupportedError()
        raise InvalidListQueryError()
    if isinstance(parsed, ChannelPath):
        return to_uploads(parsed.channel_id)
    if isinstance(parsed, ProfilePath):
        if fetcher is not None:
            return _resolve_profile(parsed, fetcher)
        with PageFetcher() as own_fetcher:
            return _resolve_profile(parsed, own_fetcher)
    raise MissingIdError(parsed.reference)
