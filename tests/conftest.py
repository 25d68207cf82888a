"""Common test fixtures: a fake youtube.com served through httpx.MockTransport."""

import json
from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import httpx
import pytest

from src.ytplaylist.fetcher import PageFetcher

PLAYLIST_ID = "PL0123456789ABCDEFGHIJKLMNOPQRSTUV"
CHANNEL_ID = "UCqwGaUvq_l0RKszeHhZ5leA"
UPLOADS_ID = "UUqwGaUvq_l0RKszeHhZ5leA"
API_KEY = "<apikey>"
CLIENT_VERSION = "<client_version>"
FIRST_TOKEN = "<firstContinuationToken>"
SECOND_TOKEN = "<secondContinuationToken>"


def text(value: str) -> Dict[str, Any]:
    return {"runs": [{"text": value}]}


def video_renderer(index: int) -> Dict[str, Any]:
    """Build a playlistVideoRenderer entry for the given 1-based index."""
    video_id = f"vid{index:08d}"
    return {
        "playlistVideoRenderer": {
            "videoId": video_id,
            "thumbnail": {
                "thumbnails": [
                    {"url": f"https://i.ytimg.com/vi/{video_id}/default.jpg", "width": 120, "height": 90},
                    {"url": f"https://i.ytimg.com/vi/{video_id}/hqdefault.jpg", "width": 480, "height": 360},
                ]
            },
            "title": text(f"Video {index}"),
            "index": {"simpleText": str(index)},
            "shortBylineText": {
                "runs": [
                    {
                        "text": "Some Channel",
                        "navigationEndpoint": {
                            "commandMetadata": {"webCommandMetadata": {"url": "/@somechannel"}},
                            "browseEndpoint": {"browseId": "UCabcdefghijklmnopqrstuv"},
                        },
                    }
                ]
            },
            "lengthText": {"simpleText": "3:25"},
            "lengthSeconds": "205",
            "navigationEndpoint": {
                "commandMetadata": {
                    "webCommandMetadata": {"url": f"/watch?v={video_id}&list={PLAYLIST_ID}&index={index}"}
                }
            },
            "isPlayable": True,
            "thumbnailOverlays": [
                {"thumbnailOverlayTimeStatusRenderer": {"style": "DEFAULT", "text": {"simpleText": "3:25"}}}
            ],
        }
    }


def continuation_renderer(token: str) -> Dict[str, Any]:
    return {
        "continuationItemRenderer": {
            "trigger": "CONTINUATION_TRIGGER_ON_ITEM_SHOWN",
            "continuationEndpoint": {
                "commandMetadata": {"webCommandMetadata": {"apiUrl": "/youtubei/v1/browse"}},
                "continuationCommand": {"token": token, "request": "CONTINUATION_REQUEST_TYPE_BROWSE"},
            },
        }
    }


def entries(count: int, start: int = 1, token: Optional[str] = None) -> List[Dict[str, Any]]:
    result = [video_renderer(i) for i in range(start, start + count)]
    if token:
        result.append(continuation_renderer(token))
    return result


def initial_data(video_entries: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Build the ytInitialData object of a playlist page."""
    return {
        "contents": {
            "twoColumnBrowseResultsRenderer": {
                "tabs": [
                    {
                        "tabRenderer": {
                            "selected": True,
                            "content": {
                                "sectionListRenderer": {
                                    "contents": [
                                        {
                                            "itemSectionRenderer": {
                                                "contents": [
                                                    {
                                                        "playlistVideoListRenderer": {
                                                            "contents": video_entries,
                                                            "playlistId": PLAYLIST_ID,
                                                        }
                                                    }
                                                ]
                                            }
                                        }
                                    ]
                                }
                            },
                        }
                    }
                ]
            }
        },
        "metadata": {
            "playlistMetadataRenderer": {"title": "Test Playlist", "description": "Meta description"}
        },
        "sidebar": {
            "playlistSidebarRenderer": {
                "items": [
                    {
                        "playlistSidebarPrimaryInfoRenderer": {
                            "title": text("Test Playlist"),
                            "stats": [
                                text("250 videos"),
                                {"simpleText": "1,234 views"},
                                text("Last updated on Jan 2, 2024"),
                            ],
                            "description": {"simpleText": "A playlist for tests"},
                            "thumbnailRenderer": {
                                "playlistVideoThumbnailRenderer": {
                                    "thumbnail": {
                                        "thumbnails": [
                                            {"url": "https://i.ytimg.com/pl/small.jpg", "width": 168, "height": 94},
                                            {"url": "https://i.ytimg.com/pl/large.jpg", "width": 336, "height": 188},
                                        ]
                                    }
                                }
                            },
                        }
                    },
                    {
                        "playlistSidebarSecondaryInfoRenderer": {
                            "videoOwner": {
                                "videoOwnerRenderer": {
                                    "thumbnail": {
                                        "thumbnails": [
                                            {"url": "https://yt3.ggpht.com/avatar.jpg", "width": 48, "height": 48}
                                        ]
                                    },
                                    "title": {
                                        "runs": [
                                            {
                                                "text": "Owner Name",
                                                "navigationEndpoint": {
                                                    "browseEndpoint": {
                                                        "browseId": CHANNEL_ID,
                                                        "canonicalBaseUrl": "/@owner",
                                                    }
                                                },
                                            }
                                        ]
                                    },
                                }
                            }
                        }
                    },
                ]
            }
        },
    }


def html_page(data: Dict[str, Any], api_key: Optional[str] = API_KEY) -> str:
    """Wrap a ytInitialData object into a page resembling youtube.com."""
    config = {"INNERTUBE_CONTEXT_CLIENT_VERSION": CLIENT_VERSION}
    if api_key:
        config["INNERTUBE_API_KEY"] = api_key
    ytcfg = json.dumps(config, separators=(",", ":"))
    return (
        "<!DOCTYPE html><html><head>"
        f"<script>ytcfg.set({ytcfg});</script>"
        "</head><body>"
        f"<script>var ytInitialData = {json.dumps(data)};</script>"
        "<script>var other = {\"not\": \"this\"};</script>"
        "</body></html>"
    )


def first_page_html(count: int = 100, token: Optional[str] = FIRST_TOKEN) -> str:
    return html_page(initial_data(entries(count, token=token)))


def continuation_payload(count: int = 100, start: int = 101, token: Optional[str] = SECOND_TOKEN) -> Dict[str, Any]:
    """Build a browse API response to a continuation request."""
    return {
        "responseContext": {"visitorData": "xyz"},
        "onResponseReceivedActions": [
            {
                "clickTrackingParams": "abc",
                "appendContinuationItemsAction": {
                    "continuationItems": entries(count, start=start, token=token),
                    "targetId": f"VL{PLAYLIST_ID}",
                },
            }
        ],
    }


def error_page_html(message: str) -> str:
    return html_page(
        {
            "alerts": [{"alertRenderer": {"type": "ERROR", "text": text(message)}}],
            "responseContext": {},
        }
    )


def user_page_html(channel_id: str = CHANNEL_ID) -> str:
    return (
        "<html><body><script>var ytInitialData = "
        + json.dumps(
            {
                "responseContext": {
                    "serviceTrackingParams": [
                        {"params": [{"key": "browse_id", "value": channel_id}]}
                    ]
                }
            },
            separators=(",", ":"),
        )
        + ";</script></body></html>"
    )


class FakeYouTube:
    """Request handler standing in for youtube.com."""

    def __init__(self):
        self.first_pages: Dict[str, str] = {}
        self.continuations: Dict[str, Dict[str, Any]] = {}
        self.profiles: Dict[str, str] = {}
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if request.method == "GET" and path == "/playlist":
            page = self.first_pages.get(request.url.params.get("list"))
            if page is not None:
                return httpx.Response(200, text=page)
        elif request.method == "POST" and path == "/youtubei/v1/browse":
            body = json.loads(request.content)
            payload = self.continuations.get(body.get("continuation"))
            if payload is not None:
                return httpx.Response(200, json=payload)
        elif request.method == "GET" and path in self.profiles:
            return httpx.Response(200, text=self.profiles[path])
        return httpx.Response(404, text="not found")

    def posts(self) -> List[Dict[str, Any]]:
        """Decoded JSON bodies of all continuation requests, in order."""
        return [json.loads(r.content) for r in self.requests if r.method == "POST"]


@pytest.fixture
def youtube() -> FakeYouTube:
    """Create an empty fake youtube.com."""
    return FakeYouTube()


@pytest.fixture
def fetcher(youtube):
    """Create a PageFetcher whose client talks to the fake site."""
    client = httpx.Client(transport=httpx.MockTransport(youtube))
    yield PageFetcher(client=client, host="https://www.youtube.com")
    client.close()


@pytest.fixture
def pages() -> SimpleNamespace:
    """Expose the page builders and fixture constants to tests."""
    return SimpleNamespace(
        PLAYLIST_ID=PLAYLIST_ID,
        CHANNEL_ID=CHANNEL_ID,
        UPLOADS_ID=UPLOADS_ID,
        API_KEY=API_KEY,
        CLIENT_VERSION=CLIENT_VERSION,
        FIRST_TOKEN=FIRST_TOKEN,
        SECOND_TOKEN=SECOND_TOKEN,
        video_renderer=video_renderer,
        continuation_renderer=continuation_renderer,
        entries=entries,
        initial_data=initial_data,
        html_page=html_page,
        first_page_html=first_page_html,
        continuation_payload=continuation_payload,
        error_page_html=error_page_html,
        user_page_html=user_page_html,
    )
