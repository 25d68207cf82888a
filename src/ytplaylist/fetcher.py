"""HTTP access to the playlist page and the browse API."""

from typing import Any, Dict, Optional

import httpx

from . import config
from .logging_config import get_logger
from .models import ContinuationCursor, Options

logger = get_logger(__name__)


class PageFetcher:
    """Fetches raw playlist pages over a single httpx client.

    Requests are issued one at a time and never retried; HTTP and network
    errors from httpx propagate unchanged.
    """

    def __init__(
        self,
        client: Optional[httpx.Client] = None,
        host: str = config.YOUTUBE_HOST,
        timeout: float = config.REQUEST_TIMEOUT,
    ):
        """Initialize fetcher.

        Args:
            client: Existing httpx client to use. When omitted the fetcher
                creates one and closes it in ``close``.
            host: Base url of the site
            timeout: Request timeout in seconds for a created client
        """
        self.host = host.rstrip("/")
        self._owns_client = client is None
        self.client = client or httpx.Client(timeout=timeout, follow_redirects=True)

    def __enter__(self) -> "PageFetcher":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self.client.close()

    def _headers(self, options: Options) -> Dict[str, str]:
        headers = {
            "User-Agent": config.USER_AGENT,
            "Accept-Language": f"{options.hl}-{options.gl},{options.hl};q=0.9",
        }
        headers.update(options.headers)
        return headers

    def fetch_first(self, playlist_id: str, options: Options) -> str:
        """Fetch the HTML of the first playlist page.

        Args:
            playlist_id: Canonical playlist id
            options: Request options providing locale and headers

        Returns:
            Page HTML

        Raises:
            httpx.HTTPError: If the request fails
        """
        url = f"{self.host}{config.PLAYLIST_PATH}"
        params = {"gl": options.gl, "hl": options.hl, "list": playlist_id}
        logger.debug("GET %s list=%s", url, playlist_id)
        response = self.client.get(url, params=params, headers=self._headers(options))
        response.raise_for_status()
        return response.text

    def fetch_continuation(self, cursor: ContinuationCursor) -> Dict[str, Any]:
        """Request the page a continuation cursor points at.

        Args:
            cursor: Cursor carrying api key, token, context and options

        Returns:
            Decoded JSON response

        Raises:
            httpx.HTTPError: If the request fails
        """
        url = f"{self.host}{config.API_PATH}"
        body = {"context": cursor.context, "continuation": cursor.token}
        logger.debug("POST %s", url)
        response = self.client.post(
            url,
            params={"key": cursor.api_key},
            json=body,
            headers=self._headers(cursor.options),
        )
        response.raise_for_status()
        return response.json()

    def fetch_profile(self, kind: str, name: str) -> str:
        """Fetch a legacy user page or a short channel page.

        Args:
            kind: Path segment, ``user`` or ``c``
            name: User or channel name

        Returns:
            Page HTML

        Raises:
            httpx.HTTPError: If the request fails
        """
        url = f"{self.host}/{kind}/{name}"
        logger.debug("GET %s", url)
        response = self.client.get(url, headers={"User-Agent": config.USER_AGENT})
        response.raise_for_status()
        return response.text
