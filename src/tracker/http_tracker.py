import asyncio
import logging
import urllib.parse
from typing import List

import aiohttp

from .errors import NetworkError
from .messages import AnnounceState, TrackerResponse
from .utils import PeerAddress, urlencode_bytes

logger = logging.getLogger(__name__)


class HTTPTrackerClient:
    """
    Announces a torrent to its HTTP tracker and decodes the compact peer list.

    Each announce is a single GET; there are no retries and no state kept
    between calls.
    """
    def __init__(self, torrent, url: str = None):
        self.torrent = torrent
        self.url = url if url else torrent.announce

        if not self.url:
            raise ValueError("No announce URL provided for HTTPTrackerClient")

    def build_url(self, state: AnnounceState) -> str:
        # info_hash is raw bytes: every byte is %-escaped, never form-encoded
        query = "info_hash=" + urlencode_bytes(self.torrent.info_hash)
        query += "&" + urllib.parse.urlencode(state.params())

        separator = "&" if "?" in self.url else "?"
        return f"{self.url}{separator}{query}"

    async def fetch(self, state: AnnounceState) -> TrackerResponse:
        full_url = self.build_url(state)
        logger.debug("[Tracker] Final announce URL: %s", full_url)

        try:
            async with aiohttp.ClientSession() as session:
                async with session.get(full_url) as resp:
                    resp.raise_for_status()
                    data = await resp.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise NetworkError(f"Announce to {self.url} failed: {exc}") from exc

        logger.debug("[Tracker] Decoding %d byte response...", len(data))
        response = TrackerResponse.from_bytes(data)
        logger.debug(
            "[Tracker] %s returned %d peers (interval %ds)",
            self.url, len(response.peers), response.interval,
        )
        return response

    async def announce(self, state: AnnounceState) -> List[PeerAddress]:
        response = await self.fetch(state)
        return response.peers
