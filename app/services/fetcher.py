import asyncio
import logging

import httpx

from app.config.settings import Config
from app.core.errors import FetchError
from app.models.internal import MediaPayload
from app.utils.http_retry import UA_CHROME
from app.utils.url import safe_url_for_log

logger = logging.getLogger(__name__)

MAX_CONTENT_BYTES = 100 * 1024 * 1024


class MediaFetcher:
    """
    Downloads the resolved video into memory.
    Bounded by a timeout and a payload cap; never retries.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        timeout: float = 30.0,
        max_bytes: int = MAX_CONTENT_BYTES
    ):
        self.client = client
        self.timeout = timeout
        self.max_bytes = max_bytes

    @classmethod
    def from_config(cls, client: httpx.AsyncClient, config: Config) -> "MediaFetcher":
        return cls(
            client,
            timeout=config.download.timeout_seconds,
            max_bytes=config.download.max_content_bytes
        )

    @staticmethod
    def _headers() -> dict:
        return {
            "Range": "bytes=0-",
            "User-Agent": UA_CHROME,
        }

    async def fetch(self, video_url: str) -> MediaPayload:
        """The timeout bounds the whole transfer, not each read"""
        try:
            return await asyncio.wait_for(self._download(video_url), timeout=self.timeout)
        except (
            FetchError,
            asyncio.TimeoutError,
            httpx.HTTPError,
            httpx.InvalidURL,
            httpx.StreamError
        ) as e:
            if isinstance(e, FetchError):
                reason = e.message
            elif isinstance(e, asyncio.TimeoutError):
                reason = "timed out"
            else:
                reason = str(e) or type(e).__name__
            logger.error(
                f"Video fetch error: {reason} (url={safe_url_for_log(video_url)})",
                extra={"url": safe_url_for_log(video_url), "error": reason}
            )
            raise FetchError(f"Failed to fetch video: {reason}") from e

    async def _download(self, video_url: str) -> MediaPayload:
        req = self.client.build_request(
            "GET",
            video_url,
            headers=self._headers(),
            timeout=self.timeout
        )
        resp = await self.client.send(req, stream=True)
        try:
            return await self._read_payload(resp)
        finally:
            await resp.aclose()

    async def _read_payload(self, resp: httpx.Response) -> MediaPayload:
        if not resp.is_success:
            raise FetchError(f"Request failed with status code {resp.status_code}")

        declared = resp.headers.get("content-length")
        if declared and declared.isdigit() and int(declared) > self.max_bytes:
            raise FetchError(f"Response exceeds maximum size of {self.max_bytes} bytes")

        chunks = []
        received = 0
        async for chunk in resp.aiter_bytes():
            received += len(chunk)
            if received > self.max_bytes:
                raise FetchError(f"Response exceeds maximum size of {self.max_bytes} bytes")
            chunks.append(chunk)

        return MediaPayload(
            content=b"".join(chunks),
            content_type=resp.headers.get("content-type"),
            content_length=declared
        )
