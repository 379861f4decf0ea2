import asyncio
import json
import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from app.config.settings import Config
from app.core.errors import ResolutionError
from app.models.response import VideoInfo
from app.utils.http_retry import UA_CHROME, HttpRetryClient, RetryPolicy, Sleep
from app.utils.url import safe_url_for_log

logger = logging.getLogger(__name__)

RESPONSE_LOG_MAX_CHARS = 500


class MetadataResolver:
    """Turns a reel URL into a VideoInfo via the upstream metadata API"""

    def __init__(
        self,
        client: httpx.AsyncClient,
        api_url: str,
        timeout: float = 15.0,
        policy: Optional[RetryPolicy] = None,
        sleep: Sleep = asyncio.sleep
    ):
        self.api_url = api_url
        self.timeout = timeout
        self.http = HttpRetryClient(client, policy, sleep=sleep)

    @classmethod
    def from_config(cls, client: httpx.AsyncClient, config: Config) -> "MetadataResolver":
        upstream = config.upstream
        policy = RetryPolicy.build(
            upstream.retries,
            upstream.retry_delay_seconds,
            upstream.retry_status_codes
        )
        return cls(client, upstream.api_url, timeout=upstream.timeout_seconds, policy=policy)

    @staticmethod
    def _headers() -> dict:
        return {
            "Accept": "application/json",
            "User-Agent": UA_CHROME,
        }

    async def resolve(self, url: str) -> VideoInfo:
        """
        Fetch and shape-check the metadata for a reel URL.
        Every failure surfaces as ResolutionError; httpx errors never escape.
        """
        resp: Optional[httpx.Response] = None
        try:
            resp = await self.http.get(
                self.api_url,
                params={"url": url},
                headers=self._headers(),
                timeout=self.timeout
            )

            if resp.status_code != 200:
                raise ResolutionError(f"Request failed with status code {resp.status_code}")

            content_type = resp.headers.get("content-type", "")
            if "text/html" in content_type.lower():
                raise ResolutionError("API returned HTML instead of JSON")

            try:
                payload = resp.json()
            except (json.JSONDecodeError, UnicodeDecodeError):
                payload = None

            if not isinstance(payload, dict):
                raise ResolutionError("Invalid API response format")

            return VideoInfo.model_validate(payload)

        except (
            ResolutionError,
            ValidationError,
            asyncio.TimeoutError,
            httpx.HTTPError,
            httpx.InvalidURL,
            httpx.StreamError
        ) as e:
            if isinstance(e, ResolutionError):
                reason = e.message
            elif isinstance(e, ValidationError):
                reason = "Invalid API response format"
            elif isinstance(e, asyncio.TimeoutError):
                reason = "timed out"
            else:
                reason = str(e) or type(e).__name__

            logger.error(
                f"API Error: {reason} (url={safe_url_for_log(url)}, response={self._body_preview(resp)!r})",
                extra={
                    "url": safe_url_for_log(url),
                    "error": reason,
                    "response": self._body_preview(resp),
                }
            )
            raise ResolutionError(f"Failed to fetch video info: {reason}") from e

    @staticmethod
    def _body_preview(resp: Optional[httpx.Response]) -> Optional[str]:
        if resp is None:
            return None
        return resp.text[:RESPONSE_LOG_MAX_CHARS]
