import asyncio
import logging
import time

import httpx
import pytest

from app.core.errors import ErrorKind, FetchError
from app.services.fetcher import MAX_CONTENT_BYTES, MediaFetcher
from tests.conftest import VIDEO_URL

VIDEO_BYTES = b"\x00\x00\x00\x18ftypmp42" + b"\x01" * 64


async def fetch_with(handler, **kwargs):
    async with httpx.AsyncClient(transport=httpx.MockTransport(handler), follow_redirects=True) as client:
        return await MediaFetcher(client, **kwargs).fetch(VIDEO_URL)


@pytest.mark.asyncio
async def test_fetches_bytes_and_headers():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, content=VIDEO_BYTES, headers={"content-type": "video/mp4"})

    payload = await fetch_with(handler)

    assert payload.content == VIDEO_BYTES
    assert payload.content_type == "video/mp4"
    assert payload.content_length == str(len(VIDEO_BYTES))
    assert payload.is_video

    request = seen[0]
    assert request.headers["range"] == "bytes=0-"
    assert request.headers["user-agent"].startswith("Mozilla/5.0")
    assert request.extensions["timeout"]["read"] == 30.0


@pytest.mark.asyncio
async def test_partial_content_is_success():
    def handler(request):
        return httpx.Response(206, content=VIDEO_BYTES, headers={"content-type": "video/mp4"})

    payload = await fetch_with(handler)

    assert payload.content == VIDEO_BYTES


@pytest.mark.asyncio
async def test_follows_redirects():
    def handler(request):
        if request.url.path == "/video.mp4":
            return httpx.Response(302, headers={"location": "https://cdn.test/real.mp4"})
        return httpx.Response(200, content=VIDEO_BYTES, headers={"content-type": "video/mp4"})

    payload = await fetch_with(handler)

    assert payload.content == VIDEO_BYTES


@pytest.mark.asyncio
async def test_error_status_is_a_fetch_error():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(503, content=b"unavailable")

    with pytest.raises(FetchError) as exc_info:
        await fetch_with(handler)

    assert exc_info.value.kind == ErrorKind.FETCH
    assert exc_info.value.message == "Failed to fetch video: Request failed with status code 503"
    # no automatic retry
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_declared_length_over_cap_is_rejected():
    def handler(request):
        return httpx.Response(200, content=VIDEO_BYTES, headers={"content-type": "video/mp4"})

    with pytest.raises(FetchError) as exc_info:
        await fetch_with(handler, max_bytes=16)

    assert "exceeds maximum size of 16 bytes" in exc_info.value.message


@pytest.mark.asyncio
async def test_streamed_body_over_cap_is_rejected():
    async def chunks():
        for _ in range(4):
            yield b"\x02" * 10

    def handler(request):
        return httpx.Response(200, content=chunks(), headers={"content-type": "video/mp4"})

    with pytest.raises(FetchError) as exc_info:
        await fetch_with(handler, max_bytes=25)

    assert "exceeds maximum size" in exc_info.value.message


@pytest.mark.asyncio
async def test_body_at_cap_is_accepted():
    def handler(request):
        return httpx.Response(200, content=b"\x03" * 32, headers={"content-type": "video/mp4"})

    payload = await fetch_with(handler, max_bytes=32)

    assert payload.size == 32


@pytest.mark.asyncio
async def test_timeout_is_wrapped():
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(FetchError) as exc_info:
        await fetch_with(handler)

    assert exc_info.value.message == "Failed to fetch video: timed out"
    assert isinstance(exc_info.value.__cause__, httpx.ReadTimeout)


@pytest.mark.asyncio
async def test_invalid_url_is_wrapped():
    async with httpx.AsyncClient() as client:
        with pytest.raises(FetchError):
            await MediaFetcher(client).fetch("not a url")


def test_default_cap_is_100_mib():
    assert MAX_CONTENT_BYTES == 104857600


@pytest.mark.asyncio
async def test_slow_drip_body_is_bounded_by_overall_timeout():
    async def drip():
        for _ in range(10):
            yield b"\x04"
            await asyncio.sleep(0.3)

    def handler(request):
        return httpx.Response(200, content=drip(), headers={"content-type": "video/mp4"})

    started = time.monotonic()
    with pytest.raises(FetchError) as exc_info:
        await fetch_with(handler, timeout=1.0)
    elapsed = time.monotonic() - started

    assert exc_info.value.message == "Failed to fetch video: timed out"
    assert elapsed < 2.0


@pytest.mark.asyncio
async def test_fetch_error_log_names_reason_and_url(caplog):
    caplog.set_level(logging.ERROR, logger="app.services.fetcher")

    def handler(request):
        return httpx.Response(404)

    with pytest.raises(FetchError):
        await fetch_with(handler)

    assert "Video fetch error: Request failed with status code 404 (url=https://x/video.mp4)" in caplog.text
