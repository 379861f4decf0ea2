from typing import List, Optional

import httpx

from app.api.download import DownloadHandler, get_download_handler
from app.config.settings import Config
from app.main import create_app
from app.models.internal import MediaPayload
from app.models.response import VideoInfo

REEL_URL = "https://www.instagram.com/reel/Cabc_123-XYZ/"
VIDEO_URL = "https://x/video.mp4"


class FakeResolver:
    def __init__(self, info: Optional[VideoInfo] = None, error: Optional[Exception] = None):
        self.info = info
        self.error = error
        self.calls: List[str] = []

    async def resolve(self, url: str) -> VideoInfo:
        self.calls.append(url)
        if self.error:
            raise self.error
        return self.info


class FakeFetcher:
    def __init__(self, payload: Optional[MediaPayload] = None, error: Optional[Exception] = None):
        self.payload = payload
        self.error = error
        self.calls: List[str] = []

    async def fetch(self, video_url: str) -> MediaPayload:
        self.calls.append(video_url)
        if self.error:
            raise self.error
        return self.payload


def success_info(filename: Optional[str] = "v.mp4") -> VideoInfo:
    return VideoInfo.model_validate(
        {"status": "success", "data": {"videoUrl": VIDEO_URL, "filename": filename}}
    )


def video_payload(content: bytes = b"\x00\x00\x00\x18ftypmp42", content_type: str = "video/mp4") -> MediaPayload:
    return MediaPayload(content=content, content_type=content_type, content_length=str(len(content)))


def build_app(resolver, fetcher, environment: str = "production"):
    config = Config(environment=environment)
    app = create_app(config)
    app.dependency_overrides[get_download_handler] = lambda: DownloadHandler(
        resolver, fetcher, expose_details=config.is_development
    )
    return app


async def call(app, path: str, params: Optional[dict] = None, headers: Optional[dict] = None) -> httpx.Response:
    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        return await ac.get(path, params=params, headers=headers)
