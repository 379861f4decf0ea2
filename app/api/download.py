import time
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import Response

from app.api.errors import ERROR_STATUS, error_kind, error_response
from app.core.errors import ResolutionError
from app.core.logging import log_error, log_info, log_warning
from app.infra.http import get_http_client
from app.infra.rate_limit import limit_requests
from app.models.request import DownloadRequest
from app.models.response import ErrorResponse
from app.services.assembler import build_video_response
from app.services.fetcher import MediaFetcher
from app.services.resolver import MetadataResolver
from app.utils.filename import resolve_filename
from app.utils.url import safe_url_for_log

router = APIRouter()


class DownloadHandler:
    """
    Runs the validate -> resolve -> fetch -> assemble pipeline for one request.
    Every failure is turned into a response here; nothing propagates.
    """

    def __init__(
        self,
        resolver: MetadataResolver,
        fetcher: MediaFetcher,
        expose_details: bool = False
    ):
        self.resolver = resolver
        self.fetcher = fetcher
        self.expose_details = expose_details

    async def handle(self, request: Request, url: Optional[str]) -> Response:
        start_time = time.perf_counter()
        status_code = 500

        try:
            download = DownloadRequest.from_query(url)
            log_info(request, f"Processing download request for {download.url}", url=download.url)

            try:
                video_info = await self.resolver.resolve(download.url)
            except ResolutionError as e:
                raise ResolutionError("Failed to get video URL from API") from e

            if not video_info.is_valid:
                log_error(
                    request,
                    f"Invalid video info response: status={video_info.status!r}",
                    video_info=video_info.model_dump(by_alias=True)
                )
                raise ResolutionError("Failed to get video URL from API")

            payload = await self.fetcher.fetch(video_info.data.video_url)
            filename = resolve_filename(video_info.data.filename, download.url)
            response = build_video_response(payload, filename)

            status_code = response.status_code
            log_info(
                request,
                f"Download completed: {payload.size} bytes ({payload.content_type})",
                content_length=payload.size,
                content_type=payload.content_type
            )
            return response

        except Exception as e:
            kind = error_kind(e)
            status_code = ERROR_STATUS[kind]
            if status_code >= 500:
                log_error(request, f"Download error: {e}", url=safe_url_for_log(url or ""), error=str(e), kind=kind.name)
            else:
                log_warning(request, f"Download rejected: {e}", error=str(e), kind=kind.name)
            return error_response(e, self.expose_details)

        finally:
            elapsed_ms = round((time.perf_counter() - start_time) * 1000, 1)
            log_info(
                request,
                f"Request finished with status {status_code} in {elapsed_ms} ms",
                status_code=status_code,
                processing_time_ms=elapsed_ms
            )


def get_download_handler(request: Request) -> DownloadHandler:
    """Build a handler from the app config around the shared HTTP client"""
    config = request.app.state.config
    client = get_http_client()
    return DownloadHandler(
        MetadataResolver.from_config(client, config),
        MediaFetcher.from_config(client, config),
        expose_details=config.is_development
    )


@router.get(
    "/download",
    dependencies=[Depends(limit_requests)],
    responses={400: {"model": ErrorResponse}, 429: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}
)
async def download_video(
    request: Request,
    url: Optional[str] = Query(None, description="Instagram reel URL"),
    handler: DownloadHandler = Depends(get_download_handler)
):
    """Resolve a reel and return the video as an attachment"""
    return await handler.handle(request, url)
