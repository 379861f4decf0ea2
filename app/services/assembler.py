from fastapi.responses import Response

from app.core.errors import InvalidContentError
from app.models.internal import MediaPayload
from app.utils.filename import content_disposition

CACHE_CONTROL = "public, max-age=3600"


def build_video_response(payload: MediaPayload, filename: str) -> Response:
    """Wrap fetched media into an attachment response"""
    if not payload.is_video:
        raise InvalidContentError("Invalid video content type")

    headers = {
        "Content-Length": str(payload.size),
        "Content-Disposition": content_disposition(filename),
        "Accept-Ranges": "bytes",
        "Cache-Control": CACHE_CONTROL,
    }

    return Response(
        content=payload.content,
        status_code=200,
        media_type=payload.content_type,
        headers=headers
    )
