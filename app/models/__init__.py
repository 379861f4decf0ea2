from .internal import MediaPayload
from .request import DownloadRequest
from .response import ErrorResponse, HealthResponse, VideoData, VideoInfo

__all__ = ["DownloadRequest", "ErrorResponse", "HealthResponse", "MediaPayload", "VideoData", "VideoInfo"]
