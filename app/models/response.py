from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class VideoData(BaseModel):
    """Nested data object of the resolver payload"""
    model_config = ConfigDict(populate_by_name=True)

    video_url: Optional[str] = Field(default=None, alias="videoUrl")
    filename: Optional[str] = None


class VideoInfo(BaseModel):
    """Metadata resolver response"""
    status: Any = None
    data: Optional[VideoData] = None

    @property
    def is_valid(self) -> bool:
        return (
            self.status == "success"
            and self.data is not None
            and bool(self.data.video_url)
        )


class ErrorResponse(BaseModel):
    error: str
    message: Optional[str] = None


class HealthResponse(BaseModel):
    status: str = "healthy"
