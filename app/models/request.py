from typing import Optional

from pydantic import BaseModel, Field

from app.core.errors import UrlValidationError
from app.core.security import is_valid_reel_url


class DownloadRequest(BaseModel):
    url: str = Field(..., description="Instagram reel URL")

    @classmethod
    def from_query(cls, url: Optional[str]) -> "DownloadRequest":
        """Build from the raw query parameter, rejecting missing and malformed URLs"""
        if not url:
            raise UrlValidationError("URL parameter is required")
        if not is_valid_reel_url(url):
            raise UrlValidationError("Invalid Instagram reel URL format")
        return cls(url=url)
