from typing import Optional

from pydantic import BaseModel


class MediaPayload(BaseModel):
    """Fetched media bytes with the upstream headers needed downstream"""
    content: bytes
    content_type: Optional[str] = None
    content_length: Optional[str] = None

    @property
    def is_video(self) -> bool:
        return bool(self.content_type) and "video" in self.content_type.lower()

    @property
    def size(self) -> int:
        return len(self.content)
