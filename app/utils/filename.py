import re
import unicodedata
from typing import Optional
from urllib.parse import quote

from app.utils.hash import hash_stable

CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")


def sanitize_filename(name: str, max_length: int = 200) -> str:
    """Sanitize filename for cross-platform compatibility and header safety"""
    name = unicodedata.normalize("NFKC", name)
    name = CONTROL_CHARS.sub("", name)
    name = re.sub(r'[\\/:*?"<>|;]', '_', name)

    windows_reserved = {
        'CON', 'PRN', 'AUX', 'NUL',
        'COM1', 'COM2', 'COM3', 'COM4', 'COM5', 'COM6', 'COM7', 'COM8', 'COM9',
        'LPT1', 'LPT2', 'LPT3', 'LPT4', 'LPT5', 'LPT6', 'LPT7', 'LPT8', 'LPT9'
    }
    if name.upper() in windows_reserved:
        name = f"_{name}"

    return name[:max_length].strip()


def fallback_filename(source_url: str, ext: str = "mp4") -> str:
    return f"video_{hash_stable(source_url, 8)}.{ext}"


def resolve_filename(suggested: Optional[str], source_url: str) -> str:
    """Use the suggested name when it survives sanitizing, else a stable fallback"""
    if suggested:
        name = sanitize_filename(suggested)
        if name:
            return name
    return fallback_filename(source_url)


def content_disposition(filename: str) -> str:
    """
    Attachment header value. Plain ASCII names are emitted unquoted;
    anything else gets an ASCII fallback plus an RFC 5987 filename*.
    """
    if filename.isascii():
        return f"attachment; filename={filename}"

    ascii_name = unicodedata.normalize("NFKD", filename).encode("ascii", "ignore").decode("ascii")
    ascii_name = sanitize_filename(ascii_name) or "video.mp4"
    return f"attachment; filename={ascii_name}; filename*=UTF-8''{quote(filename)}"
