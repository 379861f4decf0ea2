import re
from typing import Any, Optional

REEL_HOST = "instagram.com"

# Anchored at the start only: trailing slashes and query strings are tolerated
REEL_URL_PATTERN = re.compile(
    r"^https://(?:www\.)?" + re.escape(REEL_HOST) + r"/reel/([A-Za-z0-9_-]+)"
)


def extract_reel_id(url: Any) -> Optional[str]:
    """Return the reel id of an accepted URL, None for anything else"""
    if not isinstance(url, str):
        return None
    match = REEL_URL_PATTERN.match(url)
    return match.group(1) if match else None


def is_valid_reel_url(url: Any) -> bool:
    """
    Check a candidate URL against the accepted reel pattern.
    Pure and total: never raises, never touches the network.
    """
    return extract_reel_id(url) is not None
