from .errors import (
    ErrorKind,
    FetchError,
    InvalidContentError,
    ProxyError,
    ResolutionError,
    UrlValidationError,
)
from .security import is_valid_reel_url

__all__ = [
    "ErrorKind",
    "FetchError",
    "InvalidContentError",
    "ProxyError",
    "ResolutionError",
    "UrlValidationError",
    "is_valid_reel_url",
]
