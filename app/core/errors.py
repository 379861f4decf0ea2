from enum import Enum, auto


class ErrorKind(Enum):
    """Failure categories of the download pipeline"""
    VALIDATION = auto()
    RESOLUTION = auto()
    INVALID_CONTENT = auto()
    FETCH = auto()
    UNEXPECTED = auto()


class ProxyError(Exception):
    """Base class for pipeline failures carrying their kind"""
    kind = ErrorKind.UNEXPECTED

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UrlValidationError(ProxyError):
    """Missing or malformed reel URL"""
    kind = ErrorKind.VALIDATION


class ResolutionError(ProxyError):
    """Upstream metadata API could not produce a usable video URL"""
    kind = ErrorKind.RESOLUTION


class FetchError(ProxyError):
    """Media bytes could not be retrieved"""
    kind = ErrorKind.FETCH


class InvalidContentError(FetchError):
    """Media was retrieved but is not a video"""
    kind = ErrorKind.INVALID_CONTENT
