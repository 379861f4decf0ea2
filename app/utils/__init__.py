from .filename import content_disposition, resolve_filename, sanitize_filename
from .hash import hash_stable
from .url import safe_url_for_log

__all__ = ["content_disposition", "hash_stable", "resolve_filename", "safe_url_for_log", "sanitize_filename"]
