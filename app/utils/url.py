from urllib.parse import urlparse


def safe_url_for_log(url: str) -> str:
    """Strip query strings (signed CDN tokens) before logging"""
    try:
        parsed = urlparse(url)
        base_url = f"{parsed.scheme}://{parsed.netloc}{parsed.path}"
        if parsed.query:
            return f"{base_url}?..."
        return base_url
    except ValueError:
        return "invalid_url"
