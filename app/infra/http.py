import httpx

from app.core.state import state
from app.utils.http_retry import UA_CHROME

DEFAULT_HEADERS = {
    "User-Agent": UA_CHROME,
}


def build_http_client() -> httpx.AsyncClient:
    """Shared outbound client; per-request timeouts are set by each caller"""
    return httpx.AsyncClient(
        follow_redirects=True,
        headers=DEFAULT_HEADERS,
        timeout=httpx.Timeout(30.0),
    )


def get_http_client() -> httpx.AsyncClient:
    """Get the shared client, creating it lazily when startup did not run"""
    if state.http_client is None or state.http_client.is_closed:
        state.http_client = build_http_client()
    return state.http_client


async def close_http_client() -> None:
    if state.http_client is not None:
        await state.http_client.aclose()
        state.http_client = None
