from dataclasses import dataclass
from typing import Optional

import httpx
from redis.asyncio import Redis


@dataclass
class RuntimeState:
    """Centralized runtime state"""
    redis: Optional[Redis] = None
    http_client: Optional[httpx.AsyncClient] = None


state = RuntimeState()
