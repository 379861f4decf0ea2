from fastapi import HTTPException, Request

from app.config.settings import Config, config as default_config
from app.infra.redis import get_redis


class RedisRateLimiter:
    """Redis-based fixed-window rate limiter with Lua script"""

    def __init__(self, config: Config = default_config):
        self.enabled = config.rate_limit.enabled
        self.max_requests = config.rate_limit.max_requests
        self.window_seconds = config.rate_limit.window_seconds

        self.lua_script = """
        local key = KEYS[1]
        local limit = tonumber(ARGV[1])
        local window = tonumber(ARGV[2])

        local current = redis.call('INCR', key)
        if current == 1 then
            redis.call('EXPIRE', key, window)
        end

        if current > limit then
            local ttl = redis.call('TTL', key)
            return {0, ttl}
        end

        return {1, 0}
        """

    async def __call__(self, request: Request):
        if not self.enabled:
            return True

        redis = get_redis()
        if not redis:
            return True

        client_ip = request.client.host if request.client else "unknown"
        key = f"rate:{client_ip}:{request.url.path}"

        try:
            allowed, ttl = await redis.eval(
                self.lua_script,
                1,
                key,
                self.max_requests,
                self.window_seconds
            )
        except Exception:
            return True

        if not allowed:
            raise HTTPException(
                status_code=429,
                detail=f"Rate limit exceeded. Try again in {ttl} seconds",
                headers={"Retry-After": str(ttl)}
            )

        return True


rate_limiter = RedisRateLimiter()


async def limit_requests(request: Request):
    """Dependency using the app's configured limiter when one is set"""
    limiter = getattr(request.app.state, "rate_limiter", None) or rate_limiter
    return await limiter(request)
