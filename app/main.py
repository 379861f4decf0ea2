import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api import download, health
from app.api.errors import register_exception_handlers
from app.config.settings import Config, config as default_config
from app.core.logging import RequestIdMiddleware, setup_logging
from app.infra.http import close_http_client, get_http_client
from app.infra.rate_limit import RedisRateLimiter
from app.infra.redis import close_redis, init_redis

logger = logging.getLogger(__name__)


def create_app(config: Config = default_config) -> FastAPI:
    app = FastAPI(
        title=config.api.title,
        version=config.api.version,
        docs_url="/docs" if config.api.debug else None,
        redoc_url=None
    )
    app.state.config = config
    app.state.rate_limiter = RedisRateLimiter(config)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.api.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIdMiddleware)

    register_exception_handlers(app, config)

    # Routes
    app.include_router(health.router, tags=["Health"])
    app.include_router(download.router, tags=["Download"])

    @app.on_event("startup")
    async def startup_event():
        setup_logging(config.logging)
        get_http_client()
        await init_redis(config)
        logger.info(f"Server running on port {config.port} ({config.environment})")

    @app.on_event("shutdown")
    async def shutdown_event():
        await close_http_client()
        await close_redis()

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(app, host=default_config.host, port=default_config.port)
