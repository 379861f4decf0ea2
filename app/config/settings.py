from typing import List, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.utils.http_retry import DEFAULT_RETRY_STATUS_CODES


class UpstreamConfig(BaseModel):
    api_url: str = Field(default="https://pragyaninstagr.vercel.app/", description="Metadata resolver endpoint")
    timeout_seconds: float = Field(default=15.0, gt=0, description="Resolver request timeout")
    retries: int = Field(default=3, ge=1, description="Total resolver attempts")
    retry_delay_seconds: float = Field(default=1.0, ge=0, description="Fixed delay between attempts")
    retry_status_codes: List[int] = Field(
        default_factory=lambda: sorted(DEFAULT_RETRY_STATUS_CODES),
        description="Status codes that trigger a retry"
    )


class DownloadConfig(BaseModel):
    timeout_seconds: float = Field(default=30.0, gt=0, description="Media fetch timeout in seconds")
    max_content_bytes: int = Field(default=100 * 1024 * 1024, ge=1, description="Maximum media payload size")


class RedisConfig(BaseModel):
    url: Optional[str] = Field(default=None, description="Redis connection URL (rate limiting is off without it)")
    socket_timeout: int = Field(default=5, description="Redis socket timeout in seconds")


class RateLimitConfig(BaseModel):
    enabled: bool = Field(default=True, description="Enable rate limiting")
    max_requests: int = Field(default=30, ge=1, description="Max requests per window")
    window_seconds: int = Field(default=60, ge=1, description="Rate limit window in seconds")


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO", description="Log level")
    format: str = Field(default="%(message)s", description="Log format")
    enable_rich: bool = Field(default=True, description="Enable rich console logging")

    @field_validator("level")
    @classmethod
    def validate_log_level(cls, v):
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return v.upper()


class ApiConfig(BaseModel):
    title: str = Field(default="Reel Download Proxy", description="API title")
    version: str = Field(default="1.0.0", description="API version")
    cors_origins: list = Field(default=["*"], description="CORS allowed origins")
    debug: bool = Field(default=False, description="Expose OpenAPI docs")


class Config(BaseSettings):
    model_config = SettingsConfigDict(env_nested_delimiter="__", extra="ignore")

    host: str = Field(default="0.0.0.0", description="Listen address")
    port: int = Field(default=3000, ge=1, le=65535, description="Listen port")
    environment: str = Field(default="production", description="Runtime environment name")

    upstream: UpstreamConfig = Field(default_factory=UpstreamConfig)
    download: DownloadConfig = Field(default_factory=DownloadConfig)
    redis: RedisConfig = Field(default_factory=RedisConfig)
    rate_limit: RateLimitConfig = Field(default_factory=RateLimitConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    api: ApiConfig = Field(default_factory=ApiConfig)

    @property
    def is_development(self) -> bool:
        """Verbose error details are only exposed in development"""
        return self.environment.lower() == "development"


config = Config()
