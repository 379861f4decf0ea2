import pytest
from pydantic import ValidationError

from app.config.settings import Config
from app.utils.http_retry import DEFAULT_RETRY_STATUS_CODES, RetryPolicy


def test_defaults():
    config = Config()

    assert config.port == 3000
    assert config.upstream.timeout_seconds == 15.0
    assert config.upstream.retries == 3
    assert config.upstream.retry_delay_seconds == 1.0
    assert {408, 429, 500, 599} <= set(config.upstream.retry_status_codes)
    assert 404 not in config.upstream.retry_status_codes
    assert config.download.timeout_seconds == 30.0
    assert config.download.max_content_bytes == 100 * 1024 * 1024
    assert config.redis.url is None


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("ENVIRONMENT", "development")
    monkeypatch.setenv("UPSTREAM__RETRIES", "5")
    monkeypatch.setenv("LOGGING__LEVEL", "debug")

    config = Config()

    assert config.port == 8080
    assert config.is_development
    assert config.upstream.retries == 5
    assert config.logging.level == "DEBUG"


@pytest.mark.parametrize("environment,expected", [
    ("development", True),
    ("Development", True),
    ("production", False),
    ("test", False),
])
def test_is_development(environment, expected):
    assert Config(environment=environment).is_development is expected


def test_rejects_unknown_log_level():
    with pytest.raises(ValidationError):
        Config(logging={"level": "LOUD"})


def test_retry_status_codes_match_retry_policy_default():
    config = Config()
    policy = RetryPolicy.build(
        config.upstream.retries,
        config.upstream.retry_delay_seconds,
        config.upstream.retry_status_codes
    )

    assert frozenset(config.upstream.retry_status_codes) == DEFAULT_RETRY_STATUS_CODES
    assert policy == RetryPolicy()
