from app.utils.http_retry import DEFAULT_RETRY_STATUS_CODES, RetryPolicy


def test_default_policy():
    policy = RetryPolicy()

    assert policy.attempts == 3
    assert policy.delay == 1.0
    assert policy.status_codes == DEFAULT_RETRY_STATUS_CODES


def test_should_retry():
    policy = RetryPolicy()

    for status_code in (408, 429, 500, 503, 599):
        assert policy.should_retry(status_code)
    for status_code in (200, 206, 301, 400, 403, 404, 600):
        assert not policy.should_retry(status_code)


def test_build_clamps_attempts():
    policy = RetryPolicy.build(0, 0.25, [500])

    assert policy.attempts == 1
    assert policy.delay == 0.25
    assert policy.status_codes == frozenset([500])
