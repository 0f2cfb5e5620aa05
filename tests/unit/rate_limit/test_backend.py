"""Tests for rate limiting backend."""

from storefront_api.core.rate_limit.backend import SlidingWindowRateLimiter
from tests.fakes import FakeClock


class TestSlidingWindowRateLimiter:
    """Tests for SlidingWindowRateLimiter class."""

    def test_build_key_basic(self):
        """Test basic key building without endpoint."""
        limiter = SlidingWindowRateLimiter()
        assert limiter._build_key("ip:10.0.0.1") == "ip:10.0.0.1"

    def test_build_key_with_endpoint(self):
        """Test key building with endpoint."""
        limiter = SlidingWindowRateLimiter()
        key = limiter._build_key("ip:10.0.0.1", "/api/v1/storefront/tenant")
        assert key == "ip:10.0.0.1:api_v1_storefront_tenant"

    def test_is_allowed_under_limit(self, clock: FakeClock):
        """Test that requests under limit are allowed."""
        limiter = SlidingWindowRateLimiter(clock=clock)

        result = limiter.is_allowed("ip:10.0.0.1", limit=100, window=60)

        assert result.allowed is True
        assert result.limit == 100
        assert result.remaining == 99
        assert result.reset_time == int(clock.now + 60)

    def test_is_allowed_over_limit(self, clock: FakeClock):
        """Test that requests over limit are denied."""
        limiter = SlidingWindowRateLimiter(clock=clock)
        for _ in range(3):
            limiter.is_allowed("ip:10.0.0.1", limit=3, window=60)
        clock.advance(15)

        result = limiter.is_allowed("ip:10.0.0.1", limit=3, window=60)

        assert result.allowed is False
        assert result.remaining == 0
        assert result.retry_after == 45

    def test_denied_requests_are_not_recorded(self, clock: FakeClock):
        limiter = SlidingWindowRateLimiter(clock=clock)
        limiter.is_allowed("ip:10.0.0.1", limit=1, window=60)
        limiter.is_allowed("ip:10.0.0.1", limit=1, window=60)
        clock.advance(60)

        assert limiter.is_allowed("ip:10.0.0.1", limit=1, window=60).allowed is True

    def test_window_slides(self, clock: FakeClock):
        limiter = SlidingWindowRateLimiter(clock=clock)
        limiter.is_allowed("ip:10.0.0.1", limit=2, window=60)
        clock.advance(30)
        limiter.is_allowed("ip:10.0.0.1", limit=2, window=60)
        clock.advance(30)

        result = limiter.is_allowed("ip:10.0.0.1", limit=2, window=60)

        assert result.allowed is True
        assert result.remaining == 0

    def test_identifiers_are_independent(self, clock: FakeClock):
        limiter = SlidingWindowRateLimiter(clock=clock)
        limiter.is_allowed("ip:10.0.0.1", limit=1, window=60)

        assert limiter.is_allowed("ip:10.0.0.2", limit=1, window=60).allowed is True

    def test_zero_limit_denies(self, clock: FakeClock):
        limiter = SlidingWindowRateLimiter(clock=clock)

        result = limiter.is_allowed("ip:10.0.0.1", limit=0, window=60)

        assert result.allowed is False
        assert result.retry_after == 60

    def test_reset(self, clock: FakeClock):
        """Test rate limit reset."""
        limiter = SlidingWindowRateLimiter(clock=clock)
        limiter.is_allowed("ip:10.0.0.1", limit=1, window=60)

        assert limiter.reset("ip:10.0.0.1") is True
        assert limiter.reset("ip:10.0.0.1") is False
        assert limiter.is_allowed("ip:10.0.0.1", limit=1, window=60).allowed is True

    def test_sweep_drops_idle_identifiers(self, clock: FakeClock):
        limiter = SlidingWindowRateLimiter(clock=clock)
        limiter.is_allowed("ip:10.0.0.1", limit=5, window=60)
        clock.advance(45)
        limiter.is_allowed("ip:10.0.0.2", limit=5, window=60)
        clock.advance(15)

        assert limiter.sweep(window=60) == 1
        assert len(limiter) == 1

