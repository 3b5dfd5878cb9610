"""Tests for the authorization capability and clocks."""

from datetime import datetime, timedelta, timezone

import pytest

from land_registry.auth import AuthContext
from land_registry.clock import FixedClock, SystemClock
from land_registry.exceptions import UnauthorizedError


class TestAuthContext:
    """Tests for AuthContext."""

    def test_signed_by_allows_signers(self) -> None:
        auth = AuthContext.signed_by("GA", "GB")

        auth.require_auth("GA")
        auth.require_auth("GB")
        assert auth.can_act_as("GA")

    def test_require_auth_rejects_other_identity(self) -> None:
        auth = AuthContext.signed_by("GA")

        with pytest.raises(UnauthorizedError, match="GB"):
            auth.require_auth("GB")

    def test_anonymous_proves_nothing(self) -> None:
        auth = AuthContext.anonymous()

        assert not auth.can_act_as("GA")
        with pytest.raises(UnauthorizedError):
            auth.require_auth("GA")


class TestClocks:
    """Tests for timestamp sources."""

    def test_system_clock_is_utc(self) -> None:
        now = SystemClock().now()
        assert now.tzinfo is not None
        assert now.utcoffset() == timedelta(0)

    def test_fixed_clock_advances_by_step(self) -> None:
        start = datetime(2024, 6, 1, tzinfo=timezone.utc)
        clock = FixedClock(start=start, step=timedelta(minutes=5))

        assert clock.now() == start
        assert clock.now() == start + timedelta(minutes=5)
        assert clock.peek() == start + timedelta(minutes=10)

    def test_fixed_clock_is_strictly_increasing(self) -> None:
        clock = FixedClock()
        values = [clock.now() for _ in range(5)]
        assert values == sorted(values)
        assert len(set(values)) == 5
