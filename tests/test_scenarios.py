"""Tests for scenarios."""

import pytest

from land_registry.models.registry import FractionPolicy
from land_registry.scenarios import FractionalSaleScenario, WholeSaleScenario
from land_registry.sinks.console import ConsoleSink


class TestFractionalSaleScenario:
    """Tests for FractionalSaleScenario."""

    def test_ten_buyers_share_the_land(self, seed: int) -> None:
        """Test the canonical ten-buyer fractional sale."""
        scenario = FractionalSaleScenario(num_buyers=10, total_fractions=10, seed=seed)
        registry = scenario.generate()

        land = scenario.land
        assert land is not None
        assert land.price_per_fraction == 100_000
        assert land.fractions_sold == 10
        assert registry.get_available_fractions(land.land_id) == 0
        assert registry.get_land_fraction_owners(land.land_id) == scenario.buyers
        for fraction_id in range(1, 11):
            assert registry.get_fractional_ownership(land.land_id, fraction_id).fraction_percentage == 10
        assert registry.is_land_verified(land.land_id) is True

    def test_extra_buyers_are_turned_away(self, seed: int) -> None:
        scenario = FractionalSaleScenario(num_buyers=6, total_fractions=4, seed=seed)
        registry = scenario.generate()

        assert len(scenario.buyers) == 4
        assert len(scenario.rejected_buyers) == 2
        assert registry.buyers_count == 6
        assert registry.requests_count == 4

    def test_sale_summary(self, seed: int) -> None:
        scenario = FractionalSaleScenario(num_buyers=3, total_fractions=5, total_price=500, seed=seed)
        assert scenario.get_sale_summary() == {}

        scenario.generate()
        summary = scenario.get_sale_summary()

        assert summary["fractions_sold"] == 3
        assert summary["available_fractions"] == 2
        assert summary["price_per_fraction"] == 100
        assert summary["owners"] == 3
        assert summary["turned_away"] == 0

    def test_legacy_policy_sequential_sale(self, seed: int) -> None:
        """Sequential purchases behave the same under both policies."""
        scenario = FractionalSaleScenario(
            num_buyers=5, total_fractions=5, seed=seed, policy=FractionPolicy.LEGACY
        )
        registry = scenario.generate()

        assert registry.get_land(scenario.land.land_id).fractions_sold == 5
        assert registry.get_reserved_fractions(scenario.land.land_id) == 0

    def test_events_reach_sink(self, seed: int, capsys: pytest.CaptureFixture) -> None:
        sink = ConsoleSink(pretty=False)
        scenario = FractionalSaleScenario(num_buyers=2, total_fractions=2, seed=seed, sink=sink)
        registry = scenario.generate()
        capsys.readouterr()

        assert sink._counts["fraction.finalized"] == 2
        assert sink._counts["request.paid"] == 2
        assert sum(sink._counts.values()) == len(registry.events)

    def test_reproducibility(self, seed: int) -> None:
        first = FractionalSaleScenario(num_buyers=3, total_fractions=3, seed=seed)
        second = FractionalSaleScenario(num_buyers=3, total_fractions=3, seed=seed)
        first.generate()
        second.generate()

        assert first.buyers == second.buyers
        assert first.registry.all_lands() == second.registry.all_lands()


class TestWholeSaleScenario:
    """Tests for WholeSaleScenario."""

    def test_generate_transfers_every_land(self, seed: int) -> None:
        scenario = WholeSaleScenario(num_sellers=2, num_buyers=4, seed=seed)
        registry = scenario.generate()

        assert registry.sellers_count == 2
        assert registry.buyers_count == 4
        assert registry.lands_count == 4
        assert len(scenario.transfers) == 4
        for land_id, buyer in scenario.transfers.items():
            assert registry.get_land_owner(land_id) == buyer
        assert registry.summary()["paid_requests"] == 4

    def test_all_sellers_rejected(self, seed: int) -> None:
        scenario = WholeSaleScenario(num_sellers=2, num_buyers=3, rejection_rate=1.0, seed=seed)
        registry = scenario.generate()

        assert scenario.sellers == []
        assert len(scenario.rejected_sellers) == 2
        assert registry.lands_count == 0
        assert registry.buyers_count == 0
