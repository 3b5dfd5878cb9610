"""Scenarios for generating populated registries."""

from land_registry.scenarios.fractional_sale import FractionalSaleScenario
from land_registry.scenarios.whole_sale import WholeSaleScenario

__all__ = [
    "FractionalSaleScenario",
    "WholeSaleScenario",
]
