"""Registry components and the ``LandRegistry`` entry point."""

from land_registry.registry.catalog import LandCatalog
from land_registry.registry.facade import LandRegistry
from land_registry.registry.fractions import FractionAllocator
from land_registry.registry.identity import IdentityRegistry
from land_registry.registry.workflow import PaymentReceipt, RequestWorkflow

__all__ = [
    "FractionAllocator",
    "IdentityRegistry",
    "LandCatalog",
    "LandRegistry",
    "PaymentReceipt",
    "RequestWorkflow",
]
