"""Registry domain models."""

from land_registry.models.registry.enums import (
    CounterName,
    DataKey,
    FractionPolicy,
    RequestStatus,
    Role,
)
from land_registry.models.registry.inspector import Inspector
from land_registry.models.registry.land import FractionRecord, LandFields, LandParcel
from land_registry.models.registry.participant import (
    BuyerProfile,
    Participant,
    SellerProfile,
)
from land_registry.models.registry.request import PurchaseRequest

__all__ = [
    "BuyerProfile",
    "CounterName",
    "DataKey",
    "FractionPolicy",
    "FractionRecord",
    "Inspector",
    "LandFields",
    "LandParcel",
    "Participant",
    "PurchaseRequest",
    "RequestStatus",
    "Role",
    "SellerProfile",
]
