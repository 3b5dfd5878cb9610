"""Seller and buyer models."""

from dataclasses import dataclass
from datetime import datetime

from land_registry.models.registry.enums import Role


@dataclass
class SellerProfile:
    """Profile fields supplied by a seller."""

    name: str
    age: int
    aadhar_number: str
    pan_number: str
    lands_owned: str
    document: str  # Document-store handle, fixed at registration


@dataclass
class BuyerProfile:
    """Profile fields supplied by a buyer."""

    name: str
    age: int
    city: str
    aadhar_number: str
    pan_number: str
    document: str  # Document-store handle, fixed at registration
    email: str


@dataclass
class Participant:
    """A registered identity acting as either seller or buyer.

    Sellers and buyers share one keyspace: the role tag decides which
    profile type is carried, and an identity can never hold both.
    """

    identity: str
    role: Role
    profile: SellerProfile | BuyerProfile
    verified: bool = False
    rejected: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_seller(self) -> bool:
        return self.role == Role.SELLER

    @property
    def is_buyer(self) -> bool:
        return self.role == Role.BUYER
