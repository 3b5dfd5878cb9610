"""Enumeration types for registry entities."""

from enum import Enum


class Role(str, Enum):
    SELLER = "SELLER"
    BUYER = "BUYER"


class RequestStatus(str, Enum):
    CREATED = "CREATED"
    APPROVED = "APPROVED"
    PAID = "PAID"


class FractionPolicy(str, Enum):
    """How a fractional purchase request obtains its fraction id.

    RESERVED claims the slot when the request is created. LEGACY derives
    the id from ``fractions_sold`` and only finalizes it at payment, so
    concurrent requests can collide on the same id.
    """

    RESERVED = "RESERVED"
    LEGACY = "LEGACY"


class DataKey(str, Enum):
    """Record kinds addressable in the store."""

    INSPECTOR = "INSPECTOR"
    PARTICIPANT = "PARTICIPANT"
    SELLER_LIST = "SELLER_LIST"
    BUYER_LIST = "BUYER_LIST"
    LAND = "LAND"
    LAND_OWNER = "LAND_OWNER"
    LAND_VERIFIED = "LAND_VERIFIED"
    REQUEST = "REQUEST"
    FRACTION = "FRACTION"
    FRACTION_OWNERS = "FRACTION_OWNERS"
    FRACTION_RESERVATIONS = "FRACTION_RESERVATIONS"
    PENDING_FRACTION_BUYERS = "PENDING_FRACTION_BUYERS"
    USER_FRACTIONAL_LANDS = "USER_FRACTIONAL_LANDS"
    COUNTER = "COUNTER"


class CounterName(str, Enum):
    LANDS = "LANDS"
    SELLERS = "SELLERS"
    BUYERS = "BUYERS"
    REQUESTS = "REQUESTS"
