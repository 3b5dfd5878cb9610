"""Tests for shared serialization utilities."""

from datetime import date, datetime, timezone
from decimal import Decimal

from land_registry.models.registry import (
    BuyerProfile,
    LandParcel,
    Participant,
    RequestStatus,
    Role,
)
from land_registry.sinks.serialization import dataclass_to_dict, serialize_value, to_dict


class TestToDict:
    """Tests for to_dict function."""

    def test_dataclass(self) -> None:
        land = LandParcel(
            land_id=1,
            area=1200,
            city="Pune",
            state="Maharashtra",
            land_price=1_000_000,
            property_pid=123456,
            physical_survey_number=42,
            ipfs_hash="QmLandImage",
            document="QmLandDoc",
            created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        )

        result = to_dict(land)

        assert result["land_id"] == 1
        assert result["land_price"] == 1_000_000
        assert result["is_fractional"] is False
        assert result["created_at"] == "2024-01-01T00:00:00+00:00"
        # Properties are not fields
        assert "available_fractions" not in result

    def test_dict_passthrough(self) -> None:
        d = {"land_id": 3, "verified": True}
        assert to_dict(d) == d

    def test_other_type(self) -> None:
        assert to_dict(42) == {"value": "42"}


class TestSerializeValue:
    """Tests for serialize_value function."""

    def test_decimal(self) -> None:
        assert serialize_value(Decimal("99.99")) == "99.99"

    def test_datetime(self) -> None:
        assert serialize_value(datetime(2024, 6, 15, 10, 30, 0)) == "2024-06-15T10:30:00"

    def test_date(self) -> None:
        assert serialize_value(date(2024, 6, 15)) == "2024-06-15"

    def test_enum(self) -> None:
        assert serialize_value(RequestStatus.PAID) == "PAID"

    def test_nested_dict(self) -> None:
        data = {"owner": "GABC", "info": {"date": datetime(2024, 1, 1)}}
        result = serialize_value(data)
        assert result["info"]["date"] == "2024-01-01T00:00:00"

    def test_sequences_become_lists(self) -> None:
        assert serialize_value(("a", "b")) == ["a", "b"]
        assert serialize_value(frozenset({"a"})) == ["a"]

    def test_scalars_pass_through(self) -> None:
        assert serialize_value("hello") == "hello"
        assert serialize_value(42) == 42
        assert serialize_value(None) is None


class TestDataclassToDict:
    """Tests for dataclass_to_dict function."""

    def test_nested_profile_is_expanded(self, buyer_profile: BuyerProfile) -> None:
        participant = Participant(identity="GBUYER0001", role=Role.BUYER, profile=buyer_profile)

        result = dataclass_to_dict(participant)

        assert result["role"] == "BUYER"
        assert result["profile"]["email"] == "anita@example.com"
        assert result["profile"]["document"] == "QmBuyerDoc"
        assert result["verified"] is False
