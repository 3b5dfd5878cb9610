"""Purchase request model."""

from dataclasses import dataclass
from datetime import datetime

from land_registry.models.registry.enums import RequestStatus


@dataclass
class PurchaseRequest:
    """Buyer proposal to purchase a whole parcel or one fraction."""

    request_id: int
    seller_id: str
    buyer_id: str
    land_id: int
    approved: bool = False
    payment_received: bool = False
    is_fractional_purchase: bool = False
    fraction_id: int | None = None
    created_at: datetime | None = None

    @property
    def status(self) -> RequestStatus:
        if self.payment_received:
            return RequestStatus.PAID
        if self.approved:
            return RequestStatus.APPROVED
        return RequestStatus.CREATED
