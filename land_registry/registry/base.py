"""Base class shared by the registry components."""

from __future__ import annotations

from abc import ABC

from land_registry.auth import AuthContext
from land_registry.clock import Clock, SystemClock
from land_registry.config import RegistryConfig
from land_registry.exceptions import (
    LandNotFoundError,
    NotInitializedError,
    UnauthorizedError,
)
from land_registry.models.registry import DataKey, Inspector, LandParcel
from land_registry.store import RecordStore, StoreKey

INSPECTOR_KEY = StoreKey.of(DataKey.INSPECTOR)


class RegistryComponent(ABC):
    """Common wiring for components that work against one record store.

    Parameters
    ----------
    store : RecordStore
        Store holding every registry record.
    clock : Clock | None
        Timestamp source (defaults to UTC wall-clock).
    config : RegistryConfig | None
        Registry behaviour settings.
    """

    def __init__(
        self,
        store: RecordStore,
        clock: Clock | None = None,
        config: RegistryConfig | None = None,
    ) -> None:
        self.store = store
        self.clock = clock or SystemClock()
        self.config = config or RegistryConfig()

    def inspector(self) -> Inspector | None:
        """The registry inspector, or None before initialization."""
        return self.store.get(INSPECTOR_KEY)

    def is_land_inspector(self, identity: str) -> bool:
        inspector = self.inspector()
        return inspector is not None and inspector.identity == identity

    def require_inspector(self, auth: AuthContext, inspector: str) -> None:
        """Check that ``inspector`` is the registry inspector acting for itself."""
        if self.inspector() is None:
            raise NotInitializedError("Registry has no inspector yet")
        auth.require_auth(inspector)
        if not self.is_land_inspector(inspector):
            raise UnauthorizedError("Only the land inspector can perform this action")

    def load_land(self, land_id: int) -> LandParcel:
        """Return a working copy of a land parcel or raise ``LandNotFoundError``."""
        land = self.store.get(StoreKey.of(DataKey.LAND, land_id))
        if land is None:
            raise LandNotFoundError(f"Land {land_id} not found")
        return land
