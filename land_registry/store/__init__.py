"""Keyed record store shared by every registry component."""

from land_registry.store.records import RecordStore, StoreKey

__all__ = ["RecordStore", "StoreKey"]
