"""Domain models for the land registry."""

from land_registry.models.base import Event

__all__ = ["Event"]
