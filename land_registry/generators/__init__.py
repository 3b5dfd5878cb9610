"""Synthetic data generators for registry scenarios."""

from land_registry.generators.land import LandGenerator
from land_registry.generators.participant import ParticipantGenerator

__all__ = ["LandGenerator", "ParticipantGenerator"]
