"""Output sinks for registry events and record exports."""

from land_registry.sinks.console import ConsoleSink
from land_registry.sinks.json_file import JsonFileSink
from land_registry.sinks.kafka import KafkaSink

__all__ = ["ConsoleSink", "JsonFileSink", "KafkaSink"]
