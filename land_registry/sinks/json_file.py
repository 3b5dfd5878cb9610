"""JSON file sink for exporting registry records and events."""

import json
from pathlib import Path
from typing import Any, TextIO

from land_registry.exceptions import SinkError
from land_registry.models.base import Event
from land_registry.sinks.serialization import to_dict


class JsonFileSink:
    """Output records to JSON files and events to a JSON Lines log."""

    def __init__(
        self,
        output_dir: str | Path,
        pretty: bool = False,
        events_file: str = "events.jsonl",
    ) -> None:
        """Initialize JSON file sink.

        Parameters
        ----------
        output_dir : str | Path
            Directory to write JSON files.
        pretty : bool
            Pretty-print JSON output.
        events_file : str
            File name of the event log inside ``output_dir``.
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.pretty = pretty
        self.events_path = self.output_dir / events_file
        self._events: TextIO | None = None
        self._counts: dict[str, int] = {}

    def publish(self, event: Event) -> None:
        """Append one event to the event log."""
        if self._events is None:
            try:
                self._events = open(self.events_path, "a", encoding="utf-8")
            except OSError as exc:
                raise SinkError(f"Cannot open event log {self.events_path}: {exc}") from exc

        self._events.write(json.dumps(to_dict(event), ensure_ascii=False, default=str) + "\n")
        self._events.flush()
        self._counts["events"] = self._counts.get("events", 0) + 1

    def write_batch(self, entity_type: str, records: list[Any]) -> None:
        """Write a batch of records to a JSON file."""
        file_path = self.output_dir / f"{entity_type}.json"

        data = [to_dict(record) for record in records]

        with open(file_path, "w", encoding="utf-8") as f:
            if self.pretty:
                json.dump(data, f, indent=2, ensure_ascii=False, default=str)
            else:
                json.dump(data, f, ensure_ascii=False, default=str)

        self._counts[entity_type] = len(records)

    def close(self) -> None:
        """Close the event log and print summary."""
        if self._events is not None:
            self._events.close()
            self._events = None
        print(f"JSON files written to: {self.output_dir}")
        for entity_type, count in self._counts.items():
            print(f"  {entity_type}: {count} records")
