"""JSON file sink for exporting the ledger to files."""

import json
from pathlib import Path
from typing import Any

from loan_ledger.exceptions import SinkError
from loan_ledger.models import Event
from loan_ledger.serialization import to_dict

EVENTS_FILENAME = "events.jsonl"


class JsonFileSink:
    """Output ledger records to JSON files and events to a JSON Lines file."""

    def __init__(self, output_dir: str | Path, pretty: bool = False) -> None:
        """Initialize JSON file sink.

        Parameters
        ----------
        output_dir : str | Path
            Directory to write JSON files.
        pretty : bool
            Pretty-print JSON output.
        """
        self.output_dir = Path(output_dir)
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise SinkError(f"Cannot create output directory {self.output_dir}: {e}") from e
        self.pretty = pretty
        self._counts: dict[str, int] = {}

    def write_batch(self, entity_type: str, records: list[Any]) -> None:
        """Write a batch of records to ``<entity_type>.json``."""
        file_path = self.output_dir / f"{entity_type}.json"

        data = [to_dict(record) for record in records]

        with open(file_path, "w", encoding="utf-8") as f:
            if self.pretty:
                json.dump(data, f, indent=2, ensure_ascii=False, default=str)
            else:
                json.dump(data, f, ensure_ascii=False, default=str)

        self._counts[entity_type] = len(records)

    def publish_event(self, event: Event) -> None:
        """Append a ledger event to ``events.jsonl``."""
        file_path = self.output_dir / EVENTS_FILENAME
        with open(file_path, "a", encoding="utf-8") as f:
            f.write(json.dumps(to_dict(event), ensure_ascii=False, default=str) + "\n")

        self._counts["events"] = self._counts.get("events", 0) + 1

    def close(self) -> None:
        """Print summary."""
        print(f"JSON files written to: {self.output_dir}")
        for entity_type, count in self._counts.items():
            print(f"  {entity_type}: {count} records")
