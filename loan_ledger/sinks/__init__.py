"""Output sinks for exporting the ledger."""

from loan_ledger.sinks.console import ConsoleSink
from loan_ledger.sinks.export import export_ledger
from loan_ledger.sinks.json_file import JsonFileSink
from loan_ledger.sinks.kafka import KafkaSink

__all__ = ["ConsoleSink", "JsonFileSink", "KafkaSink", "export_ledger"]
