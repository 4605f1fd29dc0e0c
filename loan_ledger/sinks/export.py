"""Export a ledger's collections to a sink."""

from __future__ import annotations

import logging
from typing import Any, Protocol

from loan_ledger.store.ledger import Ledger

logger = logging.getLogger(__name__)


class BatchSink(Protocol):
    def write_batch(self, entity_type: str, records: list[Any]) -> None: ...


def export_ledger(ledger: Ledger, sink: BatchSink) -> dict[str, int]:
    """Write customers, loans and payments from one consistent snapshot.

    Returns
    -------
    dict[str, int]
        Records written per entity type.
    """
    snapshot = ledger.snapshot()
    batches = {
        "customers": list(snapshot.customers),
        "loans": list(snapshot.loans),
        "payments": list(snapshot.payments),
    }
    for entity_type, records in batches.items():
        sink.write_batch(entity_type, records)

    counts = {entity_type: len(records) for entity_type, records in batches.items()}
    logger.info("Exported ledger: %s", counts)
    return counts
