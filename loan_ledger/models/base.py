"""Base models shared across the ledger."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class Event:
    """Standard event envelope for ledger notifications."""

    event_id: str
    event_type: str  # entity.action (e.g., payment.recorded)
    event_time: datetime
    source: str  # Service/system that generated
    subject: str  # Entity ID affected
    data: dict
    metadata: dict = field(default_factory=dict)
