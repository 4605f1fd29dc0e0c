"""Customer model."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Customer:
    """Borrower registered with the ledger."""

    customer_id: str  # CUST001, CUST002, ...
    name: str
    created_at: datetime
