"""In-memory ledger store."""

from loan_ledger.store.ledger import Ledger, LedgerSnapshot

__all__ = ["Ledger", "LedgerSnapshot"]
