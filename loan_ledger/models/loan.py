"""Loan and payment models."""

from dataclasses import dataclass
from datetime import datetime

from loan_ledger.models.enums import LoanStatus, PaymentType


@dataclass(frozen=True)
class Loan:
    """Simple-interest loan contract.

    ``total_amount`` and ``monthly_emi`` are fixed at origination and never
    recomputed; ``status`` is the only field that changes, once, from
    ``ACTIVE`` to ``PAID_OFF``.
    """

    loan_id: str
    customer_id: str
    principal_amount: float
    interest_rate: float  # Annual percentage (e.g., 10 for 10%)
    loan_period_years: float
    monthly_emi: float
    total_amount: float  # principal + simple interest
    status: LoanStatus
    created_at: datetime

    @property
    def total_interest(self) -> float:
        """Interest charged over the whole term."""
        return self.total_amount - self.principal_amount

    @property
    def is_active(self) -> bool:
        return self.status == LoanStatus.ACTIVE


@dataclass(frozen=True)
class Payment:
    """Immutable repayment record."""

    payment_id: str
    loan_id: str
    amount: float
    payment_type: PaymentType  # Informational only
    payment_date: datetime
