"""Domain models for the loan ledger."""

from loan_ledger.models.base import Event
from loan_ledger.models.customer import Customer
from loan_ledger.models.enums import EventType, LoanStatus, PaymentFailure, PaymentType
from loan_ledger.models.loan import Loan, Payment

__all__ = [
    "Customer",
    "Event",
    "EventType",
    "Loan",
    "LoanStatus",
    "Payment",
    "PaymentFailure",
    "PaymentType",
]
