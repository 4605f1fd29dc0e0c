"""Loan accounting engine: simple-interest loans, payments and balances."""

from loan_ledger.amortization import AmortizationQuote, compute, emis_left
from loan_ledger.models import Customer, Loan, LoanStatus, Payment, PaymentFailure, PaymentType
from loan_ledger.result import PaymentResult
from loan_ledger.store import Ledger, LedgerSnapshot

__version__ = "0.1.0"

__all__ = [
    "AmortizationQuote",
    "Customer",
    "Ledger",
    "LedgerSnapshot",
    "Loan",
    "LoanStatus",
    "Payment",
    "PaymentFailure",
    "PaymentResult",
    "PaymentType",
    "compute",
    "emis_left",
]
