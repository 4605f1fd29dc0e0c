"""Enumeration types for ledger entities."""

from enum import Enum


class LoanStatus(str, Enum):
    ACTIVE = "ACTIVE"
    PAID_OFF = "PAID_OFF"


class PaymentType(str, Enum):
    EMI = "EMI"
    LUMP_SUM = "LUMP_SUM"


class PaymentFailure(str, Enum):
    """Reason a payment was rejected without touching the ledger."""

    LOAN_NOT_FOUND = "LOAN_NOT_FOUND"
    INVALID_PAYMENT_TYPE = "INVALID_PAYMENT_TYPE"
    INVALID_AMOUNT = "INVALID_AMOUNT"
    LOAN_PAID_OFF = "LOAN_PAID_OFF"
    EXCEEDS_BALANCE = "EXCEEDS_BALANCE"


class EventType(str, Enum):
    CUSTOMER_REGISTERED = "customer.registered"
    LOAN_CREATED = "loan.created"
    PAYMENT_RECORDED = "payment.recorded"
    LOAN_PAID_OFF = "loan.paid_off"
