"""Outcome of a payment attempt.

Rejected payments are ordinary results rather than exceptions so a caller
can show the reason to the clerk; ``unwrap()`` converts a failure into the
matching exception for callers that would rather propagate it.
"""

from __future__ import annotations

from dataclasses import dataclass

from loan_ledger.exceptions import InvalidEntityStateError, LedgerError, LoanNotFoundError, ValidationError
from loan_ledger.models.enums import PaymentFailure

_FAILURE_EXCEPTIONS: dict[PaymentFailure, type[LedgerError]] = {
    PaymentFailure.LOAN_NOT_FOUND: LoanNotFoundError,
    PaymentFailure.INVALID_PAYMENT_TYPE: ValidationError,
    PaymentFailure.INVALID_AMOUNT: ValidationError,
    PaymentFailure.LOAN_PAID_OFF: InvalidEntityStateError,
    PaymentFailure.EXCEEDS_BALANCE: ValidationError,
}


@dataclass(frozen=True)
class PaymentResult:
    """Result of ``Ledger.record_payment``.

    Attributes
    ----------
    payment_id : str | None
        Id of the recorded payment, None on failure.
    remaining_balance : float | None
        Balance after the payment on success, the untouched balance when the
        payment was rejected against an existing loan, None otherwise.
    paid_off : bool
        True when this payment moved the loan to ``PAID_OFF``.
    reason : PaymentFailure | None
        Why the payment was rejected.
    error : str | None
        Human readable description of the rejection.
    """

    payment_id: str | None = None
    remaining_balance: float | None = None
    paid_off: bool = False
    reason: PaymentFailure | None = None
    error: str | None = None

    @classmethod
    def ok(cls, payment_id: str, remaining_balance: float, paid_off: bool) -> PaymentResult:
        return cls(payment_id=payment_id, remaining_balance=remaining_balance, paid_off=paid_off)

    @classmethod
    def fail(
        cls,
        reason: PaymentFailure,
        error: str,
        remaining_balance: float | None = None,
    ) -> PaymentResult:
        return cls(reason=reason, error=error, remaining_balance=remaining_balance)

    @property
    def success(self) -> bool:
        return self.reason is None

    def __bool__(self) -> bool:
        return self.success

    def unwrap(self) -> str:
        """Return the payment id, raising the matching error on failure."""
        if self.reason is not None:
            raise _FAILURE_EXCEPTIONS[self.reason](self.error)
        return self.payment_id
