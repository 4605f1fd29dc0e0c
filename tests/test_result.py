"""Tests for PaymentResult."""

import pytest

from loan_ledger.exceptions import InvalidEntityStateError, LoanNotFoundError, ValidationError
from loan_ledger.models import PaymentFailure
from loan_ledger.result import PaymentResult


class TestPaymentResult:
    """Tests for payment outcomes."""

    def test_ok(self) -> None:
        result = PaymentResult.ok("pay-1", 147500.0, False)

        assert result.success is True
        assert bool(result) is True
        assert result.payment_id == "pay-1"
        assert result.remaining_balance == 147500.0
        assert result.reason is None
        assert result.error is None
        assert result.unwrap() == "pay-1"

    def test_fail(self) -> None:
        result = PaymentResult.fail(PaymentFailure.EXCEEDS_BALANCE, "too much", 150000.0)

        assert result.success is False
        assert not result
        assert result.payment_id is None
        assert result.paid_off is False
        assert result.remaining_balance == 150000.0
        assert result.error == "too much"

    @pytest.mark.parametrize(
        "reason,exc_type",
        [
            (PaymentFailure.LOAN_NOT_FOUND, LoanNotFoundError),
            (PaymentFailure.INVALID_PAYMENT_TYPE, ValidationError),
            (PaymentFailure.INVALID_AMOUNT, ValidationError),
            (PaymentFailure.LOAN_PAID_OFF, InvalidEntityStateError),
            (PaymentFailure.EXCEEDS_BALANCE, ValidationError),
        ],
    )
    def test_unwrap_raises_matching_error(self, reason: PaymentFailure, exc_type: type) -> None:
        result = PaymentResult.fail(reason, "rejected")

        with pytest.raises(exc_type, match="rejected"):
            result.unwrap()

    def test_result_is_frozen(self) -> None:
        result = PaymentResult.ok("pay-1", 0.0, True)
        with pytest.raises(AttributeError):
            result.paid_off = False
