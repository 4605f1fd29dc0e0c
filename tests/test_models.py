"""Tests for domain models."""

from dataclasses import FrozenInstanceError, replace
from datetime import datetime, timezone

import pytest

from loan_ledger.models import (
    Customer,
    Event,
    EventType,
    Loan,
    LoanStatus,
    Payment,
    PaymentFailure,
    PaymentType,
)

NOW = datetime(2024, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def loan() -> Loan:
    return Loan(
        loan_id="loan-1",
        customer_id="CUST001",
        principal_amount=100000.0,
        interest_rate=10.0,
        loan_period_years=5.0,
        monthly_emi=2500.0,
        total_amount=150000.0,
        status=LoanStatus.ACTIVE,
        created_at=NOW,
    )


class TestCustomer:
    """Tests for Customer model."""

    def test_customer_creation(self) -> None:
        customer = Customer(customer_id="CUST001", name="John Doe", created_at=NOW)

        assert customer.customer_id == "CUST001"
        assert customer.name == "John Doe"
        assert customer.created_at == NOW

    def test_customer_is_frozen(self) -> None:
        customer = Customer(customer_id="CUST001", name="John Doe", created_at=NOW)
        with pytest.raises(FrozenInstanceError):
            customer.name = "Jane Doe"


class TestLoan:
    """Tests for Loan model."""

    def test_total_interest(self, loan: Loan) -> None:
        assert loan.total_interest == 50000.0

    def test_is_active(self, loan: Loan) -> None:
        assert loan.is_active is True
        assert replace(loan, status=LoanStatus.PAID_OFF).is_active is False

    def test_replace_status_keeps_figures(self, loan: Loan) -> None:
        paid = replace(loan, status=LoanStatus.PAID_OFF)

        assert paid.total_amount == loan.total_amount
        assert paid.monthly_emi == loan.monthly_emi
        assert loan.status == LoanStatus.ACTIVE

    def test_loan_is_frozen(self, loan: Loan) -> None:
        with pytest.raises(FrozenInstanceError):
            loan.total_amount = 0.0

    def test_loans_compare_by_value(self, loan: Loan) -> None:
        assert loan == replace(loan)
        assert loan != replace(loan, loan_id="loan-2")


class TestPayment:
    """Tests for Payment model."""

    def test_payment_creation(self) -> None:
        payment = Payment(
            payment_id="pay-1",
            loan_id="loan-1",
            amount=2500.0,
            payment_type=PaymentType.EMI,
            payment_date=NOW,
        )

        assert payment.amount == 2500.0
        assert payment.payment_type == PaymentType.EMI

    def test_payment_is_frozen(self) -> None:
        payment = Payment("pay-1", "loan-1", 2500.0, PaymentType.EMI, NOW)
        with pytest.raises(FrozenInstanceError):
            payment.amount = 1.0


class TestEvent:
    """Tests for Event envelope."""

    def test_event_defaults(self) -> None:
        event = Event(
            event_id="evt-1",
            event_type=EventType.LOAN_CREATED.value,
            event_time=NOW,
            source="loan-ledger",
            subject="loan-1",
            data={"loan_id": "loan-1"},
        )

        assert event.metadata == {}
        assert event.event_type == "loan.created"

    def test_metadata_not_shared(self) -> None:
        first = Event("e1", "loan.created", NOW, "loan-ledger", "l1", {})
        second = Event("e2", "loan.created", NOW, "loan-ledger", "l2", {})

        assert first.metadata is not second.metadata


class TestEnums:
    """Tests for enumeration values."""

    def test_loan_status_values(self) -> None:
        assert [s.value for s in LoanStatus] == ["ACTIVE", "PAID_OFF"]

    def test_payment_type_from_string(self) -> None:
        assert PaymentType("EMI") is PaymentType.EMI
        assert PaymentType("LUMP_SUM") is PaymentType.LUMP_SUM
        with pytest.raises(ValueError):
            PaymentType("CASH")

    def test_enums_are_strings(self) -> None:
        assert LoanStatus.PAID_OFF == "PAID_OFF"
        assert PaymentFailure.EXCEEDS_BALANCE == "EXCEEDS_BALANCE"

    def test_event_types(self) -> None:
        assert {e.value for e in EventType} == {
            "customer.registered",
            "loan.created",
            "payment.recorded",
            "loan.paid_off",
        }
