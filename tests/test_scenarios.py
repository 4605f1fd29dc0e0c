"""Tests for scenarios."""

import pytest

from loan_ledger.models import LoanStatus, PaymentType
from loan_ledger.scenarios import DemoPortfolioScenario
from loan_ledger.store import Ledger


class TestDemoPortfolioScenario:
    """Tests for DemoPortfolioScenario."""

    def test_generate_scenario(self, seed: int) -> None:
        scenario = DemoPortfolioScenario(num_customers=10, loans_per_customer=2, seed=seed)
        ledger = scenario.generate()

        assert len(ledger.customers) == 10
        assert len(ledger.loans) == 20
        for customer in ledger.customers:
            assert len(ledger.get_customer_loans(customer.customer_id)) == 2

    def test_balances_consistent(self, seed: int) -> None:
        ledger = DemoPortfolioScenario(num_customers=15, payoff_rate=0.5, seed=seed).generate()

        for loan in ledger.loans:
            balance = ledger.get_remaining_balance(loan.loan_id)
            assert balance >= 0
            assert (loan.status == LoanStatus.PAID_OFF) == (balance <= 0)

    def test_full_payoff(self, seed: int) -> None:
        ledger = DemoPortfolioScenario(num_customers=8, payoff_rate=1.0, seed=seed).generate()

        for loan in ledger.loans:
            assert loan.status == LoanStatus.PAID_OFF
            assert ledger.get_emis_left(loan.loan_id) == 0
            lump_sums = [p for p in ledger.get_loan_payments(loan.loan_id) if p.payment_type == PaymentType.LUMP_SUM]
            assert lump_sums

    def test_no_payoff(self, seed: int) -> None:
        ledger = DemoPortfolioScenario(num_customers=8, payoff_rate=0.0, seed=seed).generate()

        assert all(loan.status == LoanStatus.ACTIVE for loan in ledger.loans)
        assert all(p.payment_type == PaymentType.EMI for p in ledger.payments)

    def test_emi_count_bounded(self, seed: int) -> None:
        ledger = DemoPortfolioScenario(num_customers=10, payoff_rate=0.0, max_emis_paid=3, seed=seed).generate()

        for loan in ledger.loans:
            assert len(ledger.get_loan_payments(loan.loan_id)) <= 3

    def test_populates_given_ledger(self, ledger: Ledger, seed: int) -> None:
        result = DemoPortfolioScenario(num_customers=2, seed=seed, ledger=ledger).generate()

        assert result is ledger
        assert [c.customer_id for c in ledger.customers][-2:] == ["CUST004", "CUST005"]

    def test_reproducibility(self, seed: int) -> None:
        first = DemoPortfolioScenario(num_customers=5, payoff_rate=0.4, seed=seed).generate()
        second = DemoPortfolioScenario(num_customers=5, payoff_rate=0.4, seed=seed).generate()

        assert [c.name for c in first.customers] == [c.name for c in second.customers]
        assert [loan.total_amount for loan in first.loans] == [loan.total_amount for loan in second.loans]
        assert [p.amount for p in first.payments] == [p.amount for p in second.payments]

    @pytest.mark.parametrize("payoff_rate", [-0.1, 1.5])
    def test_invalid_payoff_rate(self, payoff_rate: float) -> None:
        with pytest.raises(ValueError, match="payoff_rate"):
            DemoPortfolioScenario(payoff_rate=payoff_rate)
