"""Demo portfolio scenario: a desk with customers, loans and repayments."""

from __future__ import annotations

import logging
import random

from loan_ledger.generators import CustomerNameGenerator, LoanTermsGenerator
from loan_ledger.models import PaymentType
from loan_ledger.store.ledger import Ledger

logger = logging.getLogger(__name__)

# A lump sum equal to the balance can leave float dust behind; settle it in a few passes at most
MAX_SETTLEMENT_PASSES = 3


class DemoPortfolioScenario:
    """Populate a ledger the way a loan desk would over a few months.

    This scenario creates:
    - Customers with generated names
    - One or more simple-interest loans per customer
    - Repayment history recorded through the public ledger API:
        - Regular EMI payments
        - Early settlement by lump sum (loan ends PAID_OFF)
    """

    def __init__(
        self,
        num_customers: int = 10,
        loans_per_customer: int = 1,
        payoff_rate: float = 0.2,
        max_emis_paid: int = 12,
        seed: int | None = None,
        ledger: Ledger | None = None,
    ) -> None:
        """Initialize demo portfolio scenario.

        Parameters
        ----------
        num_customers : int
            Number of customers to register.
        loans_per_customer : int
            Loans created for each customer.
        payoff_rate : float
            Share of loans settled in full (0.0 to 1.0).
        max_emis_paid : int
            Upper bound of EMI payments recorded per loan.
        seed : int | None
            Random seed for reproducibility.
        ledger : Ledger | None
            Ledger to populate; a fresh one is created when omitted.
        """
        if not 0.0 <= payoff_rate <= 1.0:
            raise ValueError(f"payoff_rate must be between 0 and 1, got {payoff_rate}")

        self.num_customers = num_customers
        self.loans_per_customer = loans_per_customer
        self.payoff_rate = payoff_rate
        self.max_emis_paid = max_emis_paid
        self.seed = seed

        if seed is not None:
            random.seed(seed)

        self.ledger = ledger if ledger is not None else Ledger()
        self._name_gen = CustomerNameGenerator(seed=seed)
        self._terms_gen = LoanTermsGenerator(seed=seed)

    def generate(self) -> Ledger:
        """Generate all data for the demo portfolio.

        Returns
        -------
        Ledger
            The populated ledger.
        """
        logger.info(
            "Starting demo portfolio: %d customers, %d loans each, %.0f%% settled",
            self.num_customers,
            self.loans_per_customer,
            self.payoff_rate * 100,
        )

        customer_ids = [self.ledger.add_customer(name) for name in self._name_gen.generate_batch(self.num_customers)]

        for customer_id in customer_ids:
            for _ in range(self.loans_per_customer):
                terms = self._terms_gen.generate()
                loan_id = self.ledger.create_loan(
                    customer_id,
                    terms.principal_amount,
                    terms.loan_period_years,
                    terms.interest_rate,
                )
                self._replay_payments(loan_id)

        logger.info("Demo portfolio complete: %s", self.ledger.summary())
        return self.ledger

    def _replay_payments(self, loan_id: str) -> None:
        loan = self.ledger.get_loan_by_id(loan_id)
        emis = random.randint(0, min(self.max_emis_paid, self.ledger.get_emis_left(loan_id) - 1))

        for _ in range(emis):
            amount = min(loan.monthly_emi, self.ledger.get_remaining_balance(loan_id))
            self.ledger.record_payment(loan_id, amount, PaymentType.EMI).unwrap()

        if random.random() < self.payoff_rate:
            self._settle(loan_id)

    def _settle(self, loan_id: str) -> None:
        for _ in range(MAX_SETTLEMENT_PASSES):
            balance = self.ledger.get_remaining_balance(loan_id)
            if balance <= 0:
                return
            self.ledger.record_payment(loan_id, balance, PaymentType.LUMP_SUM).unwrap()
