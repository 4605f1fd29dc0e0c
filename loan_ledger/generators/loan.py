"""Loan terms generator."""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum

from loan_ledger.generators.base import BaseGenerator


class LoanProduct(str, Enum):
    PERSONAL = "PERSONAL"
    VEHICLE = "VEHICLE"
    HOME = "HOME"


@dataclass(frozen=True)
class LoanTerms:
    """Arguments for ``Ledger.create_loan``."""

    principal_amount: float
    loan_period_years: float
    interest_rate: float  # Annual percentage


class LoanTermsGenerator(BaseGenerator):
    """Generate plausible simple-interest loan terms."""

    PRODUCTS = list(LoanProduct)
    PRODUCT_WEIGHTS = [0.60, 0.30, 0.10]

    # (principal range in thousands, allowed terms in years, annual rate range %)
    PRODUCT_TERMS = {
        LoanProduct.PERSONAL: ((50, 1000), [1, 2, 3, 4, 5], (10.5, 18.0)),
        LoanProduct.VEHICLE: ((200, 1500), [3, 4, 5, 7], (8.5, 12.0)),
        LoanProduct.HOME: ((1000, 10000), [10, 15, 20], (7.5, 9.5)),
    }

    def generate(self, product: LoanProduct | None = None) -> LoanTerms:
        """Generate loan terms.

        Parameters
        ----------
        product : LoanProduct | None
            Product to draw terms for; picked by weight when omitted.

        Returns
        -------
        LoanTerms
            Positive principal, period and rate.
        """
        if product is None:
            product = random.choices(self.PRODUCTS, weights=self.PRODUCT_WEIGHTS, k=1)[0]

        (low, high), periods, (rate_low, rate_high) = self.PRODUCT_TERMS[product]
        return LoanTerms(
            principal_amount=float(random.randint(low, high) * 1000),
            loan_period_years=float(random.choice(periods)),
            interest_rate=round(random.uniform(rate_low, rate_high), 2),
        )
