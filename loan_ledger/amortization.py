"""Simple-interest amortization.

Interest is charged once on the original principal for the whole term
(``I = P * N * R``) and the total is split into equal monthly instalments.
Nothing is compounded and nothing is rounded; display rounding belongs to
whoever renders the figures.

Usage::

    quote = compute(100000, 5, 10)
    quote.total_amount   # 150000.0
    quote.monthly_emi    # 2500.0
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Real
from typing import Iterable

from loan_ledger.exceptions import InvalidLoanTermsError

MONTHS_PER_YEAR = 12


@dataclass(frozen=True)
class AmortizationQuote:
    """Figures derived from a loan's terms at origination."""

    total_interest: float
    total_amount: float
    monthly_emi: float


def compute(principal: float, period_years: float, annual_rate_percent: float) -> AmortizationQuote:
    """Compute total interest, total repayable amount and the monthly EMI.

    Parameters
    ----------
    principal : float
        Amount borrowed, > 0.
    period_years : float
        Loan term in years, > 0; may be fractional.
    annual_rate_percent : float
        Annual interest rate as a percentage (10 means 10%), > 0.

    Returns
    -------
    AmortizationQuote
        Unrounded figures.

    Raises
    ------
    InvalidLoanTermsError
        If any argument is not a finite number greater than zero.
    """
    principal = _positive("principal", principal)
    period_years = _positive("period_years", period_years)
    annual_rate_percent = _positive("annual_rate_percent", annual_rate_percent)

    total_interest = principal * period_years * (annual_rate_percent / 100)
    total_amount = principal + total_interest
    monthly_emi = total_amount / (period_years * MONTHS_PER_YEAR)

    return AmortizationQuote(
        total_interest=total_interest,
        total_amount=total_amount,
        monthly_emi=monthly_emi,
    )


def emis_left(remaining_balance: float, monthly_emi: float) -> int:
    """Number of instalments still needed to clear ``remaining_balance``."""
    if remaining_balance <= 0:
        return 0
    return math.ceil(remaining_balance / monthly_emi)


def total_paid(amounts: Iterable[float]) -> float:
    """Left fold of payment amounts in recording order.

    Never ``sum()``: from Python 3.12 it compensates float rounding and
    stops matching the fold.
    """
    total = 0.0
    for amount in amounts:
        total += amount
    return total


def _positive(name: str, value: object) -> float:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidLoanTermsError(f"{name} must be a number, got {value!r}")
    value = float(value)
    if not math.isfinite(value) or value <= 0:
        raise InvalidLoanTermsError(f"{name} must be a finite number greater than zero, got {value!r}")
    return value
