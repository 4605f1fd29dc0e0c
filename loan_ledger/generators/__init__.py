"""Demo data generators."""

from loan_ledger.generators.customer import CustomerNameGenerator
from loan_ledger.generators.loan import LoanProduct, LoanTerms, LoanTermsGenerator

__all__ = [
    "CustomerNameGenerator",
    "LoanProduct",
    "LoanTerms",
    "LoanTermsGenerator",
]
