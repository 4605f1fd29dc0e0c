"""Tests for demo data generators."""

import pytest

from loan_ledger.amortization import compute
from loan_ledger.generators import CustomerNameGenerator, LoanProduct, LoanTerms, LoanTermsGenerator


class TestCustomerNameGenerator:
    """Tests for CustomerNameGenerator."""

    def test_generate(self, seed: int) -> None:
        name = CustomerNameGenerator(seed=seed).generate()

        assert isinstance(name, str)
        assert name.strip()

    def test_generate_batch(self, seed: int) -> None:
        names = list(CustomerNameGenerator(seed=seed).generate_batch(25))

        assert len(names) == 25
        assert all(name.strip() for name in names)

    def test_reproducibility(self, seed: int) -> None:
        first = list(CustomerNameGenerator(seed=seed).generate_batch(5))
        second = list(CustomerNameGenerator(seed=seed).generate_batch(5))

        assert first == second

    def test_locale(self) -> None:
        generator = CustomerNameGenerator(locale="en_US")
        assert generator.fake.locales == ["en_US"]


class TestLoanTermsGenerator:
    """Tests for LoanTermsGenerator."""

    def test_generate_returns_valid_terms(self, seed: int) -> None:
        generator = LoanTermsGenerator(seed=seed)

        for _ in range(200):
            terms = generator.generate()
            assert isinstance(terms, LoanTerms)
            assert terms.principal_amount > 0
            assert terms.loan_period_years > 0
            assert terms.interest_rate > 0
            compute(terms.principal_amount, terms.loan_period_years, terms.interest_rate)

    @pytest.mark.parametrize("product", list(LoanProduct))
    def test_product_ranges(self, seed: int, product: LoanProduct) -> None:
        generator = LoanTermsGenerator(seed=seed)
        (low, high), periods, (rate_low, rate_high) = LoanTermsGenerator.PRODUCT_TERMS[product]

        for _ in range(50):
            terms = generator.generate(product)
            assert low * 1000 <= terms.principal_amount <= high * 1000
            assert terms.principal_amount % 1000 == 0
            assert terms.loan_period_years in periods
            assert rate_low <= terms.interest_rate <= rate_high

    def test_reproducibility(self, seed: int) -> None:
        first = LoanTermsGenerator(seed=seed).generate()
        second = LoanTermsGenerator(seed=seed).generate()

        assert first == second

    def test_weights_cover_products(self) -> None:
        assert len(LoanTermsGenerator.PRODUCT_WEIGHTS) == len(LoanTermsGenerator.PRODUCTS)
        assert sum(LoanTermsGenerator.PRODUCT_WEIGHTS) == pytest.approx(1.0)
