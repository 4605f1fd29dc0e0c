"""Pytest configuration and fixtures."""

import itertools
from datetime import datetime, timezone

import pytest

from loan_ledger.store import Ledger

FIXED_NOW = datetime(2024, 6, 15, 10, 30, tzinfo=timezone.utc)


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def fixed_now() -> datetime:
    """Instant returned by the fixed clock."""
    return FIXED_NOW


@pytest.fixture
def fixed_clock(fixed_now):
    """Clock that always returns the same instant."""
    return lambda: fixed_now


@pytest.fixture
def ledger() -> Ledger:
    """Create a fresh ledger with the demo customers for each test."""
    ledger = Ledger()
    ledger.seed_demo_customers()
    return ledger


@pytest.fixture
def sequential_ledger(fixed_clock) -> Ledger:
    """Ledger with predictable ids (id-0001, id-0002, ...) and a fixed clock."""
    counter = itertools.count(1)
    ledger = Ledger(clock=fixed_clock, id_factory=lambda: f"id-{next(counter):04d}")
    ledger.seed_demo_customers()
    return ledger


@pytest.fixture
def sample_loan_id(ledger: Ledger) -> str:
    """100 000 at 10% for 5 years: total 150 000, EMI 2 500."""
    return ledger.create_loan("CUST001", 100000, 5, 10)
