"""Ready-made ledger scenarios."""

from loan_ledger.scenarios.demo_portfolio import DemoPortfolioScenario

__all__ = ["DemoPortfolioScenario"]
