"""Customer name generator."""

from __future__ import annotations

from typing import Iterator

from loan_ledger.generators.base import BaseGenerator


class CustomerNameGenerator(BaseGenerator):
    """Generate realistic borrower names."""

    def generate(self) -> str:
        """Generate a single customer name."""
        return self.fake.name()

    def generate_batch(self, count: int) -> Iterator[str]:
        """Generate multiple customer names.

        Parameters
        ----------
        count : int
            Number of names to generate.

        Yields
        ------
        str
            Generated names.
        """
        for _ in range(count):
            yield self.fake.name()
