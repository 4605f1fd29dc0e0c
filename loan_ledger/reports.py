"""Read-only reports derived from a ledger snapshot.

All figures are recomputed from the snapshot's payments; nothing here
mutates the ledger. Take the snapshot once and pass it to several reports
when they must agree with each other::

    snapshot = ledger.snapshot()
    dashboard = portfolio_summary(snapshot)
    statement = loan_statement(snapshot, loan_id)
"""

from __future__ import annotations

from dataclasses import dataclass, field

from loan_ledger.amortization import emis_left
from loan_ledger.exceptions import CustomerNotFoundError, LoanNotFoundError
from loan_ledger.models import Customer, Loan, LoanStatus, Payment, PaymentType
from loan_ledger.store.ledger import LedgerSnapshot


@dataclass(frozen=True)
class PortfolioSummary:
    """Desk-wide totals."""

    total_loans: int
    total_borrowers: int  # Distinct customers holding at least one loan
    total_disbursed: float
    total_outstanding: float
    active_loans: int
    recent_loans: tuple[Loan, ...]  # Newest first


@dataclass(frozen=True)
class LoanPosition:
    """One loan's standing inside a customer overview."""

    loan: Loan
    amount_paid: float
    remaining_balance: float
    emis_left: int


@dataclass(frozen=True)
class CustomerOverview:
    """Aggregated position of one customer across all their loans."""

    customer: Customer
    total_loans: int
    total_principal: float
    total_amount: float
    total_interest: float
    total_paid: float
    total_outstanding: float
    active_loans: int
    percent_paid: float
    positions: tuple[LoanPosition, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class StatementEntry:
    """A payment with the balance left once it was applied."""

    payment: Payment
    running_paid: float
    running_balance: float


@dataclass(frozen=True)
class LoanStatement:
    """Transaction ledger of a single loan."""

    loan: Loan
    customer: Customer | None  # None when the loan predates the customer record
    entries: tuple[StatementEntry, ...]
    total_paid: float
    remaining_balance: float
    emis_left: int
    emi_payment_count: int
    lump_sum_payment_count: int
    percent_paid: float

    @property
    def last_payment(self) -> Payment | None:
        return self.entries[-1].payment if self.entries else None


def portfolio_summary(snapshot: LedgerSnapshot, recent: int = 3) -> PortfolioSummary:
    """Summarize every loan on the desk.

    Parameters
    ----------
    snapshot : LedgerSnapshot
        Ledger state to report on.
    recent : int
        How many of the latest loans to include, newest first.
    """
    total_outstanding = 0.0
    active = 0
    for loan in snapshot.loans:
        paid = snapshot.total_paid(loan.loan_id)
        total_outstanding += loan.total_amount - paid
        if paid < loan.total_amount:
            active += 1

    recent_loans = tuple(reversed(snapshot.loans[-recent:])) if recent > 0 else ()

    return PortfolioSummary(
        total_loans=len(snapshot.loans),
        total_borrowers=len({loan.customer_id for loan in snapshot.loans}),
        total_disbursed=sum(loan.principal_amount for loan in snapshot.loans),
        total_outstanding=total_outstanding,
        active_loans=active,
        recent_loans=recent_loans,
    )


def customer_overview(snapshot: LedgerSnapshot, customer_id: str) -> CustomerOverview:
    """Aggregate a customer's loans.

    Raises
    ------
    CustomerNotFoundError
        If the customer is not registered.
    """
    customer = snapshot.get_customer(customer_id)
    if customer is None:
        raise CustomerNotFoundError(f"Customer {customer_id} not found")

    loans = snapshot.customer_loans(customer_id)
    positions = []
    for loan in loans:
        paid = snapshot.total_paid(loan.loan_id)
        balance = loan.total_amount - paid
        positions.append(
            LoanPosition(
                loan=loan,
                amount_paid=paid,
                remaining_balance=balance,
                emis_left=emis_left(balance, loan.monthly_emi),
            )
        )

    total_principal = sum(loan.principal_amount for loan in loans)
    total_amount = sum(loan.total_amount for loan in loans)
    total_paid = sum(p.amount_paid for p in positions)

    return CustomerOverview(
        customer=customer,
        total_loans=len(loans),
        total_principal=total_principal,
        total_amount=total_amount,
        total_interest=total_amount - total_principal,
        total_paid=total_paid,
        total_outstanding=sum(p.remaining_balance for p in positions),
        active_loans=sum(1 for loan in loans if loan.status == LoanStatus.ACTIVE),
        percent_paid=(total_paid / total_amount) * 100 if total_amount > 0 else 0.0,
        positions=tuple(positions),
    )


def loan_statement(snapshot: LedgerSnapshot, loan_id: str) -> LoanStatement:
    """Build the payment ledger of a loan with running balances.

    Raises
    ------
    LoanNotFoundError
        If the loan does not exist.
    """
    loan = snapshot.get_loan(loan_id)
    if loan is None:
        raise LoanNotFoundError(f"Loan {loan_id} not found")

    entries = []
    running_paid = 0.0
    for payment in snapshot.loan_payments(loan_id):
        running_paid += payment.amount
        entries.append(
            StatementEntry(
                payment=payment,
                running_paid=running_paid,
                running_balance=loan.total_amount - running_paid,
            )
        )

    balance = loan.total_amount - running_paid

    return LoanStatement(
        loan=loan,
        customer=snapshot.get_customer(loan.customer_id),
        entries=tuple(entries),
        total_paid=running_paid,
        remaining_balance=balance,
        emis_left=emis_left(balance, loan.monthly_emi),
        emi_payment_count=sum(1 for e in entries if e.payment.payment_type == PaymentType.EMI),
        lump_sum_payment_count=sum(1 for e in entries if e.payment.payment_type == PaymentType.LUMP_SUM),
        percent_paid=(running_paid / loan.total_amount) * 100,
    )
