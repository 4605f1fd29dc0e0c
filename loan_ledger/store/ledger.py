"""In-memory loan ledger with serialized mutations."""

from __future__ import annotations

import itertools
import logging
import math
import threading
import uuid
from collections import deque
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from numbers import Real
from typing import TYPE_CHECKING, Callable

from loan_ledger import amortization
from loan_ledger.exceptions import (
    InvalidEntityStateError,
    LoanNotFoundError,
    ReferentialIntegrityError,
    ValidationError,
)
from loan_ledger.models import (
    Customer,
    Event,
    EventType,
    Loan,
    LoanStatus,
    Payment,
    PaymentFailure,
    PaymentType,
)
from loan_ledger.result import PaymentResult
from loan_ledger.serialization import to_dict

if TYPE_CHECKING:
    from loan_ledger.config import LedgerConfig

logger = logging.getLogger(__name__)

EVENT_SOURCE = "loan-ledger"
CUSTOMER_ID_PREFIX = "CUST"

# Customers preloaded by the loan desk demo
DEMO_CUSTOMERS = ("John Doe", "Jane Smith", "Robert Johnson")

Listener = Callable[[Event], None]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True)
class LedgerSnapshot:
    """Consistent point-in-time copy of the ledger collections.

    Balances are folded from ``payments`` exactly the way the ledger folds
    them, so figures computed from a snapshot match the live queries made
    at the same moment.
    """

    customers: tuple[Customer, ...]
    loans: tuple[Loan, ...]
    payments: tuple[Payment, ...]

    def get_customer(self, customer_id: str) -> Customer | None:
        return next((c for c in self.customers if c.customer_id == customer_id), None)

    def get_loan(self, loan_id: str) -> Loan | None:
        return next((loan for loan in self.loans if loan.loan_id == loan_id), None)

    def customer_loans(self, customer_id: str) -> list[Loan]:
        return [loan for loan in self.loans if loan.customer_id == customer_id]

    def loan_payments(self, loan_id: str) -> list[Payment]:
        return [p for p in self.payments if p.loan_id == loan_id]

    def total_paid(self, loan_id: str) -> float:
        return amortization.total_paid(p.amount for p in self.payments if p.loan_id == loan_id)

    def remaining_balance(self, loan: Loan) -> float:
        return loan.total_amount - self.total_paid(loan.loan_id)


class Ledger:
    """Owner of all customers, loans and payments.

    Every mutation runs under a single re-entrant lock, so the balance check
    in :meth:`record_payment`, the payment append and the status change are
    observed as one step. Queries take the same lock and therefore never see
    a payment without its status update.

    Balances are never cached: each query folds the loan's payment amounts
    in the order they were recorded.

    Parameters
    ----------
    require_known_customer : bool
        Reject loans for customer ids that were never registered.
    clock : Callable[[], datetime] | None
        Source of ``created_at`` / ``payment_date`` timestamps.
    id_factory : Callable[[], str] | None
        Source of loan and payment ids (default: random UUID4 strings).
    """

    def __init__(
        self,
        *,
        require_known_customer: bool = True,
        clock: Callable[[], datetime] | None = None,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self.require_known_customer = require_known_customer
        self._clock = clock or _utcnow
        self._new_id = id_factory or _new_id
        self._lock = threading.RLock()

        # Primary entities, insertion ordered
        self._customers: dict[str, Customer] = {}
        self._loans: dict[str, Loan] = {}
        self._payments: list[Payment] = []

        # Relationship indexes
        self._customer_loans: dict[str, list[str]] = {}
        self._loan_payments: dict[str, list[int]] = {}

        self._customer_seq = itertools.count(1)
        self._listeners: list[Listener] = []

        # Events committed but not yet delivered, in commit order
        self._outbox: deque[tuple[Event, list[Listener]]] = deque()
        self._event_seq = itertools.count(1)
        self._publish_lock = threading.Lock()

    @classmethod
    def from_config(cls, config: LedgerConfig) -> Ledger:
        """Create a ledger from configuration."""
        ledger = cls(require_known_customer=config.require_known_customer)
        if config.seed_demo_customers:
            ledger.seed_demo_customers()
        return ledger

    # Read-only collections
    @property
    def customers(self) -> tuple[Customer, ...]:
        with self._lock:
            return tuple(self._customers.values())

    @property
    def loans(self) -> tuple[Loan, ...]:
        with self._lock:
            return tuple(self._loans.values())

    @property
    def payments(self) -> tuple[Payment, ...]:
        with self._lock:
            return tuple(self._payments)

    def snapshot(self) -> LedgerSnapshot:
        """Return all three collections captured atomically."""
        with self._lock:
            return LedgerSnapshot(
                customers=tuple(self._customers.values()),
                loans=tuple(self._loans.values()),
                payments=tuple(self._payments),
            )

    # Customers
    def add_customer(self, name: str) -> str:
        """Register a customer and return its ``CUSTnnn`` id."""
        if not isinstance(name, str) or not name.strip():
            raise ValidationError("Customer name must be a non-empty string")

        with self._lock:
            customer_id = f"{CUSTOMER_ID_PREFIX}{next(self._customer_seq):03d}"
            customer = Customer(customer_id=customer_id, name=name.strip(), created_at=self._clock())
            self._customers[customer_id] = customer
            self._customer_loans[customer_id] = []
            self._enqueue(EventType.CUSTOMER_REGISTERED, customer_id, customer)

        logger.info("Registered customer %s", customer_id, extra={"customer_id": customer_id})
        self._drain()
        return customer_id

    def seed_demo_customers(self) -> list[str]:
        """Register the demo desk's default customers."""
        return [self.add_customer(name) for name in DEMO_CUSTOMERS]

    def get_customer(self, customer_id: str) -> Customer | None:
        with self._lock:
            return self._customers.get(customer_id)

    def find_customer(self, query: str) -> Customer | None:
        """Find a customer by id (case-insensitive) or by part of the name."""
        needle = query.strip().lower()
        if not needle:
            return None
        with self._lock:
            for customer in self._customers.values():
                if customer.customer_id.lower() == needle or needle in customer.name.lower():
                    return customer
        return None

    # Loans
    def create_loan(
        self,
        customer_id: str,
        principal_amount: float,
        loan_period_years: float,
        interest_rate: float,
    ) -> str:
        """Originate a simple-interest loan and return its id.

        Raises
        ------
        InvalidLoanTermsError
            If principal, period or rate is not a finite number > 0.
        ReferentialIntegrityError
            If ``require_known_customer`` is set and the customer is unknown.
        """
        quote = amortization.compute(principal_amount, loan_period_years, interest_rate)

        with self._lock:
            if self.require_known_customer and customer_id not in self._customers:
                raise ReferentialIntegrityError(f"Customer {customer_id} not found")

            loan_id = self._new_id()
            if loan_id in self._loans:
                raise InvalidEntityStateError(f"Loan id {loan_id} already issued")

            loan = Loan(
                loan_id=loan_id,
                customer_id=customer_id,
                principal_amount=float(principal_amount),
                interest_rate=float(interest_rate),
                loan_period_years=float(loan_period_years),
                monthly_emi=quote.monthly_emi,
                total_amount=quote.total_amount,
                status=LoanStatus.ACTIVE,
                created_at=self._clock(),
            )
            self._loans[loan_id] = loan
            self._customer_loans.setdefault(customer_id, []).append(loan_id)
            self._loan_payments[loan_id] = []
            self._enqueue(EventType.LOAN_CREATED, loan_id, loan)

        logger.info(
            "Created loan %s for %s: total=%s emi=%s",
            loan_id,
            customer_id,
            loan.total_amount,
            loan.monthly_emi,
            extra={"loan_id": loan_id, "customer_id": customer_id},
        )
        self._drain()
        return loan_id

    def get_loan_by_id(self, loan_id: str) -> Loan | None:
        with self._lock:
            return self._loans.get(loan_id)

    def get_customer_loans(self, customer_id: str) -> list[Loan]:
        """Get all loans for a customer in creation order."""
        with self._lock:
            loan_ids = self._customer_loans.get(customer_id, [])
            return [self._loans[lid] for lid in loan_ids]

    def find_loan(self, query: str) -> Loan | None:
        """Find a loan by exact id, falling back to a partial id match."""
        needle = query.strip()
        if not needle:
            return None
        with self._lock:
            loan = self._loans.get(needle)
            if loan is not None:
                return loan
            needle = needle.lower()
            return next((c for c in self._loans.values() if needle in c.loan_id.lower()), None)

    # Payments
    def record_payment(
        self,
        loan_id: str,
        amount: float,
        payment_type: PaymentType | str = PaymentType.EMI,
    ) -> PaymentResult:
        """Apply a payment to a loan.

        Rejections are returned as a failed :class:`PaymentResult` and leave
        the ledger exactly as it was. When the payment brings the balance to
        zero or below, the loan moves to ``PAID_OFF`` in the same critical
        section as the append.
        """
        with self._lock:
            loan = self._loans.get(loan_id)
            if loan is None:
                return self._reject(PaymentFailure.LOAN_NOT_FOUND, f"Loan {loan_id} not found")

            balance = self._balance(loan)

            try:
                payment_type = PaymentType(payment_type)
            except ValueError:
                return self._reject(
                    PaymentFailure.INVALID_PAYMENT_TYPE,
                    f"Unknown payment type {payment_type!r}",
                    balance,
                )

            if isinstance(amount, bool) or not isinstance(amount, Real) or not math.isfinite(amount) or amount <= 0:
                return self._reject(
                    PaymentFailure.INVALID_AMOUNT,
                    f"Payment amount must be greater than zero, got {amount!r}",
                    balance,
                )

            if loan.status == LoanStatus.PAID_OFF:
                return self._reject(PaymentFailure.LOAN_PAID_OFF, f"Loan {loan_id} is already paid off", balance)

            if amount > balance:
                return self._reject(
                    PaymentFailure.EXCEEDS_BALANCE,
                    f"Payment of {amount} exceeds remaining balance of {balance}",
                    balance,
                )

            payment = Payment(
                payment_id=self._new_id(),
                loan_id=loan_id,
                amount=float(amount),
                payment_type=payment_type,
                payment_date=self._clock(),
            )
            self._loan_payments[loan_id].append(len(self._payments))
            self._payments.append(payment)
            self._enqueue(EventType.PAYMENT_RECORDED, payment.payment_id, payment)

            new_balance = self._balance(loan)
            paid_off = new_balance <= 0
            if paid_off:
                loan = replace(loan, status=LoanStatus.PAID_OFF)
                self._loans[loan_id] = loan
                self._enqueue(EventType.LOAN_PAID_OFF, loan_id, loan)

        logger.info(
            "Recorded %s payment %s on loan %s: amount=%s remaining=%s",
            payment.payment_type.value,
            payment.payment_id,
            loan_id,
            payment.amount,
            new_balance,
            extra={"loan_id": loan_id, "payment_id": payment.payment_id},
        )
        if paid_off:
            logger.info("Loan %s paid off", loan_id, extra={"loan_id": loan_id})

        self._drain()

        return PaymentResult.ok(payment.payment_id, new_balance, paid_off)

    def get_loan_payments(self, loan_id: str) -> list[Payment]:
        """Get all payments for a loan in recording order."""
        with self._lock:
            indices = self._loan_payments.get(loan_id, [])
            return [self._payments[i] for i in indices]

    # Derived figures
    def get_total_paid(self, loan_id: str) -> float:
        with self._lock:
            return self._total_paid(self._require_loan(loan_id))

    def get_remaining_balance(self, loan_id: str) -> float:
        """Total amount minus every payment recorded against the loan.

        Raises
        ------
        LoanNotFoundError
            If the loan does not exist.
        """
        with self._lock:
            return self._balance(self._require_loan(loan_id))

    def get_emis_left(self, loan_id: str) -> int:
        """Instalments of ``monthly_emi`` needed to clear the balance.

        Raises
        ------
        LoanNotFoundError
            If the loan does not exist.
        """
        with self._lock:
            loan = self._require_loan(loan_id)
            return amortization.emis_left(self._balance(loan), loan.monthly_emi)

    def summary(self) -> dict[str, int]:
        """Return summary counts of all entities."""
        with self._lock:
            active = sum(1 for loan in self._loans.values() if loan.status == LoanStatus.ACTIVE)
            return {
                "customers": len(self._customers),
                "loans": len(self._loans),
                "active_loans": active,
                "paid_off_loans": len(self._loans) - active,
                "payments": len(self._payments),
            }

    # Events
    def subscribe(self, listener: Listener) -> None:
        """Call ``listener`` with an :class:`Event` after every committed change.

        Events reach listeners one at a time in commit order, numbered by
        ``event.metadata["sequence"]``. Delivery may happen on whichever
        thread is draining the queue.
        """
        with self._lock:
            self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        with self._lock:
            try:
                self._listeners.remove(listener)
            except ValueError:
                logger.warning("Listener %r was not subscribed", listener)

    def _enqueue(self, event_type: EventType, subject: str, record: object) -> None:
        # Called with the lock held, so outbox order is commit order
        if not self._listeners:
            return
        sequence = next(self._event_seq)
        event = Event(
            event_id=_new_id(),
            event_type=event_type.value,
            event_time=self._clock(),
            source=EVENT_SOURCE,
            subject=subject,
            data=to_dict(record),
            metadata={"sequence": sequence},
        )
        self._outbox.append((event, list(self._listeners)))

    def _drain(self) -> None:
        """Deliver queued events, one thread at a time, in commit order.

        A thread that finds another delivery in progress returns at once;
        the delivering thread keeps going until the outbox is empty. A
        listener that mutates the ledger therefore has its follow-up events
        delivered after the current one reaches every listener.
        """
        while True:
            if not self._publish_lock.acquire(blocking=False):
                return
            try:
                while True:
                    with self._lock:
                        if not self._outbox:
                            break
                        event, listeners = self._outbox.popleft()
                    self._deliver(event, listeners)
            finally:
                self._publish_lock.release()

            # Events queued while the publish lock was being released
            with self._lock:
                if not self._outbox:
                    return

    def _deliver(self, event: Event, listeners: list[Listener]) -> None:
        for listener in listeners:
            try:
                listener(event)
            except Exception:
                # Change is already committed
                logger.exception(
                    "Listener %r failed on %s for %s",
                    listener,
                    event.event_type,
                    event.subject,
                    extra={"event_type": event.event_type},
                )

    # Internals (call with the lock held)
    def _require_loan(self, loan_id: str) -> Loan:
        loan = self._loans.get(loan_id)
        if loan is None:
            raise LoanNotFoundError(f"Loan {loan_id} not found")
        return loan

    def _total_paid(self, loan: Loan) -> float:
        return amortization.total_paid(self._payments[i].amount for i in self._loan_payments[loan.loan_id])

    def _balance(self, loan: Loan) -> float:
        return loan.total_amount - self._total_paid(loan)

    def _reject(
        self,
        reason: PaymentFailure,
        message: str,
        balance: float | None = None,
    ) -> PaymentResult:
        logger.warning("Payment rejected (%s): %s", reason.value, message, extra={"reason": reason.value})
        return PaymentResult.fail(reason, message, balance)
