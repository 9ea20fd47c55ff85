"""Financing obligation entities.

An obligation is one of three products originated against a credit score.
The variants share a common envelope (ObligationBase) and are handled as a
closed union, so callers dispatch with structural pattern matching:

    match obligation:
        case NetTermsObligation(): ...
        case WorkingCapitalLoan() | RevenueBasedFinancing(): ...
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import ClassVar, List, Optional, Union
from uuid import UUID, uuid4

from aura_lending.domain.exceptions import AlreadyCompletedException


class ObligationType(str, Enum):
    NET_TERMS = "net_terms"
    WORKING_CAPITAL = "working_capital"
    REVENUE_BASED_FINANCING = "revenue_based_financing"


class ObligationStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    PAID_OFF = "paid_off"


@dataclass(frozen=True)
class Payment:
    """
    A payment applied to an obligation.

    Payments are append-only: once recorded they are never edited or removed.
    revenue_for_period_cents is informational and only meaningful for
    revenue-based financing.
    """

    obligation_id: UUID
    amount_cents: int
    paid_at: datetime
    revenue_for_period_cents: Optional[int] = None
    id: UUID = field(default_factory=uuid4)


@dataclass(kw_only=True)
class ObligationBase:
    """
    Common envelope shared by all obligation variants.

    Status only moves forward: ACTIVE -> COMPLETED or ACTIVE -> PAID_OFF.
    The version field is bumped by the repository on every persisted change
    and backs optimistic concurrency control.
    """

    type: ClassVar[ObligationType]

    customer_id: str
    credit_score_at_origination: int
    originated_at: datetime
    id: UUID = field(default_factory=uuid4)
    status: ObligationStatus = ObligationStatus.ACTIVE
    completed_at: Optional[datetime] = None
    version: int = 0

    @property
    def is_active(self) -> bool:
        return self.status == ObligationStatus.ACTIVE

    @property
    def borrowed_cents(self) -> int:
        """Original amount extended to the customer."""
        raise NotImplementedError

    @property
    def outstanding_cents(self) -> int:
        """Amount still owed; zero once the obligation is terminal."""
        raise NotImplementedError

    def _ensure_active(self) -> None:
        if not self.is_active:
            raise AlreadyCompletedException(str(self.id), self.status.value)

    def _terminate(self, status: ObligationStatus, at: datetime) -> None:
        self._ensure_active()
        self.status = status
        self.completed_at = at


@dataclass(kw_only=True)
class NetTermsObligation(ObligationBase):
    """Trade credit: the platform pays the supplier early, the customer pays later."""

    type: ClassVar[ObligationType] = ObligationType.NET_TERMS

    supplier_id: str
    invoice_amount_cents: int
    fee_amount_cents: int
    fee_rate: float
    supplier_payment_due_at: datetime
    customer_payment_due_at: datetime
    supplier_paid_at: Optional[datetime] = None
    customer_paid_at: Optional[datetime] = None
    amount_repaid_cents: int = 0

    @property
    def total_due_cents(self) -> int:
        return self.invoice_amount_cents + self.fee_amount_cents

    @property
    def borrowed_cents(self) -> int:
        return self.invoice_amount_cents

    @property
    def outstanding_cents(self) -> int:
        return self.total_due_cents if self.is_active else 0

    def settle(self, payment: Payment) -> None:
        """A single customer payment settles the contract."""
        self._terminate(ObligationStatus.COMPLETED, payment.paid_at)
        self.customer_paid_at = payment.paid_at
        self.amount_repaid_cents = payment.amount_cents


@dataclass(kw_only=True)
class RepayableObligation(ObligationBase):
    """
    Base for products repaid through a stream of payments.

    amount_repaid_cents and remaining_cents are always derived from the full
    payment history, never kept as a running balance.
    """

    total_repayment_cents: int
    payments: List[Payment] = field(default_factory=list)

    @property
    def amount_repaid_cents(self) -> int:
        return sum(p.amount_cents for p in self.payments)

    @property
    def remaining_cents(self) -> int:
        return max(0, self.total_repayment_cents - self.amount_repaid_cents)

    @property
    def outstanding_cents(self) -> int:
        return self.remaining_cents if self.is_active else 0

    def apply_payment(self, payment: Payment) -> None:
        """Append a payment and pay the obligation off once nothing remains."""
        self._ensure_active()
        self.payments.append(payment)
        if self.remaining_cents <= 0:
            self._terminate(ObligationStatus.PAID_OFF, payment.paid_at)


@dataclass(kw_only=True)
class WorkingCapitalLoan(RepayableObligation):
    """Fixed-term loan with simple (non-amortized) interest."""

    type: ClassVar[ObligationType] = ObligationType.WORKING_CAPITAL

    principal_cents: int
    interest_rate: float
    total_interest_cents: int
    origination_fee_cents: int
    monthly_payment_cents: int
    term_months: int
    first_payment_due_at: datetime
    final_payment_due_at: datetime

    @property
    def borrowed_cents(self) -> int:
        return self.principal_cents


@dataclass(kw_only=True)
class RevenueBasedFinancing(RepayableObligation):
    """Advance repaid as a share of revenue until a fixed multiple is reached."""

    type: ClassVar[ObligationType] = ObligationType.REVENUE_BASED_FINANCING

    advance_amount_cents: int
    repayment_multiple: float
    revenue_share_rate: float
    expected_completion_months: int
    expected_completion_at: datetime

    @property
    def revenue_share_percent(self) -> float:
        return round(self.revenue_share_rate * 100, 2)

    @property
    def borrowed_cents(self) -> int:
        return self.advance_amount_cents


Obligation = Union[NetTermsObligation, WorkingCapitalLoan, RevenueBasedFinancing]
