"""Data transfer objects for ledger and portfolio reads."""

from dataclasses import dataclass, field
from typing import List, Optional

from aura_lending.domain.entities import CreditScoreRecord, Obligation, Payment


@dataclass(frozen=True)
class PaymentResult:
    """A recorded payment together with the obligation state it produced."""

    payment: Payment
    obligation: Obligation


@dataclass(frozen=True)
class PortfolioDashboard:
    """
    Per-customer view of the credit position.

    Every amount is recomputed from current obligation state when the
    dashboard is built.
    """

    customer_id: str
    latest_score: Optional[CreditScoreRecord]
    total_borrowed_cents: int
    total_outstanding_cents: int
    total_repaid_cents: int
    available_credit_cents: int
    active_obligations: int
    obligations: List[Obligation] = field(default_factory=list)
