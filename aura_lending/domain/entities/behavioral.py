"""Behavioral input supplied by the CDP analytics collaborator."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional


@dataclass(frozen=True)
class RevenuePeriod:
    """Revenue recognized in a single reporting period (usually a month)."""

    period: str
    amount_cents: int


@dataclass(frozen=True)
class PaymentBehavior:
    """A historical payment made by the merchant and whether it was on time."""

    amount_cents: int
    paid_on_time: bool


@dataclass(frozen=True)
class BehavioralInput:
    """
    Pre-computed financial signals for one merchant account.

    Every field is optional in practice: missing signals degrade the
    corresponding sub-score to a neutral default instead of failing.

    Attributes:
        revenue_history: Ordered revenue periods, oldest first
        annual_retention: Cohort annual retention rate (0-1)
        ltv_cents: Customer lifetime value
        cac_cents: Customer acquisition cost
        transaction_history: Past payments with on-time flags
        account_created_at: When the merchant account was opened
    """

    revenue_history: List[RevenuePeriod] = field(default_factory=list)
    annual_retention: Optional[float] = None
    ltv_cents: Optional[int] = None
    cac_cents: Optional[int] = None
    transaction_history: List[PaymentBehavior] = field(default_factory=list)
    account_created_at: Optional[datetime] = None
