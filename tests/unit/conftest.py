"""
Fixtures for unit tests.

Provides:
- A fixed clock and a deterministic id generator
- Credit score record factory for any score
- In-memory repositories
- Recording notification client and stub CDP client
- Application services wired to the above
"""

from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional
from uuid import UUID

import pytest

from aura_lending.application.services import (
    LedgerService,
    OriginationService,
    PortfolioService,
    ScoringService,
)
from aura_lending.domain.entities import (
    BehavioralInput,
    CreditScoreRecord,
    Obligation,
    PaymentBehavior,
    RevenuePeriod,
)
from aura_lending.domain.exceptions import CustomerNotFoundException
from aura_lending.domain.interfaces import CDPAnalyticsClient, NotificationClient
from aura_lending.infrastructure.repositories import (
    InMemoryCreditScoreRepository,
    InMemoryObligationRepository,
)
from aura_lending.service.scoring import (
    approval_likelihood,
    resolve_risk_tier,
    score_to_rating,
)

FIXED_NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


# =============================================================================
# Test Doubles
# =============================================================================

class RecordingNotificationClient(NotificationClient):
    """Notification client that records events instead of sending them."""

    def __init__(self):
        self.events = []

    async def send_score_tier_changed(
        self,
        record: CreditScoreRecord,
        previous_tier: str,
    ) -> bool:
        self.events.append({
            "event": "score_tier_changed",
            "customer_id": record.customer_id,
            "previous_tier": previous_tier,
            "new_tier": record.risk_tier,
        })
        return True

    async def send_payment_due(self, obligation: Obligation) -> bool:
        self.events.append({
            "event": "payment_due",
            "customer_id": obligation.customer_id,
            "obligation_id": str(obligation.id),
            "type": obligation.type.value,
        })
        return True


class StubCDPAnalyticsClient(CDPAnalyticsClient):
    """CDP client serving canned behavioral inputs by customer id."""

    def __init__(self, inputs: Optional[dict] = None):
        self.inputs = inputs or {}
        self.call_count = 0

    async def get_behavioral_input(self, customer_id: str) -> BehavioralInput:
        self.call_count += 1
        if customer_id not in self.inputs:
            raise CustomerNotFoundException(customer_id)
        return self.inputs[customer_id]


class SequentialIds:
    """Deterministic UUID generator: 00000000-...-000000000001, ...002, ..."""

    def __init__(self):
        self.count = 0

    def __call__(self) -> UUID:
        self.count += 1
        return UUID(int=self.count)


# =============================================================================
# Data Factories
# =============================================================================

def build_record(
    customer_id: str,
    score: int,
    calculated_at: datetime = FIXED_NOW,
) -> CreditScoreRecord:
    """Credit score record for an arbitrary score, with no factor breakdown."""
    tier = resolve_risk_tier(score)
    return CreditScoreRecord(
        customer_id=customer_id,
        score=score,
        rating=score_to_rating(score),
        risk_tier=tier.name,
        factors={},
        max_credit_limit_cents=tier.max_credit_limit_cents,
        interest_rate_ceiling=tier.interest_rate_ceiling,
        approval_likelihood=approval_likelihood(score),
        calculated_at=calculated_at,
    )


def strong_merchant_input(now: datetime = FIXED_NOW) -> BehavioralInput:
    """10% monthly growth, 75% retention, 5:1 LTV/CAC, 10/10 on time, 24 months."""
    return BehavioralInput(
        revenue_history=[
            RevenuePeriod("2025-03", 100000),
            RevenuePeriod("2025-04", 110000),
            RevenuePeriod("2025-05", 121000),
        ],
        annual_retention=0.75,
        ltv_cents=500,
        cac_cents=100,
        transaction_history=[PaymentBehavior(10000, True) for _ in range(10)],
        account_created_at=now - timedelta(days=720),
    )


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def clock() -> Callable[[], datetime]:
    return lambda: FIXED_NOW


@pytest.fixture
def id_generator() -> SequentialIds:
    return SequentialIds()


@pytest.fixture
def score_repo() -> InMemoryCreditScoreRepository:
    return InMemoryCreditScoreRepository()


@pytest.fixture
def obligation_repo() -> InMemoryObligationRepository:
    return InMemoryObligationRepository()


@pytest.fixture
def notification_client() -> RecordingNotificationClient:
    return RecordingNotificationClient()


@pytest.fixture
def cdp_client() -> StubCDPAnalyticsClient:
    return StubCDPAnalyticsClient({"merchant_strong": strong_merchant_input()})


@pytest.fixture
def make_record() -> Callable[..., CreditScoreRecord]:
    return build_record


@pytest.fixture
def scored_customer(score_repo) -> Callable:
    """Store a credit score record for a customer and return it."""

    async def _scored(customer_id: str, score: int) -> CreditScoreRecord:
        record = build_record(customer_id, score)
        await score_repo.save(record)
        return record

    return _scored


@pytest.fixture
def scoring_service(score_repo, cdp_client, notification_client, clock) -> ScoringService:
    return ScoringService(
        credit_score_repository=score_repo,
        cdp_client=cdp_client,
        notification_client=notification_client,
        clock=clock,
    )


@pytest.fixture
def origination_service(
    score_repo,
    obligation_repo,
    notification_client,
    clock,
    id_generator,
) -> OriginationService:
    return OriginationService(
        credit_score_repository=score_repo,
        obligation_repository=obligation_repo,
        notification_client=notification_client,
        clock=clock,
        id_generator=id_generator,
    )


@pytest.fixture
def ledger_service(obligation_repo, clock) -> LedgerService:
    return LedgerService(obligation_repository=obligation_repo, clock=clock)


@pytest.fixture
def portfolio_service(score_repo, obligation_repo) -> PortfolioService:
    return PortfolioService(
        credit_score_repository=score_repo,
        obligation_repository=obligation_repo,
    )


@pytest.fixture
def strong_input() -> BehavioralInput:
    return strong_merchant_input()


@pytest.fixture
def events(notification_client) -> List[dict]:
    return notification_client.events
