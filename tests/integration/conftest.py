"""
Fixtures for integration tests.

Provides:
- Test client for FastAPI app
- Mock CDP analytics client with canned merchant data
- Mock notification client
- In-memory database for testing
"""

from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator, Dict, Optional

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from aura_lending.main import app
from aura_lending.core.dependencies import (
    get_cdp_client,
    get_credit_score_repository,
    get_notification_client,
    get_obligation_repository,
)
from aura_lending.domain.entities import (
    BehavioralInput,
    CreditScoreRecord,
    Obligation,
    PaymentBehavior,
    RevenuePeriod,
)
from aura_lending.domain.exceptions import CDPAPIException, CustomerNotFoundException
from aura_lending.domain.interfaces import CDPAnalyticsClient, NotificationClient
from aura_lending.infrastructure.database import Base
from aura_lending.infrastructure.repositories import (
    PostgresCreditScoreRepository,
    PostgresObligationRepository,
)


# =============================================================================
# Test Data
# =============================================================================

def merchant_inputs(now: Optional[datetime] = None) -> Dict[str, BehavioralInput]:
    """
    Canned CDP records keyed by customer id.

    - merchant_strong: 10% growth, 75% retention, 5:1 LTV/CAC, 10/10 on time,
      two years old. Scores 792 (excellent).
    - merchant_fair: flat revenue, 50% retention, 2:1 LTV/CAC, 8/10 on time,
      one year old. Scores 649 (fair): Net Terms only.
    - merchant_new: account opened today, no history. Scores 592 (poor).
    """
    now = now or datetime.now(timezone.utc)
    return {
        "merchant_strong": BehavioralInput(
            revenue_history=[
                RevenuePeriod("2025-03", 10_000_000),
                RevenuePeriod("2025-04", 11_000_000),
                RevenuePeriod("2025-05", 12_100_000),
            ],
            annual_retention=0.75,
            ltv_cents=50_000,
            cac_cents=10_000,
            transaction_history=[PaymentBehavior(250_000, True) for _ in range(10)],
            account_created_at=now - timedelta(days=725),
        ),
        "merchant_fair": BehavioralInput(
            revenue_history=[
                RevenuePeriod("2025-03", 5_000_000),
                RevenuePeriod("2025-04", 5_000_000),
                RevenuePeriod("2025-05", 5_000_000),
            ],
            annual_retention=0.50,
            ltv_cents=20_000,
            cac_cents=10_000,
            transaction_history=(
                [PaymentBehavior(100_000, True) for _ in range(8)]
                + [PaymentBehavior(100_000, False) for _ in range(2)]
            ),
            account_created_at=now - timedelta(days=370),
        ),
        "merchant_new": BehavioralInput(),
    }


# =============================================================================
# Mock Clients
# =============================================================================

class MockCDPAnalyticsClient(CDPAnalyticsClient):
    """Mock CDP client that serves canned behavioral inputs."""

    def __init__(self, fail_mode: bool = False, fail_for_customers: set = None):
        self.fail_mode = fail_mode
        self.fail_for_customers = fail_for_customers or set()
        self.inputs = merchant_inputs()
        self.call_count = 0

    async def get_behavioral_input(self, customer_id: str) -> BehavioralInput:
        """Return canned input or raise exceptions based on mode."""
        self.call_count += 1

        if self.fail_mode or customer_id in self.fail_for_customers:
            raise CDPAPIException(
                message="CDP analytics API unavailable",
                status_code=500,
            )

        if customer_id not in self.inputs:
            raise CustomerNotFoundException(customer_id)

        return self.inputs[customer_id]


class MockNotificationClient(NotificationClient):
    """Mock notification client that tracks events."""

    def __init__(self, fail_mode: bool = False):
        self.fail_mode = fail_mode
        self.call_count = 0
        self.events_sent = []

    async def send_score_tier_changed(
        self,
        record: CreditScoreRecord,
        previous_tier: str,
    ) -> bool:
        self.call_count += 1

        if self.fail_mode:
            return False

        self.events_sent.append({
            "event": "score_tier_changed",
            "customer_id": record.customer_id,
            "previous_tier": previous_tier,
            "new_tier": record.risk_tier,
        })
        return True

    async def send_payment_due(self, obligation: Obligation) -> bool:
        self.call_count += 1

        if self.fail_mode:
            return False

        self.events_sent.append({
            "event": "payment_due",
            "customer_id": obligation.customer_id,
            "obligation_id": str(obligation.id),
            "type": obligation.type.value,
        })
        return True


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def test_engine():
    """Create an in-memory SQLite async engine for testing."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def test_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async_session = async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )

    async with async_session() as session:
        yield session


# =============================================================================
# Mock Client Fixtures
# =============================================================================

@pytest.fixture
def mock_cdp_client() -> MockCDPAnalyticsClient:
    """Create a mock CDP analytics client."""
    return MockCDPAnalyticsClient()


@pytest.fixture
def mock_notification_client() -> MockNotificationClient:
    """Create a mock notification client."""
    return MockNotificationClient()


@pytest.fixture
def failing_cdp_client() -> MockCDPAnalyticsClient:
    """Create a CDP client that always fails."""
    return MockCDPAnalyticsClient(fail_mode=True)


@pytest.fixture
def failing_notification_client() -> MockNotificationClient:
    """Create a notification client that never delivers."""
    return MockNotificationClient(fail_mode=True)


# =============================================================================
# App Client Fixtures
# =============================================================================

def override_dependencies(
    session: AsyncSession,
    cdp_client: CDPAnalyticsClient,
    notification_client: NotificationClient,
) -> None:
    """Point the app at the test session and mock clients."""

    async def override_get_credit_score_repository():
        return PostgresCreditScoreRepository(session)

    async def override_get_obligation_repository():
        return PostgresObligationRepository(session)

    app.dependency_overrides[get_credit_score_repository] = override_get_credit_score_repository
    app.dependency_overrides[get_obligation_repository] = override_get_obligation_repository
    app.dependency_overrides[get_cdp_client] = lambda: cdp_client
    app.dependency_overrides[get_notification_client] = lambda: notification_client


@pytest_asyncio.fixture
async def client(
    test_session: AsyncSession,
    mock_cdp_client: MockCDPAnalyticsClient,
    mock_notification_client: MockNotificationClient,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client with mocked dependencies.

    This client:
    - Uses an in-memory SQLite database
    - Mocks the CDP analytics client with canned merchant data
    - Mocks the notification client
    """
    override_dependencies(test_session, mock_cdp_client, mock_notification_client)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client_with_failing_cdp(
    test_session: AsyncSession,
    failing_cdp_client: MockCDPAnalyticsClient,
    mock_notification_client: MockNotificationClient,
) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client where the CDP analytics API always fails."""
    override_dependencies(test_session, failing_cdp_client, mock_notification_client)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client_with_failing_notifications(
    test_session: AsyncSession,
    mock_cdp_client: MockCDPAnalyticsClient,
    failing_notification_client: MockNotificationClient,
) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client where notifications are never delivered."""
    override_dependencies(test_session, mock_cdp_client, failing_notification_client)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# =============================================================================
# Helper Fixtures
# =============================================================================

@pytest.fixture
def scored(client: AsyncClient):
    """Score a canned merchant through the API and return the response body."""

    async def _scored(customer_id: str = "merchant_strong") -> dict:
        response = await client.post(f"/v1/customers/{customer_id}/credit-score")
        assert response.status_code == 201
        return response.json()

    return _scored
