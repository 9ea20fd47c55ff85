"""Dependency injection for FastAPI."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from aura_lending.infrastructure.database import get_db_session
from aura_lending.infrastructure.repositories import (
    PostgresCreditScoreRepository,
    PostgresObligationRepository,
)
from aura_lending.infrastructure.clients import (
    HttpCDPAnalyticsClient,
    HttpNotificationClient,
)
from aura_lending.application.services import (
    LedgerService,
    OriginationService,
    PortfolioService,
    ScoringService,
)
from aura_lending.domain.interfaces import (
    CDPAnalyticsClient,
    CreditScoreRepository,
    NotificationClient,
    ObligationRepository,
)


# Repository dependencies
async def get_credit_score_repository(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> CreditScoreRepository:
    """Get a CreditScoreRepository instance."""
    return PostgresCreditScoreRepository(session)


async def get_obligation_repository(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> ObligationRepository:
    """Get an ObligationRepository instance."""
    return PostgresObligationRepository(session)


# External client dependencies
def get_cdp_client() -> CDPAnalyticsClient:
    """Get a CDPAnalyticsClient instance."""
    return HttpCDPAnalyticsClient()


def get_notification_client() -> NotificationClient:
    """Get a NotificationClient instance."""
    return HttpNotificationClient()


# Service dependencies
async def get_scoring_service(
    score_repo: Annotated[CreditScoreRepository, Depends(get_credit_score_repository)],
    cdp_client: Annotated[CDPAnalyticsClient, Depends(get_cdp_client)],
    notification_client: Annotated[NotificationClient, Depends(get_notification_client)],
) -> ScoringService:
    """Get a ScoringService instance with all dependencies."""
    return ScoringService(
        credit_score_repository=score_repo,
        cdp_client=cdp_client,
        notification_client=notification_client,
    )


async def get_origination_service(
    score_repo: Annotated[CreditScoreRepository, Depends(get_credit_score_repository)],
    obligation_repo: Annotated[ObligationRepository, Depends(get_obligation_repository)],
    notification_client: Annotated[NotificationClient, Depends(get_notification_client)],
) -> OriginationService:
    """Get an OriginationService instance with all dependencies."""
    return OriginationService(
        credit_score_repository=score_repo,
        obligation_repository=obligation_repo,
        notification_client=notification_client,
    )


async def get_ledger_service(
    obligation_repo: Annotated[ObligationRepository, Depends(get_obligation_repository)],
) -> LedgerService:
    """Get a LedgerService instance."""
    return LedgerService(obligation_repository=obligation_repo)


async def get_portfolio_service(
    score_repo: Annotated[CreditScoreRepository, Depends(get_credit_score_repository)],
    obligation_repo: Annotated[ObligationRepository, Depends(get_obligation_repository)],
) -> PortfolioService:
    """Get a PortfolioService instance."""
    return PortfolioService(
        credit_score_repository=score_repo,
        obligation_repository=obligation_repo,
    )
