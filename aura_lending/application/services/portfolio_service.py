"""Portfolio service - builds the per-customer credit dashboard."""

import structlog

from aura_lending.application.dto import PortfolioDashboard
from aura_lending.domain.interfaces import CreditScoreRepository, ObligationRepository

logger = structlog.get_logger(__name__)


class PortfolioService:
    """Read-only aggregation over a customer's score and obligations."""

    def __init__(
        self,
        credit_score_repository: CreditScoreRepository,
        obligation_repository: ObligationRepository,
    ):
        self._score_repo = credit_score_repository
        self._obligation_repo = obligation_repository

    async def dashboard(self, customer_id: str) -> PortfolioDashboard:
        """
        Build the dashboard for a customer.

        Available credit is the risk tier ceiling of the latest score minus
        everything still outstanding, floored at zero. A customer without a
        score has no available credit.
        """
        record = await self._score_repo.get_latest(customer_id)
        obligations = await self._obligation_repo.get_by_customer_id(customer_id)

        total_borrowed = sum(o.borrowed_cents for o in obligations)
        total_outstanding = sum(o.outstanding_cents for o in obligations if o.is_active)
        total_repaid = sum(o.amount_repaid_cents for o in obligations)
        active = sum(1 for o in obligations if o.is_active)

        credit_limit = record.max_credit_limit_cents if record else 0
        available_credit = max(0, credit_limit - total_outstanding)

        logger.info(
            "portfolio_viewed",
            customer_id=customer_id,
            obligations=len(obligations),
            total_outstanding_cents=total_outstanding,
            available_credit_cents=available_credit,
        )

        return PortfolioDashboard(
            customer_id=customer_id,
            latest_score=record,
            total_borrowed_cents=total_borrowed,
            total_outstanding_cents=total_outstanding,
            total_repaid_cents=total_repaid,
            available_credit_cents=available_credit,
            active_obligations=active,
            obligations=obligations,
        )
