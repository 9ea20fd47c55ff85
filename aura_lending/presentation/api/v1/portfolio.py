"""Portfolio dashboard API endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path

from aura_lending.application.services import PortfolioService
from aura_lending.core.dependencies import get_portfolio_service
from aura_lending.presentation.schemas import (
    CreditScoreResponseSchema,
    PortfolioResponseSchema,
    obligation_to_schema,
)

portfolio_router = APIRouter()


@portfolio_router.get(
    "/customers/{customer_id}/portfolio",
    response_model=PortfolioResponseSchema,
    summary="Get Portfolio Dashboard",
    description="""
    Credit position for a customer: latest score, all obligations, totals
    borrowed, outstanding and repaid, and remaining available credit.
    """,
)
async def get_portfolio(
    customer_id: Annotated[
        str,
        Path(min_length=1, max_length=255, description="Customer identifier"),
    ],
    portfolio_service: Annotated[PortfolioService, Depends(get_portfolio_service)],
) -> PortfolioResponseSchema:
    dashboard = await portfolio_service.dashboard(customer_id)

    return PortfolioResponseSchema(
        customer_id=dashboard.customer_id,
        latest_score=(
            CreditScoreResponseSchema.from_entity(dashboard.latest_score)
            if dashboard.latest_score
            else None
        ),
        total_borrowed_cents=dashboard.total_borrowed_cents,
        total_outstanding_cents=dashboard.total_outstanding_cents,
        total_repaid_cents=dashboard.total_repaid_cents,
        available_credit_cents=dashboard.available_credit_cents,
        active_obligations=dashboard.active_obligations,
        obligations=[obligation_to_schema(o) for o in dashboard.obligations],
    )
