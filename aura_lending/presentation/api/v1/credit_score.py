"""Credit score API endpoints."""

from typing import Annotated, Optional

from fastapi import APIRouter, Body, Depends, Path, Query

from aura_lending.application.services import ScoringService
from aura_lending.core.dependencies import get_scoring_service
from aura_lending.presentation.schemas import (
    BehavioralInputSchema,
    CreditScoreHistoryResponseSchema,
    CreditScoreResponseSchema,
    ErrorResponseSchema,
)

credit_score_router = APIRouter(
    prefix="/customers/{customer_id}/credit-score",
    responses={
        404: {"model": ErrorResponseSchema, "description": "Customer or score not found"},
    },
)

CustomerId = Annotated[
    str,
    Path(min_length=1, max_length=255, description="Customer identifier"),
]


@credit_score_router.post(
    "",
    response_model=CreditScoreResponseSchema,
    status_code=201,
    summary="Calculate Aura Score",
    description="""
    Calculate a new Aura Score for a customer.

    The request body carries the behavioral signals to score. When it is
    omitted the signals are pulled from CDP analytics.
    """,
    responses={
        503: {"model": ErrorResponseSchema, "description": "CDP analytics unavailable"},
    },
)
async def calculate_credit_score(
    customer_id: CustomerId,
    scoring_service: Annotated[ScoringService, Depends(get_scoring_service)],
    behavioral_input: Annotated[Optional[BehavioralInputSchema], Body()] = None,
) -> CreditScoreResponseSchema:
    record = await scoring_service.calculate(
        customer_id,
        behavioral_input.to_entity() if behavioral_input is not None else None,
    )
    return CreditScoreResponseSchema.from_entity(record)


@credit_score_router.get(
    "",
    response_model=CreditScoreResponseSchema,
    summary="Get Latest Aura Score",
)
async def get_credit_score(
    customer_id: CustomerId,
    scoring_service: Annotated[ScoringService, Depends(get_scoring_service)],
) -> CreditScoreResponseSchema:
    record = await scoring_service.get_latest(customer_id)
    return CreditScoreResponseSchema.from_entity(record)


@credit_score_router.get(
    "/history",
    response_model=CreditScoreHistoryResponseSchema,
    summary="Get Aura Score History",
    description=(
        "All past score records ordered by calculation time (newest first). "
        "Pass limit to return only the most recent ones."
    ),
)
async def get_credit_score_history(
    customer_id: CustomerId,
    scoring_service: Annotated[ScoringService, Depends(get_scoring_service)],
    limit: Annotated[
        Optional[int],
        Query(ge=1, description="Maximum number of records to return"),
    ] = None,
) -> CreditScoreHistoryResponseSchema:
    records = await scoring_service.get_history(customer_id, limit)

    return CreditScoreHistoryResponseSchema(
        customer_id=customer_id,
        scores=[CreditScoreResponseSchema.from_entity(r) for r in records],
    )
