"""Product origination API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path

from aura_lending.application.dto import (
    NetTermsRequest,
    RevenueBasedFinancingRequest,
    WorkingCapitalRequest,
)
from aura_lending.application.services import OriginationService
from aura_lending.core.dependencies import get_origination_service
from aura_lending.presentation.schemas import (
    ErrorResponseSchema,
    NetTermsRequestSchema,
    NetTermsResponseSchema,
    RevenueBasedFinancingRequestSchema,
    RevenueBasedFinancingResponseSchema,
    WorkingCapitalRequestSchema,
    WorkingCapitalResponseSchema,
    obligation_to_schema,
)

origination_router = APIRouter(
    prefix="/customers/{customer_id}",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid amount or request"},
        404: {"model": ErrorResponseSchema, "description": "No credit score on record"},
        422: {"model": ErrorResponseSchema, "description": "Score or tier limit not met"},
    },
)

CustomerId = Annotated[
    str,
    Path(min_length=1, max_length=255, description="Customer identifier"),
]


@origination_router.post(
    "/net-terms",
    response_model=NetTermsResponseSchema,
    status_code=201,
    summary="Originate Net Terms",
    description="""
    Pay a supplier invoice early and collect from the customer in 30 days.

    Requires an Aura Score of at least 620. The fee is 2.5% of the invoice
    at 700 and above, otherwise 3.0%.
    """,
)
async def originate_net_terms(
    customer_id: CustomerId,
    request: NetTermsRequestSchema,
    origination_service: Annotated[OriginationService, Depends(get_origination_service)],
):
    obligation = await origination_service.originate_net_terms(
        NetTermsRequest(
            customer_id=customer_id,
            invoice_amount_cents=request.invoice_amount_cents,
            supplier_id=request.supplier_id,
        )
    )
    return obligation_to_schema(obligation)


@origination_router.post(
    "/working-capital",
    response_model=WorkingCapitalResponseSchema,
    status_code=201,
    summary="Originate Working Capital Loan",
    description="""
    Extend a fixed-term loan priced at the customer's risk tier rate.

    Requires an Aura Score of at least 650 and an amount within the tier's
    maximum credit limit.
    """,
)
async def originate_working_capital(
    customer_id: CustomerId,
    request: WorkingCapitalRequestSchema,
    origination_service: Annotated[OriginationService, Depends(get_origination_service)],
):
    obligation = await origination_service.originate_working_capital_loan(
        WorkingCapitalRequest(
            customer_id=customer_id,
            amount_cents=request.amount_cents,
            term_months=request.term_months,
        )
    )
    return obligation_to_schema(obligation)


@origination_router.post(
    "/revenue-based-financing",
    response_model=RevenueBasedFinancingResponseSchema,
    status_code=201,
    summary="Originate Revenue-Based Financing",
    description="""
    Advance capital repaid as a share of revenue until the repayment
    multiple is reached. Requires an Aura Score of at least 680.
    """,
)
async def originate_revenue_based_financing(
    customer_id: CustomerId,
    request: RevenueBasedFinancingRequestSchema,
    origination_service: Annotated[OriginationService, Depends(get_origination_service)],
):
    obligation = await origination_service.originate_revenue_based_financing(
        RevenueBasedFinancingRequest(
            customer_id=customer_id,
            advance_amount_cents=request.advance_amount_cents,
            repayment_multiple=request.repayment_multiple,
        )
    )
    return obligation_to_schema(obligation)
