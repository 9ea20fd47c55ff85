"""Obligation and payment ledger API endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path

from aura_lending.application.services import LedgerService
from aura_lending.core.dependencies import get_ledger_service
from aura_lending.presentation.schemas import (
    ErrorResponseSchema,
    ObligationListResponseSchema,
    ObligationResponseSchema,
    PaymentListResponseSchema,
    PaymentRequestSchema,
    PaymentResponseSchema,
    PaymentResultResponseSchema,
    obligation_to_schema,
)

obligations_router = APIRouter(
    responses={
        404: {"model": ErrorResponseSchema, "description": "Obligation not found"},
    },
)

ObligationId = Annotated[
    UUID,
    Path(description="UUID of the obligation"),
]


@obligations_router.get(
    "/customers/{customer_id}/obligations",
    response_model=ObligationListResponseSchema,
    summary="List Customer Obligations",
    description="Every obligation originated for a customer, newest first.",
)
async def list_obligations(
    customer_id: Annotated[
        str,
        Path(min_length=1, max_length=255, description="Customer identifier"),
    ],
    ledger_service: Annotated[LedgerService, Depends(get_ledger_service)],
):
    obligations = await ledger_service.list_obligations(customer_id)

    return ObligationListResponseSchema(
        customer_id=customer_id,
        obligations=[obligation_to_schema(o) for o in obligations],
    )


@obligations_router.get(
    "/obligations/{obligation_id}",
    response_model=ObligationResponseSchema,
    summary="Get Obligation",
)
async def get_obligation(
    obligation_id: ObligationId,
    ledger_service: Annotated[LedgerService, Depends(get_ledger_service)],
):
    obligation = await ledger_service.get_obligation(obligation_id)
    return obligation_to_schema(obligation)


@obligations_router.post(
    "/obligations/{obligation_id}/payments",
    response_model=PaymentResultResponseSchema,
    status_code=201,
    summary="Record Payment",
    description="""
    Record a payment against an obligation.

    A Net Terms contract is settled by its first payment. Loans and
    revenue-based financing are paid off once the payments cover the
    total repayment.
    """,
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid amount"},
        409: {
            "model": ErrorResponseSchema,
            "description": "Obligation already completed or concurrently modified",
        },
    },
)
async def record_payment(
    obligation_id: ObligationId,
    request: PaymentRequestSchema,
    ledger_service: Annotated[LedgerService, Depends(get_ledger_service)],
):
    result = await ledger_service.record_payment(
        obligation_id,
        request.amount_cents,
        request.revenue_for_period_cents,
    )

    return PaymentResultResponseSchema(
        payment=PaymentResponseSchema.from_entity(result.payment),
        obligation=obligation_to_schema(result.obligation),
    )


@obligations_router.get(
    "/obligations/{obligation_id}/payments",
    response_model=PaymentListResponseSchema,
    summary="List Payments",
    description="Append-only payment history for an obligation.",
)
async def list_payments(
    obligation_id: ObligationId,
    ledger_service: Annotated[LedgerService, Depends(get_ledger_service)],
):
    payments = await ledger_service.get_payments(obligation_id)

    return PaymentListResponseSchema(
        obligation_id=str(obligation_id),
        payments=[PaymentResponseSchema.from_entity(p) for p in payments],
    )
