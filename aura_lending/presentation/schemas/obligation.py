"""Obligation and payment Pydantic schemas.

Obligation responses form a discriminated union on ``type`` so clients
can tell the three products apart without inspecting field sets.
"""

from datetime import datetime
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field

from aura_lending.domain.entities import (
    NetTermsObligation,
    Obligation,
    Payment,
    RevenueBasedFinancing,
    WorkingCapitalLoan,
)


# =============================================================================
# Requests
# =============================================================================

class NetTermsRequestSchema(BaseModel):
    """Schema for POST /v1/customers/{customer_id}/net-terms."""

    invoice_amount_cents: int = Field(..., description="Invoice amount", examples=[1000000])
    supplier_id: str = Field(..., max_length=255, examples=["supplier_123"])


class WorkingCapitalRequestSchema(BaseModel):
    """Schema for POST /v1/customers/{customer_id}/working-capital."""

    amount_cents: int = Field(..., description="Principal requested", examples=[5000000])
    term_months: Optional[int] = Field(
        None,
        description="Loan term in months (defaults to 6)",
        examples=[6],
    )


class RevenueBasedFinancingRequestSchema(BaseModel):
    """Schema for POST /v1/customers/{customer_id}/revenue-based-financing."""

    advance_amount_cents: int = Field(..., description="Advance requested", examples=[10000000])
    repayment_multiple: Optional[float] = Field(
        None,
        allow_inf_nan=False,
        description="Multiple of the advance to repay (defaults to 1.4)",
        examples=[1.4],
    )


class PaymentRequestSchema(BaseModel):
    """Schema for POST /v1/obligations/{obligation_id}/payments."""

    amount_cents: int = Field(..., description="Payment amount", examples=[400000])
    revenue_for_period_cents: Optional[int] = Field(
        None,
        description="Revenue the payment was derived from (revenue-based financing only)",
    )


# =============================================================================
# Responses
# =============================================================================

class PaymentResponseSchema(BaseModel):
    """A single recorded payment."""

    payment_id: str
    obligation_id: str
    amount_cents: int
    revenue_for_period_cents: Optional[int] = None
    paid_at: datetime

    @classmethod
    def from_entity(cls, payment: Payment) -> "PaymentResponseSchema":
        return cls(
            payment_id=str(payment.id),
            obligation_id=str(payment.obligation_id),
            amount_cents=payment.amount_cents,
            revenue_for_period_cents=payment.revenue_for_period_cents,
            paid_at=payment.paid_at,
        )


class ObligationCommonSchema(BaseModel):
    """Fields shared by every obligation type."""

    obligation_id: str
    customer_id: str
    status: Literal["active", "completed", "paid_off"]
    credit_score_at_origination: int
    borrowed_cents: int
    outstanding_cents: int
    amount_repaid_cents: int
    originated_at: datetime
    completed_at: Optional[datetime] = None
    version: int


class NetTermsResponseSchema(ObligationCommonSchema):
    type: Literal["net_terms"] = "net_terms"
    supplier_id: str
    invoice_amount_cents: int
    fee_amount_cents: int
    fee_rate: float
    total_due_cents: int
    supplier_payment_due_at: datetime
    customer_payment_due_at: datetime
    supplier_paid_at: Optional[datetime] = None
    customer_paid_at: Optional[datetime] = None


class WorkingCapitalResponseSchema(ObligationCommonSchema):
    type: Literal["working_capital"] = "working_capital"
    principal_cents: int
    interest_rate: float
    total_interest_cents: int
    origination_fee_cents: int
    total_repayment_cents: int
    remaining_cents: int
    monthly_payment_cents: int
    term_months: int
    first_payment_due_at: datetime
    final_payment_due_at: datetime
    payments: list[PaymentResponseSchema] = Field(default_factory=list)


class RevenueBasedFinancingResponseSchema(ObligationCommonSchema):
    type: Literal["revenue_based_financing"] = "revenue_based_financing"
    advance_amount_cents: int
    repayment_multiple: float
    total_repayment_cents: int
    remaining_cents: int
    revenue_share_rate: float
    revenue_share_percent: float
    expected_completion_months: int
    expected_completion_at: datetime
    payments: list[PaymentResponseSchema] = Field(default_factory=list)


ObligationResponseSchema = Annotated[
    Union[
        NetTermsResponseSchema,
        WorkingCapitalResponseSchema,
        RevenueBasedFinancingResponseSchema,
    ],
    Field(discriminator="type"),
]


def obligation_to_schema(obligation: Obligation) -> BaseModel:
    """Render any obligation variant as its response schema."""
    common = dict(
        obligation_id=str(obligation.id),
        customer_id=obligation.customer_id,
        status=obligation.status.value,
        credit_score_at_origination=obligation.credit_score_at_origination,
        borrowed_cents=obligation.borrowed_cents,
        outstanding_cents=obligation.outstanding_cents,
        amount_repaid_cents=obligation.amount_repaid_cents,
        originated_at=obligation.originated_at,
        completed_at=obligation.completed_at,
        version=obligation.version,
    )

    match obligation:
        case NetTermsObligation():
            return NetTermsResponseSchema(
                **common,
                supplier_id=obligation.supplier_id,
                invoice_amount_cents=obligation.invoice_amount_cents,
                fee_amount_cents=obligation.fee_amount_cents,
                fee_rate=obligation.fee_rate,
                total_due_cents=obligation.total_due_cents,
                supplier_payment_due_at=obligation.supplier_payment_due_at,
                customer_payment_due_at=obligation.customer_payment_due_at,
                supplier_paid_at=obligation.supplier_paid_at,
                customer_paid_at=obligation.customer_paid_at,
            )
        case WorkingCapitalLoan():
            return WorkingCapitalResponseSchema(
                **common,
                principal_cents=obligation.principal_cents,
                interest_rate=obligation.interest_rate,
                total_interest_cents=obligation.total_interest_cents,
                origination_fee_cents=obligation.origination_fee_cents,
                total_repayment_cents=obligation.total_repayment_cents,
                remaining_cents=obligation.remaining_cents,
                monthly_payment_cents=obligation.monthly_payment_cents,
                term_months=obligation.term_months,
                first_payment_due_at=obligation.first_payment_due_at,
                final_payment_due_at=obligation.final_payment_due_at,
                payments=[PaymentResponseSchema.from_entity(p) for p in obligation.payments],
            )
        case RevenueBasedFinancing():
            return RevenueBasedFinancingResponseSchema(
                **common,
                advance_amount_cents=obligation.advance_amount_cents,
                repayment_multiple=obligation.repayment_multiple,
                total_repayment_cents=obligation.total_repayment_cents,
                remaining_cents=obligation.remaining_cents,
                revenue_share_rate=obligation.revenue_share_rate,
                revenue_share_percent=obligation.revenue_share_percent,
                expected_completion_months=obligation.expected_completion_months,
                expected_completion_at=obligation.expected_completion_at,
                payments=[PaymentResponseSchema.from_entity(p) for p in obligation.payments],
            )
        case _:
            raise TypeError(f"Unsupported obligation: {type(obligation).__name__}")


class ObligationListResponseSchema(BaseModel):
    """Schema for GET /v1/customers/{customer_id}/obligations."""

    customer_id: str
    obligations: list[ObligationResponseSchema]


class PaymentResultResponseSchema(BaseModel):
    """Schema for POST /v1/obligations/{obligation_id}/payments."""

    payment: PaymentResponseSchema
    obligation: ObligationResponseSchema


class PaymentListResponseSchema(BaseModel):
    """Schema for GET /v1/obligations/{obligation_id}/payments."""

    obligation_id: str
    payments: list[PaymentResponseSchema]
