"""Portfolio dashboard Pydantic schema."""

from typing import Optional

from pydantic import BaseModel, Field

from .credit_score import CreditScoreResponseSchema
from .obligation import ObligationResponseSchema


class PortfolioResponseSchema(BaseModel):
    """Schema for GET /v1/customers/{customer_id}/portfolio."""

    customer_id: str
    latest_score: Optional[CreditScoreResponseSchema] = Field(
        None,
        description="Authoritative credit score record, if any",
    )
    total_borrowed_cents: int = Field(..., ge=0)
    total_outstanding_cents: int = Field(..., ge=0)
    total_repaid_cents: int = Field(..., ge=0)
    available_credit_cents: int = Field(..., ge=0)
    active_obligations: int = Field(..., ge=0)
    obligations: list[ObligationResponseSchema]
