"""Credit score Pydantic schemas."""

from datetime import datetime
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from aura_lending.domain.entities import (
    BehavioralInput,
    CreditScoreRecord,
    PaymentBehavior,
    RevenuePeriod,
)


class RevenuePeriodSchema(BaseModel):
    """Revenue for one reporting period."""

    period: str = Field(..., description="Period label", examples=["2025-01"])
    amount_cents: int = Field(..., ge=0, description="Revenue in cents", examples=[10000000])


class PaymentBehaviorSchema(BaseModel):
    """A historical payment and whether it was made on time."""

    amount_cents: int = Field(..., ge=0, description="Payment amount in cents")
    paid_on_time: bool = Field(..., description="Whether the payment was on time")


class BehavioralInputSchema(BaseModel):
    """Schema for POST /v1/customers/{customer_id}/credit-score request body."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "revenue_history": [
                        {"period": "2025-01", "amount_cents": 10000000},
                        {"period": "2025-02", "amount_cents": 11000000},
                        {"period": "2025-03", "amount_cents": 12100000},
                    ],
                    "annual_retention": 0.75,
                    "ltv_cents": 50000,
                    "cac_cents": 10000,
                    "transaction_history": [
                        {"amount_cents": 250000, "paid_on_time": True},
                    ],
                    "account_created_at": "2023-03-01T00:00:00Z",
                }
            ]
        }
    )

    revenue_history: list[RevenuePeriodSchema] = Field(
        default_factory=list,
        description="Revenue per period, oldest first",
    )
    annual_retention: Optional[float] = Field(
        None,
        ge=0.0,
        le=1.0,
        description="Cohort annual retention rate",
    )
    ltv_cents: Optional[int] = Field(None, ge=0, description="Customer lifetime value")
    cac_cents: Optional[int] = Field(None, ge=0, description="Customer acquisition cost")
    transaction_history: list[PaymentBehaviorSchema] = Field(
        default_factory=list,
        description="Past payments with on-time flags",
    )
    account_created_at: Optional[datetime] = Field(
        None,
        description="When the merchant account was opened",
    )

    def to_entity(self) -> BehavioralInput:
        return BehavioralInput(
            revenue_history=[
                RevenuePeriod(period=p.period, amount_cents=p.amount_cents)
                for p in self.revenue_history
            ],
            annual_retention=self.annual_retention,
            ltv_cents=self.ltv_cents,
            cac_cents=self.cac_cents,
            transaction_history=[
                PaymentBehavior(amount_cents=t.amount_cents, paid_on_time=t.paid_on_time)
                for t in self.transaction_history
            ],
            account_created_at=self.account_created_at,
        )


class ScoreFactorSchema(BaseModel):
    """One weighted sub-score in the factor breakdown."""

    score: int = Field(..., ge=0, le=100)
    weight: float = Field(..., ge=0.0, le=1.0)
    grade: str = Field(..., examples=["VeryGood"])
    description: str = Field(..., examples=["+10.0% avg monthly growth"])


class CreditScoreResponseSchema(BaseModel):
    """Schema for a credit score record."""

    score_id: str = Field(..., description="UUID of the record")
    customer_id: str
    score: int = Field(..., ge=300, le=850, examples=[792])
    rating: str = Field(..., examples=["Excellent"])
    risk_tier: str = Field(..., examples=["excellent"])
    factors: Dict[str, ScoreFactorSchema]
    max_credit_limit_cents: int = Field(..., examples=[100000000])
    interest_rate_ceiling: float = Field(..., examples=[0.08])
    approval_likelihood: str = Field(..., examples=["High"])
    calculated_at: datetime

    @classmethod
    def from_entity(cls, record: CreditScoreRecord) -> "CreditScoreResponseSchema":
        return cls(
            score_id=str(record.id),
            customer_id=record.customer_id,
            score=record.score,
            rating=record.rating.value,
            risk_tier=record.risk_tier,
            factors={
                name: ScoreFactorSchema(
                    score=f.score,
                    weight=f.weight,
                    grade=f.grade.value,
                    description=f.description,
                )
                for name, f in record.factors.items()
            },
            max_credit_limit_cents=record.max_credit_limit_cents,
            interest_rate_ceiling=record.interest_rate_ceiling,
            approval_likelihood=record.approval_likelihood,
            calculated_at=record.calculated_at,
        )


class CreditScoreHistoryResponseSchema(BaseModel):
    """Schema for GET /v1/customers/{customer_id}/credit-score/history."""

    customer_id: str
    scores: list[CreditScoreResponseSchema] = Field(
        ...,
        description="Past records, newest first",
    )
