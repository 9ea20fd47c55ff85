"""Pydantic schemas for API request/response validation."""

from .credit_score import (
    BehavioralInputSchema,
    CreditScoreHistoryResponseSchema,
    CreditScoreResponseSchema,
    PaymentBehaviorSchema,
    RevenuePeriodSchema,
    ScoreFactorSchema,
)
from .obligation import (
    NetTermsRequestSchema,
    NetTermsResponseSchema,
    ObligationListResponseSchema,
    ObligationResponseSchema,
    PaymentListResponseSchema,
    PaymentRequestSchema,
    PaymentResponseSchema,
    PaymentResultResponseSchema,
    RevenueBasedFinancingRequestSchema,
    RevenueBasedFinancingResponseSchema,
    WorkingCapitalRequestSchema,
    WorkingCapitalResponseSchema,
    obligation_to_schema,
)
from .portfolio import PortfolioResponseSchema
from .error import ErrorResponseSchema

__all__ = [
    "BehavioralInputSchema",
    "CreditScoreHistoryResponseSchema",
    "CreditScoreResponseSchema",
    "PaymentBehaviorSchema",
    "RevenuePeriodSchema",
    "ScoreFactorSchema",
    "NetTermsRequestSchema",
    "NetTermsResponseSchema",
    "ObligationListResponseSchema",
    "ObligationResponseSchema",
    "PaymentListResponseSchema",
    "PaymentRequestSchema",
    "PaymentResponseSchema",
    "PaymentResultResponseSchema",
    "RevenueBasedFinancingRequestSchema",
    "RevenueBasedFinancingResponseSchema",
    "WorkingCapitalRequestSchema",
    "WorkingCapitalResponseSchema",
    "obligation_to_schema",
    "PortfolioResponseSchema",
    "ErrorResponseSchema",
]
