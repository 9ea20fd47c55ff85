"""
Aura Score Module - behavioral credit scoring for merchant accounts
"""

from .settings import ScoringSettings, scoring_settings
from .factors import (
    calculate_average_growth,
    calculate_ltv_cac_ratio,
    calculate_on_time_rate,
    calculate_tenure_months,
    grade_for,
    score_business_tenure,
    score_customer_retention,
    score_ltv_to_cac,
    score_payment_history,
    score_revenue_growth,
)
from .risk_tier import RiskTier, get_risk_tiers, get_risk_tier_by_name, resolve_risk_tier
from .calculator import (
    approval_likelihood,
    calculate_factors,
    compute_credit_score,
    score_to_rating,
    weighted_to_score,
)

__all__ = [
    # Settings
    "ScoringSettings",
    "scoring_settings",
    # Factors
    "calculate_average_growth",
    "calculate_ltv_cac_ratio",
    "calculate_on_time_rate",
    "calculate_tenure_months",
    "grade_for",
    "score_business_tenure",
    "score_customer_retention",
    "score_ltv_to_cac",
    "score_payment_history",
    "score_revenue_growth",
    # Risk Tiers
    "RiskTier",
    "get_risk_tiers",
    "get_risk_tier_by_name",
    "resolve_risk_tier",
    # Calculator
    "approval_likelihood",
    "calculate_factors",
    "compute_credit_score",
    "score_to_rating",
    "weighted_to_score",
]
