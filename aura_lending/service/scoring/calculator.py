"""
Aura Score Calculator.

This module orchestrates the complete score calculation:
1. Score each behavioral factor (0-100)
2. Combine the factors with their weights (0-100)
3. Map the weighted sum linearly onto the 300-850 score range
4. Derive the rating and risk tier
5. Build an immutable CreditScoreRecord with the factor breakdown

The calculation is a pure function of its inputs and never fails:
absent data degrades to neutral sub-scores.
"""

import math
from datetime import datetime
from typing import Dict, Optional

from aura_lending.domain.entities import (
    BehavioralInput,
    CreditRating,
    CreditScoreRecord,
    ScoreFactor,
)
from aura_lending.utils.date_utils import utcnow

from .factors import (
    calculate_average_growth,
    calculate_ltv_cac_ratio,
    calculate_on_time_rate,
    calculate_tenure_months,
    describe_business_tenure,
    describe_customer_retention,
    describe_ltv_to_cac,
    describe_payment_history,
    describe_revenue_trend,
    grade_for,
    score_business_tenure,
    score_customer_retention,
    score_ltv_to_cac,
    score_payment_history,
    score_revenue_growth,
)
from .risk_tier import resolve_risk_tier
from .settings import ScoringSettings, scoring_settings

RATING_THRESHOLDS = (
    (750, CreditRating.EXCELLENT),
    (680, CreditRating.GOOD),
    (620, CreditRating.FAIR),
    (550, CreditRating.POOR),
)


def score_to_rating(score: int) -> CreditRating:
    """Map an Aura Score to its rating label."""
    for threshold, rating in RATING_THRESHOLDS:
        if score >= threshold:
            return rating
    return CreditRating.BAD


def approval_likelihood(score: int) -> str:
    """Coarse likelihood that a lending product will be approved."""
    if score >= 650:
        return "High"
    if score >= 580:
        return "Medium"
    return "Low"


def weighted_to_score(
    weighted_sum: float,
    settings: ScoringSettings = scoring_settings,
) -> int:
    """
    Map a 0-100 weighted sum onto the score range, rounding half up.

    Example: 89.5 -> 300 + 0.895 * 550 = 792.25 -> 792
    """
    span = settings.score_ceiling - settings.score_floor
    raw = settings.score_floor + (weighted_sum / 100) * span
    score = math.floor(raw + 0.5)
    return max(settings.score_floor, min(settings.score_ceiling, score))


def calculate_factors(
    data: BehavioralInput,
    now: datetime,
    settings: ScoringSettings = scoring_settings,
) -> Dict[str, ScoreFactor]:
    """
    Score every behavioral factor.

    Args:
        data: Behavioral signals for the customer
        now: Reference time for tenure
        settings: Scoring settings (uses defaults if not provided)

    Returns:
        Ordered mapping of factor name to ScoreFactor
    """
    weights = settings.factor_weights

    avg_growth = calculate_average_growth(
        data.revenue_history, settings.revenue_min_periods
    )
    ratio = calculate_ltv_cac_ratio(data.ltv_cents, data.cac_cents)
    on_time_rate = calculate_on_time_rate(data.transaction_history)
    tenure_months = calculate_tenure_months(
        data.account_created_at, now, settings.tenure_days_per_month
    )

    scored = {
        "revenue_trend": (
            score_revenue_growth(avg_growth),
            describe_revenue_trend(avg_growth),
        ),
        "customer_retention": (
            score_customer_retention(data.annual_retention),
            describe_customer_retention(data.annual_retention),
        ),
        "ltv_to_cac": (
            score_ltv_to_cac(ratio),
            describe_ltv_to_cac(ratio),
        ),
        "payment_history": (
            score_payment_history(on_time_rate),
            describe_payment_history(data.transaction_history),
        ),
        "business_tenure": (
            score_business_tenure(tenure_months),
            describe_business_tenure(tenure_months, settings.tenure_days_per_month),
        ),
    }

    return {
        name: ScoreFactor(
            score=score,
            weight=weights[name],
            grade=grade_for(score),
            description=description,
        )
        for name, (score, description) in scored.items()
    }


def compute_credit_score(
    customer_id: str,
    data: BehavioralInput,
    settings: ScoringSettings = scoring_settings,
    now: Optional[datetime] = None,
) -> CreditScoreRecord:
    """
    Compute a new Aura Score record for a customer.

    Args:
        customer_id: The customer's identifier
        data: Behavioral signals from the CDP analytics collaborator
        settings: Scoring settings (uses defaults if not provided)
        now: Calculation time (defaults to the current UTC time)

    Returns:
        CreditScoreRecord with score, rating, tier and factor breakdown
    """
    now = now or utcnow()

    factors = calculate_factors(data, now, settings)
    weighted_sum = sum(f.score * f.weight for f in factors.values())

    score = weighted_to_score(weighted_sum, settings)
    tier = resolve_risk_tier(score, settings)

    return CreditScoreRecord(
        customer_id=customer_id,
        score=score,
        rating=score_to_rating(score),
        risk_tier=tier.name,
        factors=factors,
        max_credit_limit_cents=tier.max_credit_limit_cents,
        interest_rate_ceiling=tier.interest_rate_ceiling,
        approval_likelihood=approval_likelihood(score),
        calculated_at=now,
    )
