"""
Behavioral Factor Scoring for the Aura Score engine.

This module turns the raw CDP signals into five independent 0-100 sub-scores:
- Revenue trend (average month-over-month growth)
- Customer retention (cohort annual retention)
- LTV/CAC efficiency
- Payment history (on-time fraction)
- Business tenure (months since account creation)

Missing or unusable data never fails a calculation. Each factor falls back
to a neutral default instead, because an absent signal is not evidence of
bad credit. New accounts without payment history get a neutral-positive 70.
"""

from datetime import datetime, timezone
from typing import List, Optional, Sequence, Tuple

from aura_lending.domain.entities import FactorGrade, PaymentBehavior, RevenuePeriod

NEUTRAL_SCORE = 50
NO_PAYMENT_HISTORY_SCORE = 70

# (threshold, score) pairs, best first; a value scores the first band it reaches
REVENUE_GROWTH_BANDS: Tuple[Tuple[float, int], ...] = (
    (0.30, 100),
    (0.20, 90),
    (0.10, 80),
    (0.05, 70),
    (0.0, 60),
    (-0.10, 40),
)
REVENUE_GROWTH_FLOOR = 20

RETENTION_BANDS: Tuple[Tuple[float, int], ...] = (
    (0.80, 100),
    (0.70, 90),
    (0.60, 80),
    (0.50, 70),
    (0.40, 60),
    (0.30, 40),
)
RETENTION_FLOOR = 20

LTV_CAC_BANDS: Tuple[Tuple[float, int], ...] = (
    (5.0, 100),
    (4.0, 90),
    (3.0, 80),
    (2.5, 70),
    (2.0, 60),
    (1.5, 40),
)
LTV_CAC_FLOOR = 20

ON_TIME_BANDS: Tuple[Tuple[float, int], ...] = (
    (0.98, 100),
    (0.95, 90),
    (0.90, 80),
    (0.85, 70),
    (0.75, 60),
)
ON_TIME_FLOOR = 40

TENURE_MONTH_BANDS: Tuple[Tuple[float, int], ...] = (
    (60, 100),
    (36, 90),
    (24, 80),
    (12, 70),
    (6, 60),
    (3, 40),
)
TENURE_FLOOR = 20

GRADE_BANDS: Tuple[Tuple[int, FactorGrade], ...] = (
    (90, FactorGrade.EXCELLENT),
    (80, FactorGrade.VERY_GOOD),
    (70, FactorGrade.GOOD),
    (60, FactorGrade.FAIR),
    (50, FactorGrade.POOR),
)


def _band(value: float, bands: Sequence[Tuple[float, int]], floor: int) -> int:
    for threshold, score in bands:
        if value >= threshold:
            return score
    return floor


# =============================================================================
# Revenue Trend
# =============================================================================

def calculate_average_growth(
    revenue_history: List[RevenuePeriod],
    periods: int = 3,
) -> Optional[float]:
    """
    Calculate the average month-over-month growth over the last periods.

    Algorithm:
        1. Take the most recent `periods` entries (oldest first)
        2. Compute growth for each consecutive pair: (cur - prev) / prev
        3. Average the growth rates

    Pairs whose previous period had zero revenue have no defined growth
    rate and are skipped.

    Args:
        revenue_history: Revenue periods ordered oldest first
        periods: Number of trailing periods to consider

    Returns:
        Average growth as a fraction (0.10 = 10%), or None when there are
        fewer than `periods` entries or no usable pair
    """
    if len(revenue_history) < periods:
        return None

    recent = revenue_history[-periods:]
    growth_rates = [
        (cur.amount_cents - prev.amount_cents) / prev.amount_cents
        for prev, cur in zip(recent, recent[1:])
        if prev.amount_cents != 0
    ]

    if not growth_rates:
        return None

    return sum(growth_rates) / len(growth_rates)


def score_revenue_growth(avg_growth: Optional[float]) -> int:
    """Convert average monthly growth to a 0-100 score (50 when unknown)."""
    if avg_growth is None:
        return NEUTRAL_SCORE
    return _band(avg_growth, REVENUE_GROWTH_BANDS, REVENUE_GROWTH_FLOOR)


def describe_revenue_trend(avg_growth: Optional[float]) -> str:
    if avg_growth is None:
        return "Insufficient data"
    return f"{avg_growth * 100:+.1f}% avg monthly growth"


# =============================================================================
# Customer Retention
# =============================================================================

def score_customer_retention(annual_retention: Optional[float]) -> int:
    """Convert cohort annual retention (0-1) to a 0-100 score."""
    if annual_retention is None:
        return NEUTRAL_SCORE
    return _band(annual_retention, RETENTION_BANDS, RETENTION_FLOOR)


def describe_customer_retention(annual_retention: Optional[float]) -> str:
    if annual_retention is None:
        return "N/A"
    return f"{annual_retention * 100:.0f}% annual retention"


# =============================================================================
# LTV / CAC
# =============================================================================

def calculate_ltv_cac_ratio(
    ltv_cents: Optional[int],
    cac_cents: Optional[int],
) -> Optional[float]:
    """Return LTV/CAC, or None when either side is missing or CAC is zero."""
    if ltv_cents is None or not cac_cents:
        return None
    return ltv_cents / cac_cents


def score_ltv_to_cac(ratio: Optional[float]) -> int:
    """Convert the LTV/CAC ratio to a 0-100 score."""
    if ratio is None:
        return NEUTRAL_SCORE
    return _band(ratio, LTV_CAC_BANDS, LTV_CAC_FLOOR)


def describe_ltv_to_cac(ratio: Optional[float]) -> str:
    if ratio is None:
        return "N/A"
    return f"{ratio:.1f}:1 ratio"


# =============================================================================
# Payment History
# =============================================================================

def calculate_on_time_rate(history: List[PaymentBehavior]) -> Optional[float]:
    """Fraction of historical payments made on time, None if there are none."""
    if not history:
        return None
    return sum(1 for p in history if p.paid_on_time) / len(history)


def score_payment_history(on_time_rate: Optional[float]) -> int:
    """Convert the on-time fraction to a 0-100 score (70 for new accounts)."""
    if on_time_rate is None:
        return NO_PAYMENT_HISTORY_SCORE
    return _band(on_time_rate, ON_TIME_BANDS, ON_TIME_FLOOR)


def describe_payment_history(history: List[PaymentBehavior]) -> str:
    if not history:
        return "No payment history"
    on_time = sum(1 for p in history if p.paid_on_time)
    return f"{on_time}/{len(history)} on-time ({on_time / len(history) * 100:.0f}%)"


# =============================================================================
# Business Tenure
# =============================================================================

def calculate_tenure_months(
    account_created_at: Optional[datetime],
    now: datetime,
    days_per_month: int = 30,
) -> Optional[float]:
    """
    Months elapsed since account creation.

    Naive datetimes are treated as UTC. Future creation dates count as zero.
    """
    if account_created_at is None:
        return None

    if account_created_at.tzinfo is None:
        account_created_at = account_created_at.replace(tzinfo=timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    elapsed_days = (now - account_created_at).total_seconds() / 86400
    return max(0.0, elapsed_days / days_per_month)


def score_business_tenure(months: Optional[float]) -> int:
    """Convert months in business to a 0-100 score."""
    if months is None:
        return NEUTRAL_SCORE
    return _band(months, TENURE_MONTH_BANDS, TENURE_FLOOR)


def describe_business_tenure(months: Optional[float], days_per_month: int = 30) -> str:
    if months is None:
        return "N/A"
    years = months * days_per_month / 365
    return f"{years:.1f} years in business"


# =============================================================================
# Grades
# =============================================================================

def grade_for(score: float) -> FactorGrade:
    """Letter grade for a 0-100 sub-score."""
    for threshold, grade in GRADE_BANDS:
        if score >= threshold:
            return grade
    return FactorGrade.VERY_POOR
