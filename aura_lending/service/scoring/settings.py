"""
Scoring Settings for the Aura Score engine.

This module contains the configurable parameters of the behavioral credit
score: factor weights, the score range and the risk tier table. They can be
adjusted via environment variables when re-calibrating the model.

Environment variables use the SCORING_ prefix:
    SCORING_WEIGHT_REVENUE_TREND=0.30
    SCORING_RISK_TIERS_JSON='[["excellent",750,850,0.08,100000000], ...]'

Usage:
    from aura_lending.service.scoring.settings import scoring_settings

    # Use default settings (loaded from env)
    weights = scoring_settings.factor_weights

    # Or create custom settings for testing
    custom = ScoringSettings(weight_revenue_trend=0.4, weight_customer_retention=0.15)
"""

import json
from functools import lru_cache
from typing import Dict, List, Tuple

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ScoringSettings(BaseSettings):
    """
    Configurable parameters for the Aura Score algorithm.

    All settings can be overridden via environment variables with SCORING_ prefix.
    All monetary values are in cents.
    Sub-scores are 0-100; the final score spans score_floor..score_ceiling.
    """

    model_config = SettingsConfigDict(
        env_prefix="SCORING_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Factor Weights ===
    weight_revenue_trend: float = Field(
        default=0.30,
        ge=0.0,
        le=1.0,
        description="Weight for month-over-month revenue growth",
    )
    weight_customer_retention: float = Field(
        default=0.25,
        ge=0.0,
        le=1.0,
        description="Weight for cohort annual retention",
    )
    weight_ltv_to_cac: float = Field(
        default=0.20,
        ge=0.0,
        le=1.0,
        description="Weight for LTV/CAC acquisition efficiency",
    )
    weight_payment_history: float = Field(
        default=0.15,
        ge=0.0,
        le=1.0,
        description="Weight for on-time payment behavior",
    )
    weight_business_tenure: float = Field(
        default=0.10,
        ge=0.0,
        le=1.0,
        description="Weight for time in business",
    )

    # === Score Range ===
    score_floor: int = Field(
        default=300,
        description="Lowest possible Aura Score",
    )
    score_ceiling: int = Field(
        default=850,
        description="Highest possible Aura Score",
    )

    # === Neutral Defaults ===
    revenue_min_periods: int = Field(
        default=3,
        ge=2,
        description="Revenue periods used for the trend (fewer yields the neutral score)",
    )
    tenure_days_per_month: int = Field(
        default=30,
        gt=0,
        description="Days counted as one month of business tenure",
    )

    # === Risk Tiers ===
    risk_tiers_json: str = Field(
        default=(
            '[["excellent",750,850,0.08,100000000],'
            '["good",680,749,0.10,50000000],'
            '["fair",620,679,0.12,25000000],'
            '["poor",550,619,0.15,10000000],'
            '["bad",300,549,0.18,5000000]]'
        ),
        description=(
            "Risk tiers as JSON array, best first: "
            "[[name, min_score, max_score, interest_rate_ceiling, max_credit_cents], ...]"
        ),
    )

    @field_validator("risk_tiers_json")
    @classmethod
    def validate_tiers_json(cls, v: str) -> str:
        """Validate that tiers JSON is parseable and well-formed."""
        try:
            tiers = json.loads(v)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON: {e}")
        if not isinstance(tiers, list) or not tiers:
            raise ValueError("Tiers must be a non-empty list")
        for tier in tiers:
            if not isinstance(tier, list) or len(tier) != 5:
                raise ValueError(
                    "Each tier must be [name, min_score, max_score, rate, max_credit_cents]"
                )
            name, min_score, max_score, rate, max_credit = tier
            if not isinstance(name, str):
                raise ValueError("Tier name must be a string")
            if min_score > max_score:
                raise ValueError(f"min_score ({min_score}) > max_score ({max_score})")
            if not 0 <= rate <= 1:
                raise ValueError(f"Interest rate must be within 0-1: {rate}")
            if max_credit < 0:
                raise ValueError(f"max_credit_cents cannot be negative: {max_credit}")
        return v

    @model_validator(mode="after")
    def validate_weights(self) -> "ScoringSettings":
        """Factor weights must add up to 100%."""
        total = sum(self.factor_weights.values())
        if abs(total - 1.0) > 1e-6:
            raise ValueError(f"Factor weights must sum to 1.0, got {total:.4f}")
        if self.score_floor >= self.score_ceiling:
            raise ValueError("score_floor must be below score_ceiling")
        return self

    @property
    def factor_weights(self) -> Dict[str, float]:
        """Weights keyed by factor name, in reporting order."""
        return {
            "revenue_trend": self.weight_revenue_trend,
            "customer_retention": self.weight_customer_retention,
            "ltv_to_cac": self.weight_ltv_to_cac,
            "payment_history": self.weight_payment_history,
            "business_tenure": self.weight_business_tenure,
        }

    @property
    def risk_tiers(self) -> List[Tuple[str, int, int, float, int]]:
        """Risk tiers mapping score ranges to rate and credit ceilings."""
        return [tuple(tier) for tier in json.loads(self.risk_tiers_json)]


@lru_cache
def get_scoring_settings() -> ScoringSettings:
    """Get cached scoring settings instance."""
    return ScoringSettings()


scoring_settings = get_scoring_settings()
