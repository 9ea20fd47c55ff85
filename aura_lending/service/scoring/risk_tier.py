"""
Risk Tier Resolution for the Aura Score engine.

Maps an Aura Score to the tier that fixes the interest-rate ceiling and the
maximum credit limit. Tiers are contiguous score ranges read from
ScoringSettings, best first.
"""

from dataclasses import dataclass
from typing import List

from .settings import ScoringSettings, scoring_settings


@dataclass(frozen=True)
class RiskTier:
    """A score-range bucket with its pricing and exposure ceilings."""

    name: str
    min_score: int
    max_score: int
    interest_rate_ceiling: float
    max_credit_limit_cents: int

    def contains(self, score: int) -> bool:
        return self.min_score <= score <= self.max_score


def get_risk_tiers(settings: ScoringSettings = scoring_settings) -> List[RiskTier]:
    """All configured tiers, best first."""
    return [RiskTier(*tier) for tier in settings.risk_tiers]


def resolve_risk_tier(
    score: int,
    settings: ScoringSettings = scoring_settings,
) -> RiskTier:
    """
    Resolve the risk tier for a score.

    Scores outside every configured range fail safe to the lowest tier
    rather than raising, since product gating always needs a tier.

    Args:
        score: Aura Score (expected 300-850)
        settings: Scoring settings (uses defaults if not provided)

    Returns:
        The matching RiskTier, or the lowest tier if none matches
    """
    tiers = get_risk_tiers(settings)

    for tier in tiers:
        if tier.contains(score):
            return tier

    return min(tiers, key=lambda t: t.min_score)


def get_risk_tier_by_name(
    name: str,
    settings: ScoringSettings = scoring_settings,
) -> RiskTier:
    """Look up a tier by name, falling back to the lowest tier."""
    tiers = get_risk_tiers(settings)

    for tier in tiers:
        if tier.name == name:
            return tier

    return min(tiers, key=lambda t: t.min_score)
