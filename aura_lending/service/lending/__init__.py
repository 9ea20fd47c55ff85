"""
Lending Module - eligibility gating and term calculation for embedded lending
"""

from .settings import LendingSettings, lending_settings
from .terms import (
    apply_rate,
    build_net_terms,
    build_revenue_based_financing,
    build_working_capital_loan,
    ensure_eligible,
    expected_completion_months,
    minimum_score_for,
    net_terms_fee_rate,
    revenue_share_rate,
)

__all__ = [
    "LendingSettings",
    "lending_settings",
    "apply_rate",
    "build_net_terms",
    "build_revenue_based_financing",
    "build_working_capital_loan",
    "ensure_eligible",
    "expected_completion_months",
    "minimum_score_for",
    "net_terms_fee_rate",
    "revenue_share_rate",
]
