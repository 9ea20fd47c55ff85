"""
Lending Product Settings.

Eligibility thresholds and pricing for the three embedded-lending products.
Override via environment variables with the LENDING_ prefix, e.g.:
    LENDING_NET_TERMS_MIN_SCORE=640
    LENDING_WORKING_CAPITAL_ORIGINATION_FEE_RATE=0.025
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LendingSettings(BaseSettings):
    """
    Configurable parameters for product origination.

    Rates are fractions (0.025 = 2.5%).
    """

    model_config = SettingsConfigDict(
        env_prefix="LENDING_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Minimum Scores ===
    net_terms_min_score: int = Field(default=620, ge=300, le=850)
    working_capital_min_score: int = Field(default=650, ge=300, le=850)
    revenue_based_financing_min_score: int = Field(default=680, ge=300, le=850)

    # === Net Terms ===
    net_terms_preferred_score: int = Field(
        default=700,
        description="Scores at or above this get the preferred fee rate",
    )
    net_terms_preferred_fee_rate: float = Field(default=0.025, ge=0.0, le=1.0)
    net_terms_standard_fee_rate: float = Field(default=0.03, ge=0.0, le=1.0)
    net_terms_supplier_payment_days: int = Field(
        default=7,
        gt=0,
        description="Days until the platform pays the supplier",
    )
    net_terms_customer_payment_days: int = Field(
        default=30,
        gt=0,
        description="Days until the customer owes the platform",
    )

    # === Working Capital ===
    working_capital_origination_fee_rate: float = Field(default=0.02, ge=0.0, le=1.0)
    working_capital_default_term_months: int = Field(default=6, ge=1)
    working_capital_first_payment_days: int = Field(default=30, gt=0)
    working_capital_max_term_months: int = Field(
        default=120,
        ge=1,
        le=1200,
        description="Longest loan term accepted at origination",
    )

    # === Revenue-Based Financing ===
    rbf_top_score: int = Field(default=750)
    rbf_top_share_rate: float = Field(default=0.06, gt=0.0, le=1.0)
    rbf_mid_score: int = Field(default=700)
    rbf_mid_share_rate: float = Field(default=0.08, gt=0.0, le=1.0)
    rbf_base_share_rate: float = Field(default=0.10, gt=0.0, le=1.0)
    rbf_default_repayment_multiple: float = Field(default=1.4, ge=1.0)
    rbf_max_completion_months: int = Field(
        default=120,
        ge=1,
        le=1200,
        description="Longest expected payoff horizon accepted at origination",
    )


@lru_cache
def get_lending_settings() -> LendingSettings:
    """Get cached lending settings instance."""
    return LendingSettings()


lending_settings = get_lending_settings()
