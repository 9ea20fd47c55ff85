"""
Product Term Calculation for embedded lending.

Pure functions that gate a credit score against product minimums and build
newly originated obligations. Nothing here performs I/O: the caller supplies
the authoritative credit score record, the current time and the new id.

Money is handled in integer cents. Rate-based amounts are computed with
Decimal and rounded half up to the nearest cent.
"""

import math
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from uuid import UUID

from aura_lending.domain.entities import (
    CreditScoreRecord,
    NetTermsObligation,
    ObligationType,
    RevenueBasedFinancing,
    WorkingCapitalLoan,
)
from aura_lending.domain.exceptions import (
    ExceedsRiskTierLimitException,
    InsufficientCreditScoreException,
    InvalidAmountException,
    InvalidOriginationRequestException,
)
from aura_lending.service.scoring import ScoringSettings, resolve_risk_tier, scoring_settings
from aura_lending.utils.date_utils import add_days, add_months

from .settings import LendingSettings, lending_settings


def apply_rate(amount_cents: int, rate: float) -> int:
    """Multiply an amount by a rate, rounding half up to whole cents."""
    product = Decimal(amount_cents) * Decimal(str(rate))
    return int(product.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def divide_cents(amount_cents: int, parts: int) -> int:
    """Split an amount into equal parts, rounding half up to whole cents."""
    quotient = Decimal(amount_cents) / Decimal(parts)
    return int(quotient.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def minimum_score_for(
    product: ObligationType,
    settings: LendingSettings = lending_settings,
) -> int:
    """Minimum Aura Score required to originate a product."""
    match product:
        case ObligationType.NET_TERMS:
            return settings.net_terms_min_score
        case ObligationType.WORKING_CAPITAL:
            return settings.working_capital_min_score
        case ObligationType.REVENUE_BASED_FINANCING:
            return settings.revenue_based_financing_min_score


def ensure_eligible(
    product: ObligationType,
    score: int,
    settings: LendingSettings = lending_settings,
) -> None:
    """
    Check a score against the product minimum.

    Raises:
        InsufficientCreditScoreException: If score is below the minimum
    """
    required = minimum_score_for(product, settings)
    if score < required:
        raise InsufficientCreditScoreException(product.value, required, score)


def ensure_positive(amount_cents: int, field: str) -> None:
    if amount_cents <= 0:
        raise InvalidAmountException(amount_cents, field)


# =============================================================================
# Net Terms
# =============================================================================

def net_terms_fee_rate(
    score: int,
    settings: LendingSettings = lending_settings,
) -> float:
    """2.5% for scores of 700 and above, otherwise 3.0%."""
    if score >= settings.net_terms_preferred_score:
        return settings.net_terms_preferred_fee_rate
    return settings.net_terms_standard_fee_rate


def build_net_terms(
    record: CreditScoreRecord,
    invoice_amount_cents: int,
    supplier_id: str,
    now: datetime,
    obligation_id: UUID,
    settings: LendingSettings = lending_settings,
) -> NetTermsObligation:
    """
    Originate a Net Terms contract.

    No credit-limit check applies: the float is bounded by the supplier
    relationship rather than by platform capital.

    Raises:
        InvalidAmountException: If invoice_amount_cents is not positive
        InvalidOriginationRequestException: If supplier_id is blank
        InsufficientCreditScoreException: If the score is below the minimum
    """
    ensure_positive(invoice_amount_cents, "invoice_amount_cents")
    if not supplier_id or not supplier_id.strip():
        raise InvalidOriginationRequestException("supplier_id is required")
    ensure_eligible(ObligationType.NET_TERMS, record.score, settings)

    fee_rate = net_terms_fee_rate(record.score, settings)

    return NetTermsObligation(
        id=obligation_id,
        customer_id=record.customer_id,
        credit_score_at_origination=record.score,
        originated_at=now,
        supplier_id=supplier_id.strip(),
        invoice_amount_cents=invoice_amount_cents,
        fee_amount_cents=apply_rate(invoice_amount_cents, fee_rate),
        fee_rate=fee_rate,
        supplier_payment_due_at=add_days(now, settings.net_terms_supplier_payment_days),
        customer_payment_due_at=add_days(now, settings.net_terms_customer_payment_days),
    )


# =============================================================================
# Working Capital
# =============================================================================

def build_working_capital_loan(
    record: CreditScoreRecord,
    amount_cents: int,
    term_months: int,
    now: datetime,
    obligation_id: UUID,
    settings: LendingSettings = lending_settings,
    scoring: ScoringSettings = scoring_settings,
) -> WorkingCapitalLoan:
    """
    Originate a working capital loan.

    Interest is simple: one lump of principal * tier rate, added once.
        total_repayment = principal + interest + 2% origination fee
        monthly_payment = total_repayment / term_months

    Raises:
        InvalidAmountException: If amount_cents is not positive
        InvalidOriginationRequestException: If term_months is outside
            1..working_capital_max_term_months
        InsufficientCreditScoreException: If the score is below the minimum
        ExceedsRiskTierLimitException: If amount exceeds the tier ceiling
    """
    ensure_positive(amount_cents, "amount_cents")
    if term_months < 1:
        raise InvalidOriginationRequestException("term_months must be at least 1")
    if term_months > settings.working_capital_max_term_months:
        raise InvalidOriginationRequestException(
            f"term_months must be at most {settings.working_capital_max_term_months}"
        )
    ensure_eligible(ObligationType.WORKING_CAPITAL, record.score, settings)

    tier = resolve_risk_tier(record.score, scoring)
    if amount_cents > tier.max_credit_limit_cents:
        raise ExceedsRiskTierLimitException(
            amount_cents, tier.max_credit_limit_cents, tier.name
        )

    interest_rate = tier.interest_rate_ceiling
    total_interest = apply_rate(amount_cents, interest_rate)
    origination_fee = apply_rate(amount_cents, settings.working_capital_origination_fee_rate)
    total_repayment = amount_cents + total_interest + origination_fee

    return WorkingCapitalLoan(
        id=obligation_id,
        customer_id=record.customer_id,
        credit_score_at_origination=record.score,
        originated_at=now,
        principal_cents=amount_cents,
        interest_rate=interest_rate,
        total_interest_cents=total_interest,
        origination_fee_cents=origination_fee,
        total_repayment_cents=total_repayment,
        monthly_payment_cents=divide_cents(total_repayment, term_months),
        term_months=term_months,
        first_payment_due_at=add_days(now, settings.working_capital_first_payment_days),
        final_payment_due_at=add_months(now, term_months),
    )


# =============================================================================
# Revenue-Based Financing
# =============================================================================

def revenue_share_rate(
    score: int,
    settings: LendingSettings = lending_settings,
) -> float:
    """6% of revenue at 750+, 8% at 700+, otherwise 10%."""
    if score >= settings.rbf_top_score:
        return settings.rbf_top_share_rate
    if score >= settings.rbf_mid_score:
        return settings.rbf_mid_share_rate
    return settings.rbf_base_share_rate


def expected_completion_months(repayment_multiple: float, share_rate: float) -> int:
    """
    Months to full payoff at the nominal revenue-share rate.

    ceil(multiple / share_rate), computed in Decimal so that exact
    quotients (1.5 / 0.10 = 15) are not pushed up by float error.
    """
    quotient = Decimal(str(repayment_multiple)) / Decimal(str(share_rate))
    return math.ceil(quotient)


def build_revenue_based_financing(
    record: CreditScoreRecord,
    advance_amount_cents: int,
    repayment_multiple: float,
    now: datetime,
    obligation_id: UUID,
    settings: LendingSettings = lending_settings,
) -> RevenueBasedFinancing:
    """
    Originate a revenue-based financing deal.

    Raises:
        InvalidAmountException: If advance_amount_cents is not positive
        InvalidOriginationRequestException: If repayment_multiple is not a
            finite number >= 1, or the payoff horizon exceeds
            rbf_max_completion_months
        InsufficientCreditScoreException: If the score is below the minimum
    """
    ensure_positive(advance_amount_cents, "advance_amount_cents")
    if not math.isfinite(repayment_multiple) or repayment_multiple < 1:
        raise InvalidOriginationRequestException("repayment_multiple must be at least 1.0")

    share_rate = revenue_share_rate(record.score, settings)
    months = expected_completion_months(repayment_multiple, share_rate)
    if months > settings.rbf_max_completion_months:
        raise InvalidOriginationRequestException(
            f"repayment_multiple implies {months} months to payoff, "
            f"at most {settings.rbf_max_completion_months} allowed"
        )
    ensure_eligible(ObligationType.REVENUE_BASED_FINANCING, record.score, settings)

    return RevenueBasedFinancing(
        id=obligation_id,
        customer_id=record.customer_id,
        credit_score_at_origination=record.score,
        originated_at=now,
        advance_amount_cents=advance_amount_cents,
        repayment_multiple=repayment_multiple,
        total_repayment_cents=apply_rate(advance_amount_cents, repayment_multiple),
        revenue_share_rate=share_rate,
        expected_completion_months=months,
        expected_completion_at=add_months(now, months),
    )
