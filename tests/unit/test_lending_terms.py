"""
Unit Tests for product term calculation.

These tests verify:
1. Net Terms fee tiers and payment windows
2. Working capital pricing, tier limit and schedule dates
3. Revenue-based financing share rates and completion estimate
4. Input validation order
"""

from datetime import datetime, timezone
from uuid import UUID

import pytest

from aura_lending.domain.entities import ObligationStatus, ObligationType
from aura_lending.domain.exceptions import (
    ExceedsRiskTierLimitException,
    InsufficientCreditScoreException,
    InvalidAmountException,
    InvalidOriginationRequestException,
)
from aura_lending.service.lending import (
    apply_rate,
    build_net_terms,
    build_revenue_based_financing,
    build_working_capital_loan,
    expected_completion_months,
    minimum_score_for,
    net_terms_fee_rate,
    revenue_share_rate,
)

NOW = datetime(2025, 1, 31, 9, 0, tzinfo=timezone.utc)
OBLIGATION_ID = UUID(int=42)


class TestHelpers:
    """Tests for rate and threshold helpers."""

    def test_apply_rate_rounds_half_up(self):
        assert apply_rate(1000, 0.025) == 25
        assert apply_rate(50, 0.03) == 2  # 1.5 -> 2
        assert apply_rate(10, 0.025) == 0  # 0.25 -> 0

    def test_minimum_scores(self):
        assert minimum_score_for(ObligationType.NET_TERMS) == 620
        assert minimum_score_for(ObligationType.WORKING_CAPITAL) == 650
        assert minimum_score_for(ObligationType.REVENUE_BASED_FINANCING) == 680

    def test_net_terms_fee_rate(self):
        assert net_terms_fee_rate(700) == 0.025
        assert net_terms_fee_rate(699) == 0.03

    def test_revenue_share_rate(self):
        assert revenue_share_rate(750) == 0.06
        assert revenue_share_rate(749) == 0.08
        assert revenue_share_rate(700) == 0.08
        assert revenue_share_rate(699) == 0.10

    def test_expected_completion_months(self):
        assert expected_completion_months(1.4, 0.06) == 24  # 23.33
        assert expected_completion_months(1.4, 0.08) == 18  # 17.5
        assert expected_completion_months(1.4, 0.10) == 14
        assert expected_completion_months(1.5, 0.10) == 15


class TestNetTerms:
    """Tests for build_net_terms()."""

    def test_preferred_fee(self, make_record):
        obligation = build_net_terms(
            make_record("c1", 720), 1_000_000, "supplier_1", NOW, OBLIGATION_ID
        )

        assert obligation.id == OBLIGATION_ID
        assert obligation.status == ObligationStatus.ACTIVE
        assert obligation.fee_rate == 0.025
        assert obligation.fee_amount_cents == 25_000
        assert obligation.total_due_cents == 1_025_000
        assert obligation.borrowed_cents == 1_000_000
        assert obligation.outstanding_cents == 1_025_000
        assert obligation.supplier_payment_due_at == datetime(2025, 2, 7, 9, 0, tzinfo=timezone.utc)
        assert obligation.customer_payment_due_at == datetime(2025, 3, 2, 9, 0, tzinfo=timezone.utc)
        assert obligation.credit_score_at_origination == 720

    def test_standard_fee(self, make_record):
        obligation = build_net_terms(
            make_record("c1", 650), 1_000_000, "supplier_1", NOW, OBLIGATION_ID
        )

        assert obligation.fee_rate == 0.03
        assert obligation.fee_amount_cents == 30_000

    def test_no_credit_limit_check(self, make_record):
        """Invoice size is not bounded by the risk tier."""
        record = make_record("c1", 625)
        obligation = build_net_terms(
            record, record.max_credit_limit_cents * 10, "supplier_1", NOW, OBLIGATION_ID
        )
        assert obligation.invoice_amount_cents == record.max_credit_limit_cents * 10

    def test_score_boundary(self, make_record):
        build_net_terms(make_record("c1", 620), 1000, "s", NOW, OBLIGATION_ID)

        with pytest.raises(InsufficientCreditScoreException) as exc_info:
            build_net_terms(make_record("c1", 619), 1000, "s", NOW, OBLIGATION_ID)

        assert exc_info.value.details == {"product": "net_terms", "required": 620, "actual": 619}

    @pytest.mark.parametrize("amount", [0, -100])
    def test_non_positive_invoice(self, make_record, amount):
        with pytest.raises(InvalidAmountException):
            build_net_terms(make_record("c1", 700), amount, "s", NOW, OBLIGATION_ID)

    def test_blank_supplier(self, make_record):
        with pytest.raises(InvalidOriginationRequestException):
            build_net_terms(make_record("c1", 700), 1000, "  ", NOW, OBLIGATION_ID)


class TestWorkingCapital:
    """Tests for build_working_capital_loan()."""

    def test_pricing_good_tier(self, make_record):
        """
        Good tier (10%): 5,000,000 principal
        interest 500,000 + fee 100,000 -> total 5,600,000 over 6 months.
        """
        loan = build_working_capital_loan(
            make_record("c1", 720), 5_000_000, 6, NOW, OBLIGATION_ID
        )

        assert loan.interest_rate == 0.10
        assert loan.total_interest_cents == 500_000
        assert loan.origination_fee_cents == 100_000
        assert loan.total_repayment_cents == 5_600_000
        assert loan.monthly_payment_cents == 933_333
        assert loan.remaining_cents == 5_600_000
        assert loan.amount_repaid_cents == 0
        assert loan.term_months == 6

    def test_schedule_dates(self, make_record):
        loan = build_working_capital_loan(
            make_record("c1", 720), 1_000_000, 1, NOW, OBLIGATION_ID
        )

        assert loan.first_payment_due_at == datetime(2025, 3, 2, 9, 0, tzinfo=timezone.utc)
        # Jan 31 + 1 month clamps to Feb 28
        assert loan.final_payment_due_at == datetime(2025, 2, 28, 9, 0, tzinfo=timezone.utc)

    def test_monthly_payment_rounds_half_up(self, make_record):
        """1,120,002 over 4 months is 280,000.5 per month, rounded up."""
        loan = build_working_capital_loan(
            make_record("c1", 720), 1_000_002, 4, NOW, OBLIGATION_ID
        )

        assert loan.total_repayment_cents == 1_120_002
        assert loan.monthly_payment_cents == 280_001

    def test_amount_at_tier_limit(self, make_record):
        loan = build_working_capital_loan(
            make_record("c1", 720), 50_000_000, 6, NOW, OBLIGATION_ID
        )
        assert loan.principal_cents == 50_000_000

    def test_exceeds_tier_limit(self, make_record):
        """A qualifying score still can't borrow past the tier ceiling."""
        with pytest.raises(ExceedsRiskTierLimitException) as exc_info:
            build_working_capital_loan(
                make_record("c1", 720), 50_000_001, 6, NOW, OBLIGATION_ID
            )

        assert exc_info.value.details["requested"] == 50_000_001
        assert exc_info.value.details["max"] == 50_000_000

    def test_score_boundary(self, make_record):
        build_working_capital_loan(make_record("c1", 650), 1000, 6, NOW, OBLIGATION_ID)

        with pytest.raises(InsufficientCreditScoreException):
            build_working_capital_loan(make_record("c1", 649), 1000, 6, NOW, OBLIGATION_ID)

    def test_invalid_term(self, make_record):
        with pytest.raises(InvalidOriginationRequestException):
            build_working_capital_loan(make_record("c1", 720), 1000, 0, NOW, OBLIGATION_ID)

    def test_term_upper_limit(self, make_record):
        loan = build_working_capital_loan(make_record("c1", 720), 1000, 120, NOW, OBLIGATION_ID)
        assert loan.final_payment_due_at == datetime(2035, 1, 31, 9, 0, tzinfo=timezone.utc)

        for term in (121, 100_000):
            with pytest.raises(InvalidOriginationRequestException):
                build_working_capital_loan(make_record("c1", 720), 1000, term, NOW, OBLIGATION_ID)

    def test_amount_validated_before_eligibility(self, make_record):
        with pytest.raises(InvalidAmountException):
            build_working_capital_loan(make_record("c1", 400), -1, 6, NOW, OBLIGATION_ID)


class TestRevenueBasedFinancing:
    """Tests for build_revenue_based_financing()."""

    def test_terms_top_score(self, make_record):
        deal = build_revenue_based_financing(
            make_record("c1", 780), 10_000_000, 1.4, NOW, OBLIGATION_ID
        )

        assert deal.revenue_share_rate == 0.06
        assert deal.revenue_share_percent == 6.0
        assert deal.total_repayment_cents == 14_000_000
        assert deal.remaining_cents == 14_000_000
        assert deal.expected_completion_months == 24
        assert deal.expected_completion_at == datetime(2027, 1, 31, 9, 0, tzinfo=timezone.utc)
        assert deal.borrowed_cents == 10_000_000

    def test_terms_mid_and_base_scores(self, make_record):
        mid = build_revenue_based_financing(make_record("c1", 710), 1000, 1.4, NOW, OBLIGATION_ID)
        base = build_revenue_based_financing(make_record("c1", 690), 1000, 1.4, NOW, OBLIGATION_ID)

        assert mid.revenue_share_rate == 0.08
        assert mid.expected_completion_months == 18
        assert base.revenue_share_rate == 0.10
        assert base.expected_completion_months == 14

    def test_score_boundary(self, make_record):
        build_revenue_based_financing(make_record("c1", 680), 1000, 1.4, NOW, OBLIGATION_ID)

        with pytest.raises(InsufficientCreditScoreException):
            build_revenue_based_financing(make_record("c1", 679), 1000, 1.4, NOW, OBLIGATION_ID)

    def test_multiple_below_one(self, make_record):
        with pytest.raises(InvalidOriginationRequestException):
            build_revenue_based_financing(make_record("c1", 780), 1000, 0.9, NOW, OBLIGATION_ID)

    @pytest.mark.parametrize("multiple", [float("nan"), float("inf")])
    def test_non_finite_multiple(self, make_record, multiple):
        with pytest.raises(InvalidOriginationRequestException):
            build_revenue_based_financing(
                make_record("c1", 780), 1000, multiple, NOW, OBLIGATION_ID
            )

    def test_payoff_horizon_limit(self, make_record):
        # 7.2 / 6% is exactly 120 months
        deal = build_revenue_based_financing(
            make_record("c1", 780), 1000, 7.2, NOW, OBLIGATION_ID
        )
        assert deal.expected_completion_months == 120

        for multiple in (7.26, 10_000):
            with pytest.raises(InvalidOriginationRequestException):
                build_revenue_based_financing(
                    make_record("c1", 780), 1000, multiple, NOW, OBLIGATION_ID
                )

    def test_horizon_validated_before_eligibility(self, make_record):
        with pytest.raises(InvalidOriginationRequestException):
            build_revenue_based_financing(
                make_record("c1", 600), 1000, 10_000, NOW, OBLIGATION_ID
            )
