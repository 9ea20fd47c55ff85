"""Origination service - gates products on the Aura Score and creates obligations."""

from datetime import datetime
from typing import Callable
from uuid import UUID, uuid4

import structlog

from aura_lending.application.dto import (
    NetTermsRequest,
    RevenueBasedFinancingRequest,
    WorkingCapitalRequest,
)
from aura_lending.core.metrics import record_origination, record_origination_rejected
from aura_lending.domain.entities import (
    CreditScoreRecord,
    NetTermsObligation,
    Obligation,
    ObligationType,
    RevenueBasedFinancing,
    WorkingCapitalLoan,
)
from aura_lending.domain.exceptions import (
    DomainException,
    InvalidOriginationRequestException,
    MissingCreditScoreException,
)
from aura_lending.domain.interfaces import (
    CreditScoreRepository,
    NotificationClient,
    ObligationRepository,
)
from aura_lending.service.lending import (
    LendingSettings,
    build_net_terms,
    build_revenue_based_financing,
    build_working_capital_loan,
    lending_settings,
)
from aura_lending.service.scoring import ScoringSettings, scoring_settings
from aura_lending.utils.date_utils import utcnow

logger = structlog.get_logger(__name__)


class OriginationService:
    """
    Application service for originating financing products.

    Each origination reads the customer's latest credit score, builds the
    obligation from it and inserts it. A rejected origination leaves
    nothing behind.
    """

    def __init__(
        self,
        credit_score_repository: CreditScoreRepository,
        obligation_repository: ObligationRepository,
        notification_client: NotificationClient,
        lending: LendingSettings = lending_settings,
        scoring: ScoringSettings = scoring_settings,
        clock: Callable[[], datetime] = utcnow,
        id_generator: Callable[[], UUID] = uuid4,
    ):
        self._score_repo = credit_score_repository
        self._obligation_repo = obligation_repository
        self._notification_client = notification_client
        self._lending = lending
        self._scoring = scoring
        self._clock = clock
        self._id_generator = id_generator

    async def originate_net_terms(self, request: NetTermsRequest) -> NetTermsObligation:
        """
        Originate a Net Terms contract.

        Raises:
            MissingCreditScoreException: If the customer has no score
            InsufficientCreditScoreException: If the score is below 620
            InvalidAmountException: If the invoice amount is not positive
            InvalidOriginationRequestException: If the request is malformed
        """
        return await self._originate(
            ObligationType.NET_TERMS,
            request.customer_id,
            request.validate(),
            lambda record, now, obligation_id: build_net_terms(
                record,
                invoice_amount_cents=request.invoice_amount_cents,
                supplier_id=request.supplier_id,
                now=now,
                obligation_id=obligation_id,
                settings=self._lending,
            ),
        )

    async def originate_working_capital_loan(
        self,
        request: WorkingCapitalRequest,
    ) -> WorkingCapitalLoan:
        """
        Originate a working capital loan.

        Raises:
            MissingCreditScoreException: If the customer has no score
            InsufficientCreditScoreException: If the score is below 650
            ExceedsRiskTierLimitException: If the amount exceeds the tier limit
            InvalidAmountException: If the amount is not positive
            InvalidOriginationRequestException: If the request is malformed
        """
        term_months = request.term_months
        if term_months is None:
            term_months = self._lending.working_capital_default_term_months

        return await self._originate(
            ObligationType.WORKING_CAPITAL,
            request.customer_id,
            request.validate(),
            lambda record, now, obligation_id: build_working_capital_loan(
                record,
                amount_cents=request.amount_cents,
                term_months=term_months,
                now=now,
                obligation_id=obligation_id,
                settings=self._lending,
                scoring=self._scoring,
            ),
        )

    async def originate_revenue_based_financing(
        self,
        request: RevenueBasedFinancingRequest,
    ) -> RevenueBasedFinancing:
        """
        Originate a revenue-based financing deal.

        Raises:
            MissingCreditScoreException: If the customer has no score
            InsufficientCreditScoreException: If the score is below 680
            InvalidAmountException: If the advance is not positive
            InvalidOriginationRequestException: If the request is malformed
        """
        multiple = request.repayment_multiple
        if multiple is None:
            multiple = self._lending.rbf_default_repayment_multiple

        return await self._originate(
            ObligationType.REVENUE_BASED_FINANCING,
            request.customer_id,
            request.validate(),
            lambda record, now, obligation_id: build_revenue_based_financing(
                record,
                advance_amount_cents=request.advance_amount_cents,
                repayment_multiple=multiple,
                now=now,
                obligation_id=obligation_id,
                settings=self._lending,
            ),
        )

    async def _originate(
        self,
        product: ObligationType,
        customer_id: str,
        errors: list[str],
        build: Callable[[CreditScoreRecord, datetime, UUID], Obligation],
    ) -> Obligation:
        log = logger.bind(customer_id=customer_id, product=product.value)
        log.info("origination_requested")

        try:
            if errors:
                raise InvalidOriginationRequestException("; ".join(errors))

            record = await self._score_repo.get_latest(customer_id)
            if record is None:
                raise MissingCreditScoreException(customer_id)

            obligation = build(record, self._clock(), self._id_generator())
        except DomainException as e:
            record_origination_rejected(product.value, e.code)
            log.warning("origination_rejected", reason=e.code, message=e.message)
            raise

        await self._obligation_repo.save(obligation)

        record_origination(product.value, obligation.borrowed_cents)
        log.info(
            "obligation_originated",
            obligation_id=str(obligation.id),
            credit_score=obligation.credit_score_at_origination,
            borrowed_cents=obligation.borrowed_cents,
        )

        if product in (ObligationType.NET_TERMS, ObligationType.WORKING_CAPITAL):
            await self._notification_client.send_payment_due(obligation)

        return obligation
