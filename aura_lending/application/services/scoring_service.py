"""Scoring service - calculates and retrieves Aura Scores."""

from datetime import datetime
from typing import Callable, List, Optional

import structlog

from aura_lending.core.metrics import record_score_calculated
from aura_lending.domain.entities import BehavioralInput, CreditScoreRecord
from aura_lending.domain.exceptions import MissingCreditScoreException
from aura_lending.domain.interfaces import (
    CDPAnalyticsClient,
    CreditScoreRepository,
    NotificationClient,
)
from aura_lending.service.scoring import ScoringSettings, compute_credit_score, scoring_settings
from aura_lending.utils.date_utils import utcnow

logger = structlog.get_logger(__name__)


class ScoringService:
    """
    Application service for credit score use cases.

    Every calculation inserts a new record; the newest record by
    calculated_at is authoritative for the customer.
    """

    def __init__(
        self,
        credit_score_repository: CreditScoreRepository,
        cdp_client: CDPAnalyticsClient,
        notification_client: NotificationClient,
        settings: ScoringSettings = scoring_settings,
        clock: Callable[[], datetime] = utcnow,
    ):
        self._score_repo = credit_score_repository
        self._cdp_client = cdp_client
        self._notification_client = notification_client
        self._settings = settings
        self._clock = clock

    async def calculate(
        self,
        customer_id: str,
        behavioral_input: Optional[BehavioralInput] = None,
    ) -> CreditScoreRecord:
        """
        Calculate a fresh Aura Score for a customer.

        Args:
            customer_id: The customer's identifier
            behavioral_input: Signals to score; pulled from CDP analytics when omitted

        Returns:
            The newly persisted CreditScoreRecord

        Raises:
            CustomerNotFoundException: If CDP analytics doesn't know the customer
            CDPAPIException: If CDP analytics fails
        """
        log = logger.bind(customer_id=customer_id)

        if behavioral_input is None:
            behavioral_input = await self._cdp_client.get_behavioral_input(customer_id)
            log.info(
                "behavioral_input_fetched",
                revenue_periods=len(behavioral_input.revenue_history),
                payments=len(behavioral_input.transaction_history),
            )

        previous = await self._score_repo.get_latest(customer_id)

        record = compute_credit_score(
            customer_id,
            behavioral_input,
            settings=self._settings,
            now=self._clock(),
        )
        await self._score_repo.save(record)

        record_score_calculated(record.rating.value, record.score)
        log.info(
            "credit_score_calculated",
            score_id=str(record.id),
            score=record.score,
            rating=record.rating.value,
            risk_tier=record.risk_tier,
        )

        if previous is not None and previous.risk_tier != record.risk_tier:
            log.info(
                "score_tier_changed",
                previous_tier=previous.risk_tier,
                new_tier=record.risk_tier,
            )
            await self._notification_client.send_score_tier_changed(
                record, previous.risk_tier
            )

        return record

    async def get_latest(self, customer_id: str) -> CreditScoreRecord:
        """
        Get the authoritative record for a customer.

        Raises:
            MissingCreditScoreException: If the customer was never scored
        """
        record = await self._score_repo.get_latest(customer_id)
        if record is None:
            raise MissingCreditScoreException(customer_id)
        return record

    async def get_history(
        self,
        customer_id: str,
        limit: Optional[int] = None,
    ) -> List[CreditScoreRecord]:
        """Get past records for a customer, newest first."""
        return await self._score_repo.get_history(customer_id, limit=limit)
