"""HTTP implementation of NotificationClient."""

import asyncio
from typing import Any, Dict

import httpx
import structlog

from aura_lending.core.config import settings
from aura_lending.core.metrics import (
    track_notification_latency,
    record_notification_retry,
    record_notification_success,
    record_notification_failure,
)
from aura_lending.domain.entities import (
    CreditScoreRecord,
    NetTermsObligation,
    Obligation,
    RevenueBasedFinancing,
    WorkingCapitalLoan,
)
from aura_lending.domain.interfaces import NotificationClient

logger = structlog.get_logger(__name__)


class HttpNotificationClient(NotificationClient):
    """
    HTTP client for the notification webhook.

    Sends async notifications with retry logic and exponential backoff.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        max_retries: int = 5,
    ):
        self._base_url = base_url or settings.notification_webhook_url
        self._timeout = timeout or settings.notification_webhook_timeout
        self._max_retries = max_retries

    async def send_score_tier_changed(
        self,
        record: CreditScoreRecord,
        previous_tier: str,
    ) -> bool:
        """Send a score tier changed event."""
        payload = {
            "event": "score_tier_changed",
            "customer_id": record.customer_id,
            "score_id": str(record.id),
            "score": record.score,
            "previous_tier": previous_tier,
            "new_tier": record.risk_tier,
            "max_credit_limit_cents": record.max_credit_limit_cents,
            "calculated_at": record.calculated_at.isoformat(),
        }

        return await self._send_webhook(payload, "score_tier_changed")

    async def send_payment_due(self, obligation: Obligation) -> bool:
        """
        Send a payment due event for a newly originated obligation.

        The due date is the customer-facing one: the customer payment date
        for net terms, the first installment for a working capital loan.
        """
        match obligation:
            case NetTermsObligation():
                due_at = obligation.customer_payment_due_at
                amount_due_cents = obligation.total_due_cents
            case WorkingCapitalLoan():
                due_at = obligation.first_payment_due_at
                amount_due_cents = obligation.monthly_payment_cents
            case RevenueBasedFinancing():
                # Repaid from revenue; there is no fixed due date to announce
                return False

        payload = {
            "event": "payment_due",
            "customer_id": obligation.customer_id,
            "obligation_id": str(obligation.id),
            "type": obligation.type.value,
            "amount_due_cents": amount_due_cents,
            "due_at": due_at.isoformat(),
        }

        return await self._send_webhook(payload, "payment_due")

    async def _send_webhook(
        self,
        payload: Dict[str, Any],
        event_type: str,
    ) -> bool:
        """
        Send a webhook with retry logic.

        Uses exponential backoff: 0.1s, 0.2s, 0.4s, 0.8s, 1.6s
        """
        url = self._base_url

        for attempt in range(self._max_retries):
            try:
                with track_notification_latency():
                    async with httpx.AsyncClient(timeout=self._timeout) as client:
                        response = await client.post(
                            url,
                            json=payload,
                            headers={"Content-Type": "application/json"},
                        )

                        if response.status_code < 400:
                            logger.info(
                                "notification_sent",
                                event_type=event_type,
                                status_code=response.status_code,
                            )
                            record_notification_success(event_type)
                            return True

                        logger.warning(
                            "notification_failed",
                            event_type=event_type,
                            status_code=response.status_code,
                            attempt=attempt + 1,
                            response=response.text[:200],
                        )

            except httpx.TimeoutException:
                logger.warning(
                    "notification_timeout",
                    event_type=event_type,
                    attempt=attempt + 1,
                )
            except Exception as e:
                logger.error(
                    "notification_error",
                    event_type=event_type,
                    attempt=attempt + 1,
                    error=str(e),
                )

            if attempt < self._max_retries - 1:
                record_notification_retry()
                delay = 2 ** attempt * 0.1
                await asyncio.sleep(delay)

        logger.error(
            "notification_exhausted_retries",
            event_type=event_type,
            max_retries=self._max_retries,
        )
        record_notification_failure(event_type)
        return False
