"""HTTP implementation of CDPAnalyticsClient."""

import asyncio
from datetime import datetime
from typing import Any, Dict, Optional

import httpx
import structlog

from aura_lending.core.config import settings
from aura_lending.core.metrics import (
    track_cdp_fetch_latency,
    record_cdp_fetch_success,
    record_cdp_fetch_failure,
)
from aura_lending.domain.entities import BehavioralInput, PaymentBehavior, RevenuePeriod
from aura_lending.domain.exceptions import (
    CDPAPIException,
    CDPAPITimeoutException,
    CustomerNotFoundException,
)
from aura_lending.domain.interfaces import CDPAnalyticsClient
from aura_lending.utils.date_utils import as_utc

logger = structlog.get_logger(__name__)


class HttpCDPAnalyticsClient(CDPAnalyticsClient):
    """
    HTTP client for the CDP analytics API.

    Fetches a customer's behavioral record with retry logic and proper
    error handling.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        max_retries: int = 3,
    ):
        self._base_url = base_url or settings.cdp_api_url
        self._timeout = timeout or settings.cdp_api_timeout
        self._max_retries = max_retries

    async def get_behavioral_input(self, customer_id: str) -> BehavioralInput:
        """
        Fetch behavioral signals for a customer.

        Implements retry logic with exponential backoff.
        """
        url = f"{self._base_url}/customers/{customer_id}/behavioral"

        last_exception = None

        for attempt in range(self._max_retries):
            try:
                with track_cdp_fetch_latency():
                    async with httpx.AsyncClient(timeout=self._timeout) as client:
                        response = await client.get(url)

                        if response.status_code == 404:
                            record_cdp_fetch_failure("not_found")
                            raise CustomerNotFoundException(customer_id)

                        if response.status_code >= 400:
                            record_cdp_fetch_failure("error")
                            raise CDPAPIException(
                                message=f"CDP analytics API error: {response.text}",
                                status_code=response.status_code,
                            )

                        data = response.json()
                        record_cdp_fetch_success()
                        return self._parse_behavioral_input(data)

            except httpx.TimeoutException:
                record_cdp_fetch_failure("timeout")
                last_exception = CDPAPITimeoutException()
                logger.warning(
                    "cdp_api_timeout",
                    customer_id=customer_id,
                    attempt=attempt + 1,
                    max_retries=self._max_retries,
                )
            except (CustomerNotFoundException, CDPAPIException):
                raise
            except Exception as e:
                record_cdp_fetch_failure("error")
                last_exception = CDPAPIException(
                    message=f"Unexpected error: {str(e)}",
                )
                logger.error(
                    "cdp_api_error",
                    customer_id=customer_id,
                    attempt=attempt + 1,
                    error=str(e),
                )

            # Exponential backoff
            if attempt < self._max_retries - 1:
                await asyncio.sleep(2**attempt * 0.1)

        raise last_exception or CDPAPIException("Failed to fetch behavioral data")

    def _parse_behavioral_input(self, data: Dict[str, Any]) -> BehavioralInput:
        """Parse raw API response into a BehavioralInput."""
        revenue_history = [
            RevenuePeriod(
                period=str(item.get("period", "")),
                amount_cents=int(item.get("amount_cents", 0)),
            )
            for item in data.get("revenue_history", [])
        ]

        transaction_history = [
            PaymentBehavior(
                amount_cents=int(item.get("amount_cents", 0)),
                paid_on_time=bool(item.get("paid_on_time", False)),
            )
            for item in data.get("transaction_history", [])
        ]

        return BehavioralInput(
            revenue_history=revenue_history,
            annual_retention=data.get("annual_retention"),
            ltv_cents=data.get("ltv_cents"),
            cac_cents=data.get("cac_cents"),
            transaction_history=transaction_history,
            account_created_at=self._parse_datetime(data.get("account_created_at")),
        )

    def _parse_datetime(self, value: Optional[str]) -> Optional[datetime]:
        if not value:
            return None
        # Naive timestamps from the API are UTC
        return as_utc(datetime.fromisoformat(value.replace("Z", "+00:00")))
