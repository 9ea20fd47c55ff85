"""External client interfaces."""

from abc import ABC, abstractmethod

from aura_lending.domain.entities import BehavioralInput, CreditScoreRecord, Obligation


class CDPAnalyticsClient(ABC):
    """
    Abstract client for the CDP analytics service.

    Supplies the pre-computed behavioral signals used for scoring.
    """

    @abstractmethod
    async def get_behavioral_input(self, customer_id: str) -> BehavioralInput:
        """
        Fetch the behavioral record for a customer.

        Args:
            customer_id: The customer's identifier

        Returns:
            Revenue, retention, LTV/CAC, payment and tenure signals

        Raises:
            CustomerNotFoundException: If the customer doesn't exist
            CDPAPIException: If the API returns an error
            CDPAPITimeoutException: If the request times out
        """
        ...


class NotificationClient(ABC):
    """
    Abstract client for the notification service.

    Events are fire-and-forget: implementations report delivery but
    never raise.
    """

    @abstractmethod
    async def send_score_tier_changed(
        self,
        record: CreditScoreRecord,
        previous_tier: str,
    ) -> bool:
        """
        Notify that a customer moved to a different risk tier.

        Args:
            record: The newly calculated credit score record
            previous_tier: Tier name of the superseded record

        Returns:
            True if the event was delivered successfully
        """
        ...

    @abstractmethod
    async def send_payment_due(self, obligation: Obligation) -> bool:
        """
        Notify the customer of an upcoming payment on a new obligation.

        Args:
            obligation: The obligation that was originated

        Returns:
            True if the event was delivered successfully
        """
        ...
