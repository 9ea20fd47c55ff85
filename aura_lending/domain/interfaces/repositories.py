"""Repository interfaces for data persistence."""

from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from aura_lending.domain.entities import CreditScoreRecord, Obligation, Payment


class CreditScoreRepository(ABC):
    """
    Abstract repository for CreditScoreRecord persistence.

    Records are insert-only; a newer record supersedes older ones
    without deleting them.
    """

    @abstractmethod
    async def save(self, record: CreditScoreRecord) -> CreditScoreRecord:
        """
        Persist a new credit score record.

        Args:
            record: The record to insert

        Returns:
            The saved record
        """
        ...

    @abstractmethod
    async def get_latest(self, customer_id: str) -> Optional[CreditScoreRecord]:
        """
        Retrieve the authoritative record for a customer.

        Args:
            customer_id: The customer's identifier

        Returns:
            The record with the greatest calculated_at, or None
        """
        ...

    @abstractmethod
    async def get_history(
        self,
        customer_id: str,
        limit: Optional[int] = None,
    ) -> List[CreditScoreRecord]:
        """
        Retrieve past records for a customer.

        Args:
            customer_id: The customer's identifier
            limit: Maximum number of records to return (None for all)

        Returns:
            List of records, ordered by calculated_at descending
        """
        ...


class ObligationRepository(ABC):
    """
    Abstract repository for Obligation persistence.

    Obligations are inserted once at origination and afterwards only
    changed through apply_payment, which is guarded by the obligation's
    version to prevent lost updates.
    """

    @abstractmethod
    async def save(self, obligation: Obligation) -> Obligation:
        """
        Insert a newly originated obligation.

        Args:
            obligation: The obligation to insert

        Returns:
            The saved obligation
        """
        ...

    @abstractmethod
    async def get_by_id(self, obligation_id: UUID) -> Optional[Obligation]:
        """
        Retrieve an obligation, including its payment history.

        Args:
            obligation_id: The obligation's unique identifier

        Returns:
            The obligation if found, None otherwise
        """
        ...

    @abstractmethod
    async def get_by_customer_id(self, customer_id: str) -> List[Obligation]:
        """
        Retrieve every obligation ever originated for a customer.

        Args:
            customer_id: The customer's identifier

        Returns:
            List of obligations, ordered by originated_at descending
        """
        ...

    @abstractmethod
    async def apply_payment(
        self,
        obligation: Obligation,
        payment: Payment,
        expected_version: int,
    ) -> Obligation:
        """
        Atomically record a payment and the obligation's new state.

        The write only succeeds when the stored version still equals
        expected_version; the stored version is then incremented.

        Args:
            obligation: The obligation with the payment already applied
            payment: The payment to append
            expected_version: Version the caller read before applying

        Returns:
            The obligation with its version bumped

        Raises:
            ConcurrentModificationException: If the stored version differs
            ObligationNotFoundException: If the obligation no longer exists
        """
        ...

    @abstractmethod
    async def get_payments(self, obligation_id: UUID) -> List[Payment]:
        """
        Retrieve all payments recorded against an obligation.

        Args:
            obligation_id: The obligation's unique identifier

        Returns:
            List of payments, in the order they were applied
        """
        ...
