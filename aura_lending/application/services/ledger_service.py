"""Ledger service - records payments against obligations."""

from datetime import datetime
from typing import Callable, List, Optional, assert_never
from uuid import UUID, uuid4

import structlog

from aura_lending.application.dto import PaymentResult
from aura_lending.core.config import settings
from aura_lending.core.metrics import (
    record_obligation_terminated,
    record_payment,
    record_payment_conflict_retry,
)
from aura_lending.domain.entities import (
    NetTermsObligation,
    Obligation,
    Payment,
    RevenueBasedFinancing,
    WorkingCapitalLoan,
)
from aura_lending.domain.exceptions import (
    AlreadyCompletedException,
    ConcurrentModificationException,
    InvalidAmountException,
    ObligationNotFoundException,
)
from aura_lending.domain.interfaces import ObligationRepository
from aura_lending.utils.date_utils import utcnow

logger = structlog.get_logger(__name__)


def apply_to_obligation(obligation: Obligation, payment: Payment) -> None:
    """
    Apply a payment to an obligation in place.

    Raises:
        AlreadyCompletedException: If the obligation is no longer active
    """
    match obligation:
        case NetTermsObligation():
            obligation.settle(payment)
        case WorkingCapitalLoan() | RevenueBasedFinancing():
            obligation.apply_payment(payment)
        case _:
            assert_never(obligation)


class LedgerService:
    """
    Application service for the payment ledger.

    Writes are guarded by the obligation version. When another payment
    lands between our read and our write, the obligation is re-read and
    the payment re-applied against the fresh state.
    """

    def __init__(
        self,
        obligation_repository: ObligationRepository,
        clock: Callable[[], datetime] = utcnow,
        id_generator: Callable[[], UUID] = uuid4,
        max_retries: int | None = None,
    ):
        self._obligation_repo = obligation_repository
        self._clock = clock
        self._id_generator = id_generator
        if max_retries is None:
            max_retries = settings.payment_max_retries
        self._max_retries = max(1, max_retries)

    async def record_payment(
        self,
        obligation_id: UUID,
        amount_cents: int,
        revenue_for_period_cents: Optional[int] = None,
    ) -> PaymentResult:
        """
        Record a payment against an obligation.

        Args:
            obligation_id: The obligation's unique identifier
            amount_cents: Payment amount, must be positive
            revenue_for_period_cents: Revenue the payment was derived from (RBF only)

        Returns:
            PaymentResult with the payment and the updated obligation

        Raises:
            InvalidAmountException: If an amount is not positive
            ObligationNotFoundException: If the obligation doesn't exist
            AlreadyCompletedException: If the obligation is already terminal
            ConcurrentModificationException: If retries are exhausted
        """
        if amount_cents <= 0:
            raise InvalidAmountException(amount_cents)
        if revenue_for_period_cents is not None and revenue_for_period_cents < 0:
            raise InvalidAmountException(revenue_for_period_cents, "revenue_for_period_cents")

        log = logger.bind(obligation_id=str(obligation_id), amount_cents=amount_cents)

        payment_id = self._id_generator()
        paid_at = self._clock()

        for attempt in range(1, self._max_retries + 1):
            obligation = await self._obligation_repo.get_by_id(obligation_id)
            if obligation is None:
                log.warning("obligation_not_found")
                raise ObligationNotFoundException(str(obligation_id))

            expected_version = obligation.version
            payment = Payment(
                id=payment_id,
                obligation_id=obligation.id,
                amount_cents=amount_cents,
                revenue_for_period_cents=revenue_for_period_cents,
                paid_at=paid_at,
            )

            try:
                apply_to_obligation(obligation, payment)
            except AlreadyCompletedException:
                log.warning("payment_rejected", status=obligation.status.value)
                raise

            try:
                obligation = await self._obligation_repo.apply_payment(
                    obligation, payment, expected_version
                )
            except ConcurrentModificationException:
                if attempt == self._max_retries:
                    log.error("payment_conflict_exhausted", attempts=attempt)
                    raise
                record_payment_conflict_retry()
                log.warning(
                    "payment_conflict_retry",
                    attempt=attempt,
                    expected_version=expected_version,
                )
                continue

            record_payment(obligation.type.value)
            log.info(
                "payment_recorded",
                payment_id=str(payment.id),
                customer_id=obligation.customer_id,
                outstanding_cents=obligation.outstanding_cents,
                version=obligation.version,
            )

            if not obligation.is_active:
                record_obligation_terminated(obligation.type.value, obligation.status.value)
                log.info("obligation_terminated", status=obligation.status.value)

            return PaymentResult(payment=payment, obligation=obligation)

        raise ConcurrentModificationException(str(obligation_id), expected_version)

    async def get_obligation(self, obligation_id: UUID) -> Obligation:
        """
        Get an obligation by ID.

        Raises:
            ObligationNotFoundException: If the obligation doesn't exist
        """
        obligation = await self._obligation_repo.get_by_id(obligation_id)
        if obligation is None:
            raise ObligationNotFoundException(str(obligation_id))
        return obligation

    async def list_obligations(self, customer_id: str) -> List[Obligation]:
        """All obligations for a customer, newest first."""
        obligations = await self._obligation_repo.get_by_customer_id(customer_id)

        logger.info(
            "customer_obligations_retrieved",
            customer_id=customer_id,
            count=len(obligations),
        )

        return obligations

    async def get_payments(self, obligation_id: UUID) -> List[Payment]:
        """
        Payment audit trail for an obligation.

        Raises:
            ObligationNotFoundException: If the obligation doesn't exist
        """
        await self.get_obligation(obligation_id)
        return await self._obligation_repo.get_payments(obligation_id)
