"""In-memory repository implementations.

Used by the unit tests and for running the service without a database.
Entities are deep-copied on the way in and out so callers never share
state with the store, which mirrors how the SQL repositories behave.
"""

import asyncio
from collections import defaultdict
from copy import deepcopy
from typing import Dict, List, Optional
from uuid import UUID

from aura_lending.domain.entities import (
    CreditScoreRecord,
    Obligation,
    Payment,
    RepayableObligation,
)
from aura_lending.domain.exceptions import (
    ConcurrentModificationException,
    ObligationNotFoundException,
)
from aura_lending.domain.interfaces import CreditScoreRepository, ObligationRepository


class InMemoryCreditScoreRepository(CreditScoreRepository):
    """Credit score records kept in a per-customer list."""

    def __init__(self):
        self._records: Dict[str, List[CreditScoreRecord]] = defaultdict(list)

    async def save(self, record: CreditScoreRecord) -> CreditScoreRecord:
        self._records[record.customer_id].append(record)
        return record

    async def get_latest(self, customer_id: str) -> Optional[CreditScoreRecord]:
        records = self._records.get(customer_id)
        if not records:
            return None
        return max(records, key=lambda r: r.calculated_at)

    async def get_history(
        self,
        customer_id: str,
        limit: Optional[int] = None,
    ) -> List[CreditScoreRecord]:
        records = sorted(
            self._records.get(customer_id, []),
            key=lambda r: r.calculated_at,
            reverse=True,
        )
        return records[:limit]


class InMemoryObligationRepository(ObligationRepository):
    """
    Obligations kept in a dict, with the same version check as the SQL store.

    Reads yield to the event loop once, so concurrent payment tasks
    interleave between read and write the way they would against a database.
    """

    def __init__(self):
        self._obligations: Dict[UUID, Obligation] = {}
        self._payments: Dict[UUID, List[Payment]] = defaultdict(list)
        self._lock = asyncio.Lock()

    async def save(self, obligation: Obligation) -> Obligation:
        async with self._lock:
            self._obligations[obligation.id] = deepcopy(obligation)
        return obligation

    async def get_by_id(self, obligation_id: UUID) -> Optional[Obligation]:
        obligation = self._obligations.get(obligation_id)
        snapshot = deepcopy(obligation) if obligation else None
        await asyncio.sleep(0)
        return snapshot

    async def get_by_customer_id(self, customer_id: str) -> List[Obligation]:
        matches = [
            deepcopy(o)
            for o in self._obligations.values()
            if o.customer_id == customer_id
        ]
        return sorted(matches, key=lambda o: o.originated_at, reverse=True)

    async def apply_payment(
        self,
        obligation: Obligation,
        payment: Payment,
        expected_version: int,
    ) -> Obligation:
        async with self._lock:
            stored = self._obligations.get(obligation.id)
            if stored is None:
                raise ObligationNotFoundException(str(obligation.id))
            if stored.version != expected_version:
                raise ConcurrentModificationException(
                    str(obligation.id), expected_version
                )

            obligation.version = expected_version + 1
            self._obligations[obligation.id] = deepcopy(obligation)
            self._payments[obligation.id].append(payment)

        return obligation

    async def get_payments(self, obligation_id: UUID) -> List[Payment]:
        stored = self._obligations.get(obligation_id)
        if isinstance(stored, RepayableObligation):
            return list(stored.payments)
        return list(self._payments.get(obligation_id, []))
