"""PostgreSQL implementation of CreditScoreRepository."""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from aura_lending.domain.entities import (
    CreditRating,
    CreditScoreRecord,
    FactorGrade,
    ScoreFactor,
)
from aura_lending.domain.interfaces import CreditScoreRepository
from aura_lending.infrastructure.database.models import CreditScoreModel
from aura_lending.utils.date_utils import as_utc


class PostgresCreditScoreRepository(CreditScoreRepository):
    """
    PostgreSQL implementation of the credit score repository.

    Uses SQLAlchemy async session for database operations.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def save(self, record: CreditScoreRecord) -> CreditScoreRecord:
        """Insert a credit score record."""
        model = CreditScoreModel(
            id=str(record.id),
            customer_id=record.customer_id,
            score=record.score,
            rating=record.rating.value,
            risk_tier=record.risk_tier,
            factors={name: f.to_dict() for name, f in record.factors.items()},
            max_credit_limit_cents=record.max_credit_limit_cents,
            interest_rate_ceiling=record.interest_rate_ceiling,
            approval_likelihood=record.approval_likelihood,
            calculated_at=record.calculated_at,
        )

        self._session.add(model)
        await self._session.flush()

        return record

    async def get_latest(self, customer_id: str) -> Optional[CreditScoreRecord]:
        """Retrieve the most recently calculated record for a customer."""
        stmt = (
            select(CreditScoreModel)
            .where(CreditScoreModel.customer_id == customer_id)
            .order_by(CreditScoreModel.calculated_at.desc())
            .limit(1)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return self._to_entity(model)

    async def get_history(
        self,
        customer_id: str,
        limit: Optional[int] = None,
    ) -> List[CreditScoreRecord]:
        """Retrieve records for a customer, newest first."""
        stmt = (
            select(CreditScoreModel)
            .where(CreditScoreModel.customer_id == customer_id)
            .order_by(CreditScoreModel.calculated_at.desc())
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        models = result.scalars().all()

        return [self._to_entity(model) for model in models]

    def _to_entity(self, model: CreditScoreModel) -> CreditScoreRecord:
        """Convert database model to domain entity."""
        factors = {
            name: ScoreFactor(
                score=data["score"],
                weight=data["weight"],
                grade=FactorGrade(data["grade"]),
                description=data["description"],
            )
            for name, data in model.factors.items()
        }

        return CreditScoreRecord(
            id=UUID(model.id),
            customer_id=model.customer_id,
            score=model.score,
            rating=CreditRating(model.rating),
            risk_tier=model.risk_tier,
            factors=factors,
            max_credit_limit_cents=model.max_credit_limit_cents,
            interest_rate_ceiling=model.interest_rate_ceiling,
            approval_likelihood=model.approval_likelihood,
            calculated_at=as_utc(model.calculated_at),
        )
