"""Credit score entity produced by the behavioral score calculator."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict
from uuid import UUID, uuid4


class CreditRating(str, Enum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    FAIR = "Fair"
    POOR = "Poor"
    BAD = "Bad"


class FactorGrade(str, Enum):
    EXCELLENT = "Excellent"
    VERY_GOOD = "VeryGood"
    GOOD = "Good"
    FAIR = "Fair"
    POOR = "Poor"
    VERY_POOR = "VeryPoor"


@dataclass(frozen=True)
class ScoreFactor:
    """
    One weighted sub-score of the credit score.

    Attributes:
        score: Sub-score from 0-100
        weight: Share of the composite score (0-1)
        grade: Letter grade derived from the sub-score
        description: Short human-readable justification
    """

    score: int
    weight: float
    grade: FactorGrade
    description: str

    def to_dict(self) -> dict:
        return {
            "score": self.score,
            "weight": self.weight,
            "grade": self.grade.value,
            "description": self.description,
        }


@dataclass(frozen=True)
class CreditScoreRecord:
    """
    An immutable Aura Score calculation for a customer.

    A new calculation produces a new record; the latest record by
    calculated_at is authoritative. Records are never updated or deleted.
    """

    customer_id: str
    score: int
    rating: CreditRating
    risk_tier: str
    factors: Dict[str, ScoreFactor]
    max_credit_limit_cents: int
    interest_rate_ceiling: float
    approval_likelihood: str
    calculated_at: datetime
    id: UUID = field(default_factory=uuid4)
