"""Repository implementations."""

from .credit_score_repository import PostgresCreditScoreRepository
from .memory import InMemoryCreditScoreRepository, InMemoryObligationRepository
from .obligation_repository import PostgresObligationRepository

__all__ = [
    "PostgresCreditScoreRepository",
    "PostgresObligationRepository",
    "InMemoryCreditScoreRepository",
    "InMemoryObligationRepository",
]
