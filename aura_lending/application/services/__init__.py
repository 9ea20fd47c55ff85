"""Application services (use cases)."""

from .ledger_service import LedgerService
from .origination_service import OriginationService
from .portfolio_service import PortfolioService
from .scoring_service import ScoringService

__all__ = [
    "LedgerService",
    "OriginationService",
    "PortfolioService",
    "ScoringService",
]
