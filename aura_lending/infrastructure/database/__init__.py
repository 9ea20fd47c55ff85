"""Database infrastructure."""

from .connection import get_db_session, DatabaseSessionManager, db_manager
from .models import Base, CreditScoreModel, ObligationModel, PaymentModel

__all__ = [
    "get_db_session",
    "DatabaseSessionManager",
    "db_manager",
    "Base",
    "CreditScoreModel",
    "ObligationModel",
    "PaymentModel",
]
