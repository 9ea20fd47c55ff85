"""
Domain Interfaces (Ports)
"""

from .repositories import CreditScoreRepository, ObligationRepository
from .clients import CDPAnalyticsClient, NotificationClient

__all__ = [
    "CreditScoreRepository",
    "ObligationRepository",
    "CDPAnalyticsClient",
    "NotificationClient",
]
