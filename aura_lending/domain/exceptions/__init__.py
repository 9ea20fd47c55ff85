"""Domain Exceptions - Business rule violations and domain errors."""

from .base import DomainException
from .credit import (
    ExceedsRiskTierLimitException,
    InsufficientCreditScoreException,
    InvalidOriginationRequestException,
    MissingCreditScoreException,
)
from .ledger import (
    AlreadyCompletedException,
    ConcurrentModificationException,
    InvalidAmountException,
    ObligationNotFoundException,
)
from .cdp import (
    CDPAPIException,
    CDPAPITimeoutException,
    CustomerNotFoundException,
)

__all__ = [
    "DomainException",
    "ExceedsRiskTierLimitException",
    "InsufficientCreditScoreException",
    "InvalidOriginationRequestException",
    "MissingCreditScoreException",
    "AlreadyCompletedException",
    "ConcurrentModificationException",
    "InvalidAmountException",
    "ObligationNotFoundException",
    "CDPAPIException",
    "CDPAPITimeoutException",
    "CustomerNotFoundException",
]
