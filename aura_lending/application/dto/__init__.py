"""Data Transfer Objects for application layer."""

from .origination import (
    NetTermsRequest,
    RevenueBasedFinancingRequest,
    WorkingCapitalRequest,
)
from .portfolio import PaymentResult, PortfolioDashboard

__all__ = [
    "NetTermsRequest",
    "RevenueBasedFinancingRequest",
    "WorkingCapitalRequest",
    "PaymentResult",
    "PortfolioDashboard",
]
