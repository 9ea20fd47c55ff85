"""Domain Entities - Core business objects."""

from .behavioral import BehavioralInput, PaymentBehavior, RevenuePeriod
from .credit_score import CreditRating, CreditScoreRecord, FactorGrade, ScoreFactor
from .obligation import (
    NetTermsObligation,
    Obligation,
    ObligationBase,
    ObligationStatus,
    ObligationType,
    Payment,
    RepayableObligation,
    RevenueBasedFinancing,
    WorkingCapitalLoan,
)

__all__ = [
    "BehavioralInput",
    "PaymentBehavior",
    "RevenuePeriod",
    "CreditRating",
    "CreditScoreRecord",
    "FactorGrade",
    "ScoreFactor",
    "NetTermsObligation",
    "Obligation",
    "ObligationBase",
    "ObligationStatus",
    "ObligationType",
    "Payment",
    "RepayableObligation",
    "RevenueBasedFinancing",
    "WorkingCapitalLoan",
]
