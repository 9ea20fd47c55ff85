"""Credit eligibility exceptions raised at origination time."""

from .base import DomainException


class MissingCreditScoreException(DomainException):
    """Raised when a customer has no credit score on record."""

    def __init__(self, customer_id: str):
        super().__init__(
            message=f"No credit score on record for customer: {customer_id}",
            code="MISSING_CREDIT_SCORE",
        )
        self.customer_id = customer_id


class InsufficientCreditScoreException(DomainException):
    """Raised when a customer's score is below a product's minimum."""

    def __init__(self, product: str, required: int, actual: int):
        super().__init__(
            message=(
                f"Credit score too low for {product}. "
                f"Minimum {required} required, got {actual}"
            ),
            code="INSUFFICIENT_CREDIT_SCORE",
            details={"product": product, "required": required, "actual": actual},
        )
        self.product = product
        self.required = required
        self.actual = actual


class ExceedsRiskTierLimitException(DomainException):
    """Raised when a requested amount exceeds the risk tier's credit ceiling."""

    def __init__(self, requested_cents: int, max_cents: int, risk_tier: str):
        super().__init__(
            message=(
                f"Requested amount {requested_cents} exceeds the {risk_tier} "
                f"tier maximum of {max_cents} cents"
            ),
            code="EXCEEDS_RISK_TIER_LIMIT",
            details={
                "requested": requested_cents,
                "max": max_cents,
                "risk_tier": risk_tier,
            },
        )
        self.requested_cents = requested_cents
        self.max_cents = max_cents
        self.risk_tier = risk_tier


class InvalidOriginationRequestException(DomainException):
    """Raised when origination parameters are malformed."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="INVALID_ORIGINATION_REQUEST",
        )
