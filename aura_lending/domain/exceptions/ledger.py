"""Payment ledger exceptions."""

from .base import DomainException


class ObligationNotFoundException(DomainException):
    """Raised when an obligation cannot be found."""

    def __init__(self, obligation_id: str):
        super().__init__(
            message=f"Obligation not found: {obligation_id}",
            code="OBLIGATION_NOT_FOUND",
        )
        self.obligation_id = obligation_id


class AlreadyCompletedException(DomainException):
    """Raised when a payment targets an obligation that is no longer active."""

    def __init__(self, obligation_id: str, status: str):
        super().__init__(
            message=f"Obligation {obligation_id} is already {status}",
            code="ALREADY_COMPLETED",
            details={"status": status},
        )
        self.obligation_id = obligation_id
        self.status = status


class InvalidAmountException(DomainException):
    """Raised when a monetary amount is zero or negative."""

    def __init__(self, amount_cents: int, field: str = "amount_cents"):
        super().__init__(
            message=f"{field} must be positive, got {amount_cents}",
            code="INVALID_AMOUNT",
            details={"field": field, "amount": amount_cents},
        )
        self.amount_cents = amount_cents


class ConcurrentModificationException(DomainException):
    """Raised when an obligation changed between read and write."""

    def __init__(self, obligation_id: str, expected_version: int):
        super().__init__(
            message=(
                f"Obligation {obligation_id} was modified concurrently "
                f"(expected version {expected_version})"
            ),
            code="CONCURRENT_MODIFICATION",
        )
        self.obligation_id = obligation_id
        self.expected_version = expected_version
