"""CDP analytics API-related domain exceptions."""

from .base import DomainException


class CDPAPIException(DomainException):
    """Raised when the CDP analytics API returns an error."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(
            message=message,
            code="CDP_API_ERROR",
        )
        self.status_code = status_code


class CDPAPITimeoutException(CDPAPIException):
    """Raised when the CDP analytics API times out."""

    def __init__(self):
        super().__init__(
            message="CDP analytics API request timed out",
            status_code=None,
        )
        self.code = "CDP_API_TIMEOUT"


class CustomerNotFoundException(DomainException):
    """Raised when a customer is unknown to the CDP analytics system."""

    def __init__(self, customer_id: str):
        super().__init__(
            message=f"Customer not found: {customer_id}",
            code="CUSTOMER_NOT_FOUND",
        )
        self.customer_id = customer_id
