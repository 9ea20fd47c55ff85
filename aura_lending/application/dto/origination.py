"""Data transfer objects for product origination."""

from dataclasses import dataclass
from typing import List, Optional


def _customer_errors(customer_id: str) -> List[str]:
    if not customer_id or not customer_id.strip():
        return ["customer_id is required"]
    return []


@dataclass(frozen=True)
class NetTermsRequest:
    """Input data for originating a Net Terms contract."""
    customer_id: str
    invoice_amount_cents: int
    supplier_id: str

    def validate(self) -> List[str]:
        errors = _customer_errors(self.customer_id)

        if not self.supplier_id or not self.supplier_id.strip():
            errors.append("supplier_id is required")

        return errors


@dataclass(frozen=True)
class WorkingCapitalRequest:
    """Input data for originating a working capital loan."""
    customer_id: str
    amount_cents: int
    term_months: Optional[int] = None

    def validate(self) -> List[str]:
        return _customer_errors(self.customer_id)


@dataclass(frozen=True)
class RevenueBasedFinancingRequest:
    """Input data for originating a revenue-based financing deal."""
    customer_id: str
    advance_amount_cents: int
    repayment_multiple: Optional[float] = None

    def validate(self) -> List[str]:
        return _customer_errors(self.customer_id)
