"""PostgreSQL implementation of ObligationRepository."""

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from aura_lending.domain.entities import (
    NetTermsObligation,
    Obligation,
    ObligationStatus,
    ObligationType,
    Payment,
    RevenueBasedFinancing,
    WorkingCapitalLoan,
)
from aura_lending.domain.exceptions import (
    ConcurrentModificationException,
    ObligationNotFoundException,
)
from aura_lending.domain.interfaces import ObligationRepository
from aura_lending.infrastructure.database.models import ObligationModel, PaymentModel
from aura_lending.utils.date_utils import as_utc


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def _parse(value: Optional[str]) -> Optional[datetime]:
    return as_utc(datetime.fromisoformat(value)) if value else None


class PostgresObligationRepository(ObligationRepository):
    """
    PostgreSQL implementation of the obligation repository.

    Payments are applied with a compare-and-swap on the version column:
    the UPDATE only matches when the stored version is the one the caller
    read, so two concurrent writers can never both succeed from the same
    starting state.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def save(self, obligation: Obligation) -> Obligation:
        """Insert a newly originated obligation."""
        model = ObligationModel(
            id=str(obligation.id),
            customer_id=obligation.customer_id,
            type=obligation.type.value,
            status=obligation.status.value,
            credit_score_at_origination=obligation.credit_score_at_origination,
            borrowed_cents=obligation.borrowed_cents,
            amount_repaid_cents=obligation.amount_repaid_cents,
            outstanding_cents=obligation.outstanding_cents,
            terms=self._terms_for(obligation),
            version=obligation.version,
            originated_at=obligation.originated_at,
            completed_at=obligation.completed_at,
        )

        self._session.add(model)
        await self._session.flush()

        return obligation

    async def get_by_id(self, obligation_id: UUID) -> Optional[Obligation]:
        """Retrieve an obligation with its payments."""
        stmt = (
            select(ObligationModel)
            .options(selectinload(ObligationModel.payments))
            .where(ObligationModel.id == str(obligation_id))
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return self._to_entity(model)

    async def get_by_customer_id(self, customer_id: str) -> List[Obligation]:
        """Retrieve all obligations for a customer, newest first."""
        stmt = (
            select(ObligationModel)
            .options(selectinload(ObligationModel.payments))
            .where(ObligationModel.customer_id == customer_id)
            .order_by(ObligationModel.originated_at.desc())
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        models = result.scalars().all()

        return [self._to_entity(model) for model in models]

    async def apply_payment(
        self,
        obligation: Obligation,
        payment: Payment,
        expected_version: int,
    ) -> Obligation:
        """Persist a payment and the resulting obligation state if unchanged since read."""
        new_version = expected_version + 1

        stmt = (
            update(ObligationModel)
            .where(
                ObligationModel.id == str(obligation.id),
                ObligationModel.version == expected_version,
            )
            .values(
                status=obligation.status.value,
                completed_at=obligation.completed_at,
                amount_repaid_cents=obligation.amount_repaid_cents,
                outstanding_cents=obligation.outstanding_cents,
                terms=self._terms_for(obligation),
                version=new_version,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)

        if result.rowcount == 0:
            exists = await self._session.scalar(
                select(ObligationModel.id).where(ObligationModel.id == str(obligation.id))
            )
            if exists is None:
                raise ObligationNotFoundException(str(obligation.id))
            raise ConcurrentModificationException(str(obligation.id), expected_version)

        self._session.add(
            PaymentModel(
                id=str(payment.id),
                obligation_id=str(obligation.id),
                sequence=expected_version,
                amount_cents=payment.amount_cents,
                revenue_for_period_cents=payment.revenue_for_period_cents,
                paid_at=payment.paid_at,
            )
        )
        await self._session.flush()

        obligation.version = new_version
        return obligation

    async def get_payments(self, obligation_id: UUID) -> List[Payment]:
        """Retrieve payments for an obligation in the order they were applied."""
        stmt = (
            select(PaymentModel)
            .where(PaymentModel.obligation_id == str(obligation_id))
            .order_by(PaymentModel.sequence.asc())
        )
        result = await self._session.execute(stmt)
        models = result.scalars().all()

        return [self._payment_to_entity(model) for model in models]

    def _terms_for(self, obligation: Obligation) -> Dict[str, Any]:
        """Serialize the product-specific fields of an obligation."""
        match obligation:
            case NetTermsObligation():
                return {
                    "supplier_id": obligation.supplier_id,
                    "invoice_amount_cents": obligation.invoice_amount_cents,
                    "fee_amount_cents": obligation.fee_amount_cents,
                    "fee_rate": obligation.fee_rate,
                    "supplier_payment_due_at": _iso(obligation.supplier_payment_due_at),
                    "customer_payment_due_at": _iso(obligation.customer_payment_due_at),
                    "supplier_paid_at": _iso(obligation.supplier_paid_at),
                    "customer_paid_at": _iso(obligation.customer_paid_at),
                    "amount_repaid_cents": obligation.amount_repaid_cents,
                }
            case WorkingCapitalLoan():
                return {
                    "principal_cents": obligation.principal_cents,
                    "interest_rate": obligation.interest_rate,
                    "total_interest_cents": obligation.total_interest_cents,
                    "origination_fee_cents": obligation.origination_fee_cents,
                    "total_repayment_cents": obligation.total_repayment_cents,
                    "monthly_payment_cents": obligation.monthly_payment_cents,
                    "term_months": obligation.term_months,
                    "first_payment_due_at": _iso(obligation.first_payment_due_at),
                    "final_payment_due_at": _iso(obligation.final_payment_due_at),
                }
            case RevenueBasedFinancing():
                return {
                    "advance_amount_cents": obligation.advance_amount_cents,
                    "repayment_multiple": obligation.repayment_multiple,
                    "total_repayment_cents": obligation.total_repayment_cents,
                    "revenue_share_rate": obligation.revenue_share_rate,
                    "expected_completion_months": obligation.expected_completion_months,
                    "expected_completion_at": _iso(obligation.expected_completion_at),
                }
            case _:
                raise TypeError(f"Unsupported obligation: {type(obligation).__name__}")

    def _payment_to_entity(self, model: PaymentModel) -> Payment:
        return Payment(
            id=UUID(model.id),
            obligation_id=UUID(model.obligation_id),
            amount_cents=model.amount_cents,
            revenue_for_period_cents=model.revenue_for_period_cents,
            paid_at=as_utc(model.paid_at),
        )

    def _to_entity(self, model: ObligationModel) -> Obligation:
        """Convert database model to domain entity."""
        common = {
            "id": UUID(model.id),
            "customer_id": model.customer_id,
            "credit_score_at_origination": model.credit_score_at_origination,
            "originated_at": as_utc(model.originated_at),
            "status": ObligationStatus(model.status),
            "completed_at": as_utc(model.completed_at),
            "version": model.version,
        }
        terms = model.terms
        payments = [self._payment_to_entity(p) for p in model.payments]

        match ObligationType(model.type):
            case ObligationType.NET_TERMS:
                return NetTermsObligation(
                    **common,
                    supplier_id=terms["supplier_id"],
                    invoice_amount_cents=terms["invoice_amount_cents"],
                    fee_amount_cents=terms["fee_amount_cents"],
                    fee_rate=terms["fee_rate"],
                    supplier_payment_due_at=_parse(terms["supplier_payment_due_at"]),
                    customer_payment_due_at=_parse(terms["customer_payment_due_at"]),
                    supplier_paid_at=_parse(terms.get("supplier_paid_at")),
                    customer_paid_at=_parse(terms.get("customer_paid_at")),
                    amount_repaid_cents=terms.get("amount_repaid_cents", 0),
                )
            case ObligationType.WORKING_CAPITAL:
                return WorkingCapitalLoan(
                    **common,
                    principal_cents=terms["principal_cents"],
                    interest_rate=terms["interest_rate"],
                    total_interest_cents=terms["total_interest_cents"],
                    origination_fee_cents=terms["origination_fee_cents"],
                    total_repayment_cents=terms["total_repayment_cents"],
                    monthly_payment_cents=terms["monthly_payment_cents"],
                    term_months=terms["term_months"],
                    first_payment_due_at=_parse(terms["first_payment_due_at"]),
                    final_payment_due_at=_parse(terms["final_payment_due_at"]),
                    payments=payments,
                )
            case ObligationType.REVENUE_BASED_FINANCING:
                return RevenueBasedFinancing(
                    **common,
                    advance_amount_cents=terms["advance_amount_cents"],
                    repayment_multiple=terms["repayment_multiple"],
                    total_repayment_cents=terms["total_repayment_cents"],
                    revenue_share_rate=terms["revenue_share_rate"],
                    expected_completion_months=terms["expected_completion_months"],
                    expected_completion_at=_parse(terms["expected_completion_at"]),
                    payments=payments,
                )
