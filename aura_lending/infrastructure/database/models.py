"""SQLAlchemy ORM models for credit scores, obligations and payments."""

from datetime import datetime
from uuid import uuid4

from sqlalchemy import (
    BigInteger,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    JSON,
    String,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    pass


class CreditScoreModel(Base):
    """Persisted Aura Score record. Rows are insert-only."""

    __tablename__ = "credit_scores"

    id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    customer_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    score: Mapped[int] = mapped_column(Integer, nullable=False)
    rating: Mapped[str] = mapped_column(String(50), nullable=False)
    risk_tier: Mapped[str] = mapped_column(String(50), nullable=False)
    factors: Mapped[dict] = mapped_column(JSON, nullable=False)
    max_credit_limit_cents: Mapped[int] = mapped_column(BigInteger, nullable=False)
    interest_rate_ceiling: Mapped[float] = mapped_column(Float, nullable=False)
    approval_likelihood: Mapped[str] = mapped_column(String(50), nullable=False)
    calculated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
    )


class ObligationModel(Base):
    """
    Persisted obligation of any product type.

    Common fields are columns; product-specific terms live in the terms
    JSON document. amount_repaid_cents and outstanding_cents are
    denormalized from the payment rows for reporting queries.
    """

    __tablename__ = "obligations"

    id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    customer_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    type: Mapped[str] = mapped_column(String(50), nullable=False)
    status: Mapped[str] = mapped_column(String(50), nullable=False, default="active")
    credit_score_at_origination: Mapped[int] = mapped_column(Integer, nullable=False)
    borrowed_cents: Mapped[int] = mapped_column(BigInteger, nullable=False)
    amount_repaid_cents: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    outstanding_cents: Mapped[int] = mapped_column(BigInteger, nullable=False)
    terms: Mapped[dict] = mapped_column(JSON, nullable=False)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    originated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )
    completed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    payments: Mapped[list["PaymentModel"]] = relationship(
        "PaymentModel",
        back_populates="obligation",
        cascade="all, delete-orphan",
        order_by="PaymentModel.sequence",
    )


class PaymentModel(Base):
    """Persisted payment. Rows are append-only."""

    __tablename__ = "obligation_payments"
    __table_args__ = (
        UniqueConstraint("obligation_id", "sequence", name="uq_payment_sequence"),
    )

    id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    obligation_id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        ForeignKey("obligations.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    sequence: Mapped[int] = mapped_column(Integer, nullable=False)
    amount_cents: Mapped[int] = mapped_column(BigInteger, nullable=False)
    revenue_for_period_cents: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    paid_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )

    obligation: Mapped["ObligationModel"] = relationship(
        "ObligationModel",
        back_populates="payments",
    )
