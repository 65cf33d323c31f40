"""SQLAlchemy ORM models for customers, credit limits and transactions."""

from datetime import date, datetime, timezone

from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class CustomerModel(Base):
    """Persisted customer identity record."""

    __tablename__ = "customers"

    nik: Mapped[str] = mapped_column(String(32), primary_key=True)
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    legal_name: Mapped[str] = mapped_column(String(255), nullable=False)
    birth_place: Mapped[str] = mapped_column(String(255), nullable=False)
    birth_date: Mapped[date] = mapped_column(Date, nullable=False)
    salary: Mapped[int] = mapped_column(BigInteger, nullable=False)
    photo_ktp: Mapped[str] = mapped_column(Text, nullable=False, default="")
    photo_selfie: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )

    limits: Mapped[list["CreditLimitModel"]] = relationship(
        "CreditLimitModel",
        back_populates="customer",
        order_by="CreditLimitModel.tenor",
    )


class CreditLimitModel(Base):
    """
    Remaining credit limit of a customer for one tenor.

    ``version`` is SQLAlchemy's version counter: every UPDATE is issued
    with ``WHERE version = <loaded version>`` and fails with
    StaleDataError if another transaction changed the row first.
    """

    __tablename__ = "customer_limits"
    __table_args__ = (
        CheckConstraint("remaining_amount >= 0", name="remaining_amount_non_negative"),
        CheckConstraint("tenor > 0", name="tenor_positive"),
    )

    customer_nik: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("customers.nik", ondelete="CASCADE"),
        primary_key=True,
    )
    tenor: Mapped[int] = mapped_column(Integer, primary_key=True)
    remaining_amount: Mapped[int] = mapped_column(BigInteger, nullable=False)
    version: Mapped[int] = mapped_column(Integer, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
    )

    customer: Mapped["CustomerModel"] = relationship(
        "CustomerModel",
        back_populates="limits",
    )

    __mapper_args__ = {"version_id_col": version}


class TransactionModel(Base):
    """Persisted financed purchase. Rows are never updated."""

    __tablename__ = "transactions"

    contract_number: Mapped[str] = mapped_column(String(64), primary_key=True)
    customer_nik: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("customers.nik"),
        nullable=False,
        index=True,
    )
    tenor: Mapped[int] = mapped_column(Integer, nullable=False)
    otr: Mapped[int] = mapped_column(BigInteger, nullable=False)
    admin_fee: Mapped[int] = mapped_column(BigInteger, nullable=False)
    installment: Mapped[int] = mapped_column(BigInteger, nullable=False)
    interest: Mapped[int] = mapped_column(BigInteger, nullable=False)
    asset_name: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )
