"""SQLAlchemy models for the ledgerbook database."""

from datetime import datetime, UTC
from decimal import ROUND_HALF_UP, Decimal
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Index,
    create_engine,
)
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session
from sqlalchemy.types import TypeDecorator

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(UTC)


class ExactDecimal(TypeDecorator):
    """Decimal column that never round-trips through binary floating point.

    SQLite has no native decimal storage, so values are kept there as their
    exact text form. Other backends use NUMERIC, and values are quantized
    half-up to the column scale before binding instead of leaving the
    rounding to the driver.
    """

    impl = Numeric
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == "sqlite":
            return dialect.type_descriptor(String(64))
        return super().load_dialect_impl(dialect)

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        value = value if isinstance(value, Decimal) else Decimal(str(value))
        if dialect.name == "sqlite":
            return str(value)
        if self.impl.scale is None:
            return value
        return value.quantize(Decimal(1).scaleb(-self.impl.scale), rounding=ROUND_HALF_UP)

    def process_result_value(self, value, dialect):
        if value is None or isinstance(value, Decimal):
            return value
        return Decimal(str(value))


class Account(Base):
    """Account model holding the authoritative running balance."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    account_type = Column(String(32), nullable=False)
    description = Column(String, nullable=True)
    opening_balance = Column(ExactDecimal(18, 2), nullable=False)
    current_balance = Column(ExactDecimal(18, 2), nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow, nullable=False)

    # Relationships
    entries = relationship("Entry", back_populates="account", foreign_keys="Entry.account_id")


class Category(Base):
    """Category model; a child category points at a top-level parent."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    category_type = Column(String(16), nullable=False)
    parent_id = Column(Integer, ForeignKey("categories.id"), nullable=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    # Relationships
    parent = relationship("Category", remote_side=[id], backref="children")
    entries = relationship("Entry", back_populates="category")


class Entry(Base):
    """Entry model; a transfer is two rows sharing ``transfer_group_id``."""

    __tablename__ = "entries"

    id = Column(Integer, primary_key=True)
    entry_type = Column(String(16), nullable=False)
    date = Column(Date, nullable=False)
    amount = Column(ExactDecimal(18, 2), nullable=False)
    description = Column(String, nullable=False, default="")
    notes = Column(String, nullable=True)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True)
    linked_loan_id = Column(Integer, ForeignKey("loans.id"), nullable=True)
    transfer_group_id = Column(String(36), nullable=True)
    counter_account_id = Column(Integer, ForeignKey("accounts.id"), nullable=True)
    transfer_leg = Column(String(8), nullable=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow, nullable=False)

    __table_args__ = (
        Index("ix_entries_transfer_group_id", "transfer_group_id"),
        Index("ix_entries_account_date", "account_id", "date"),
    )

    # Relationships
    account = relationship("Account", back_populates="entries", foreign_keys=[account_id])
    counter_account = relationship("Account", foreign_keys=[counter_account_id])
    category = relationship("Category", back_populates="entries")
    linked_loan = relationship("Loan", back_populates="linked_entries")


class Loan(Base):
    """Peer loan model. Repaid totals are derived from ``repayments``."""

    __tablename__ = "loans"

    id = Column(Integer, primary_key=True)
    counterparty = Column(String, nullable=False)
    direction = Column(String(8), nullable=False)
    principal = Column(ExactDecimal(18, 2), nullable=False)
    interest_rate = Column(ExactDecimal(9, 4), nullable=False)
    interest_method = Column(String(16), nullable=False)
    start_date = Column(Date, nullable=False)
    notes = Column(String, nullable=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow, nullable=False)

    # Relationships
    repayments = relationship(
        "LoanRepayment",
        back_populates="loan",
        cascade="all, delete-orphan",
        order_by=lambda: [LoanRepayment.date, LoanRepayment.id],
    )
    linked_entries = relationship("Entry", back_populates="linked_loan")


class LoanRepayment(Base):
    """Append-only repayment log row."""

    __tablename__ = "loan_repayments"

    id = Column(Integer, primary_key=True)
    loan_id = Column(Integer, ForeignKey("loans.id"), nullable=False)
    amount = Column(ExactDecimal(18, 2), nullable=False)
    repayment_type = Column(String(16), nullable=False)
    date = Column(Date, nullable=False)
    notes = Column(String, nullable=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    # Relationships
    loan = relationship("Loan", back_populates="repayments")


def create_database_engine(database_url: str) -> Engine:
    """Create a SQLAlchemy engine for ``database_url``."""
    return create_engine(database_url, echo=False)


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory bound to ``engine``."""
    return sessionmaker(bind=engine)
