"""SQLAlchemy models for the churchregister database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Boolean,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class Member(Base):
    """Church member model."""

    __tablename__ = "members"

    id = Column(Integer, primary_key=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    bank_reference = Column(String(100), unique=True, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_by = Column(String, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    contributions = relationship("Contribution", back_populates="member")


class ContributionType(Base):
    """Contribution type lookup (Cash, Transfer)."""

    __tablename__ = "contribution_types"

    id = Column(Integer, primary_key=True)
    name = Column(String(50), unique=True, nullable=False)

    # Relationships
    contributions = relationship("Contribution", back_populates="contribution_type")


class BankCreditTransaction(Base):
    """Inbound credit line imported from a bank statement."""

    __tablename__ = "bank_credit_transactions"

    id = Column(Integer, primary_key=True)
    date = Column(Date, nullable=False)
    description = Column(String(500), nullable=False, default="")
    reference = Column(String(100), nullable=False, default="", index=True)
    money_in = Column(Numeric(18, 2), nullable=False)
    is_processed = Column(Boolean, default=False, nullable=False, index=True)
    deleted = Column(Boolean, default=False, nullable=False)
    created_by = Column(String, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    contribution = relationship("Contribution", back_populates="source_transaction", uselist=False)


class Contribution(Base):
    """Contribution ledger entry."""

    __tablename__ = "contributions"

    id = Column(Integer, primary_key=True)
    member_id = Column(Integer, ForeignKey("members.id"), nullable=False, index=True)
    amount = Column(Numeric(18, 2), nullable=False)
    date = Column(Date, nullable=False, index=True)
    transaction_ref = Column(String(100), nullable=False, default="")
    description = Column(String(500), nullable=True)
    contribution_type_id = Column(Integer, ForeignKey("contribution_types.id"), nullable=False)
    source_transaction_id = Column(
        Integer, ForeignKey("bank_credit_transactions.id"), nullable=True
    )
    manual_contribution = Column(Boolean, default=False, nullable=False)
    created_by = Column(String, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # At most one contribution per bank credit transaction
    __table_args__ = (
        UniqueConstraint("source_transaction_id", name="uq_contribution_source_transaction"),
    )

    # Relationships
    member = relationship("Member", back_populates="contributions")
    contribution_type = relationship("ContributionType", back_populates="contributions")
    source_transaction = relationship("BankCreditTransaction", back_populates="contribution")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
