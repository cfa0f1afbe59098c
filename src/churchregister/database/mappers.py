"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so the reconciliation services
only ever see frozen domain entities.
"""

from churchregister.domain import entities as domain
from churchregister.database.models import (
    Member as ORMMember,
    BankCreditTransaction as ORMBankCreditTransaction,
    Contribution as ORMContribution,
)


def member_to_domain(orm_member: ORMMember) -> domain.Member:
    """Convert SQLAlchemy Member model to domain Member entity."""
    return domain.Member(
        id=orm_member.id,
        first_name=orm_member.first_name,
        last_name=orm_member.last_name,
        bank_reference=orm_member.bank_reference,
        is_active=orm_member.is_active,
        created_by=orm_member.created_by,
        created_at=orm_member.created_at,
    )


def credit_transaction_to_domain(
    orm_transaction: ORMBankCreditTransaction,
) -> domain.BankCreditTransaction:
    """Convert SQLAlchemy BankCreditTransaction model to its domain entity."""
    return domain.BankCreditTransaction(
        id=orm_transaction.id,
        date=orm_transaction.date,
        description=orm_transaction.description or "",
        reference=orm_transaction.reference or "",
        money_in=orm_transaction.money_in,
        is_processed=orm_transaction.is_processed,
        deleted=orm_transaction.deleted,
        created_by=orm_transaction.created_by,
        created_at=orm_transaction.created_at,
    )


def credit_transaction_to_orm(
    transaction: domain.NewBankCreditTransaction,
) -> ORMBankCreditTransaction:
    """Build a SQLAlchemy BankCreditTransaction row from a new domain row."""
    return ORMBankCreditTransaction(
        date=transaction.date,
        description=transaction.description,
        reference=transaction.reference,
        money_in=transaction.money_in,
        is_processed=False,
        deleted=False,
        created_by=transaction.created_by,
        created_at=transaction.created_at,
    )


def contribution_to_domain(orm_contribution: ORMContribution) -> domain.Contribution:
    """Convert SQLAlchemy Contribution model to domain Contribution entity."""
    contribution_type = orm_contribution.contribution_type
    return domain.Contribution(
        id=orm_contribution.id,
        member_id=orm_contribution.member_id,
        amount=orm_contribution.amount,
        date=orm_contribution.date,
        transaction_ref=orm_contribution.transaction_ref,
        description=orm_contribution.description,
        contribution_type_id=orm_contribution.contribution_type_id,
        source_transaction_id=orm_contribution.source_transaction_id,
        manual_contribution=orm_contribution.manual_contribution,
        created_by=orm_contribution.created_by,
        created_at=orm_contribution.created_at,
        contribution_type=contribution_type.name if contribution_type is not None else "Unknown",
    )


def contribution_to_orm(contribution: domain.NewContribution) -> ORMContribution:
    """Build a SQLAlchemy Contribution row from a new domain contribution."""
    return ORMContribution(
        member_id=contribution.member_id,
        amount=contribution.amount,
        date=contribution.date,
        transaction_ref=contribution.transaction_ref,
        description=contribution.description,
        contribution_type_id=contribution.contribution_type_id,
        source_transaction_id=contribution.source_transaction_id,
        manual_contribution=contribution.manual_contribution,
        created_by=contribution.created_by,
        created_at=contribution.created_at,
    )
