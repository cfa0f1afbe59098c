"""Shared domain error messages and error types."""

from typing import Iterable


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class OperationCancelledError(DomainError):
    """A cancellation signal was observed mid-operation."""


def member_not_found(member_id: int) -> str:
    """Return message for missing member."""
    return f"Member with ID {member_id} not found"


def credit_transaction_not_found(transaction_id: int) -> str:
    """Return message for missing bank credit transaction."""
    return f"Bank credit transaction {transaction_id} not found"


def duplicate_bank_reference(reference: str, member_id: int) -> str:
    """Return message when a bank reference is already in use."""
    return f"Bank reference '{reference}' is already used by member {member_id}"


def too_few_lines() -> str:
    return "CSV file must contain at least a header row and one data row"


def missing_columns(columns: Iterable[str]) -> str:
    """Return message listing the logical columns a statement lacks."""
    return f"Missing required columns: {', '.join(columns)}"


def row_parse_error(row_num: int, error: Exception) -> str:
    return f"Error parsing row {row_num}: {error}"


def unreadable_file(error: Exception) -> str:
    return f"Error reading CSV file: {error}"
