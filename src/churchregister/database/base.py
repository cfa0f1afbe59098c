"""Abstract database interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import Optional
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from churchregister.domain.entities import (
    Member,
    BankCreditTransaction,
    NewBankCreditTransaction,
    Contribution,
    NewContribution,
)


class Database(ABC):
    """Abstract database interface for churchregister."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema and seed lookup data."""
        pass

    @abstractmethod
    def transaction(self) -> AbstractContextManager[None]:
        """Open an explicit database transaction.

        Writes made inside the block are committed together when it exits
        normally and rolled back if it raises. Nested blocks join the
        outermost transaction.
        """
        pass

    # Member operations
    @abstractmethod
    def create_member(
        self,
        first_name: str,
        last_name: str,
        created_by: str,
        bank_reference: Optional[str] = None,
        is_active: bool = True,
    ) -> int:
        """Create a member. Returns member ID."""
        pass

    @abstractmethod
    def get_member(self, member_id: int) -> Optional[Member]:
        """Get member by ID."""
        pass

    @abstractmethod
    def list_members(self) -> list[Member]:
        """List all members."""
        pass

    @abstractmethod
    def find_member_by_bank_reference(self, bank_reference: str) -> Optional[Member]:
        """Find a member whose bank reference matches, ignoring case and padding."""
        pass

    @abstractmethod
    def update_member_bank_reference(self, member_id: int, bank_reference: Optional[str]) -> None:
        """Set or clear a member's bank reference."""
        pass

    @abstractmethod
    def update_member_active(self, member_id: int, is_active: bool) -> None:
        """Mark a member active or inactive."""
        pass

    @abstractmethod
    def list_member_bank_references(self) -> list[tuple[int, str]]:
        """List (member_id, bank_reference) for active members with a reference.

        Ordered by member ID.
        """
        pass

    # Bank credit transaction operations
    @abstractmethod
    def list_credit_transaction_keys(self) -> list[tuple[date, Decimal, str]]:
        """List (date, money_in, description) for all non-deleted credit transactions."""
        pass

    @abstractmethod
    def add_credit_transactions(self, transactions: list[NewBankCreditTransaction]) -> list[int]:
        """Insert credit transactions as one batch. Returns their IDs."""
        pass

    @abstractmethod
    def get_credit_transaction(self, transaction_id: int) -> Optional[BankCreditTransaction]:
        """Get credit transaction by ID, including deleted ones."""
        pass

    @abstractmethod
    def list_credit_transactions(self, unprocessed_only: bool = False) -> list[BankCreditTransaction]:
        """List non-deleted credit transactions ordered by date and ID.

        Args:
            unprocessed_only: If True, only return transactions not yet matched
        """
        pass

    @abstractmethod
    def soft_delete_credit_transaction(self, transaction_id: int) -> None:
        """Flag a credit transaction as deleted."""
        pass

    # Contribution operations
    @abstractmethod
    def list_contributed_transaction_ids(self) -> set[int]:
        """Get IDs of credit transactions that already have a contribution."""
        pass

    @abstractmethod
    def add_contributions(self, contributions: list[NewContribution]) -> list[int]:
        """Insert contributions as one batch. Returns their IDs.

        Every source credit transaction referenced by the contributions is
        marked processed in the same write.
        """
        pass

    @abstractmethod
    def list_contributions(
        self,
        member_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Contribution]:
        """List contributions newest first with optional filters."""
        pass
