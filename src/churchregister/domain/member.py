"""Member directory domain service."""

from typing import Optional
from churchregister.database.base import Database
from churchregister.domain.entities import Member as MemberEntity
from churchregister.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    duplicate_bank_reference,
    member_not_found,
)


class MemberService:
    """Service for managing members and their bank references."""

    def __init__(self, db: Database):
        """Initialize member service.

        Args:
            db: Database instance
        """
        self.db = db

    def _clean_reference(self, bank_reference: Optional[str], member_id: Optional[int] = None) -> Optional[str]:
        """Trim a bank reference and check no other member uses it."""
        if bank_reference is None or not bank_reference.strip():
            return None
        bank_reference = bank_reference.strip()

        existing = self.db.find_member_by_bank_reference(bank_reference)
        if existing is not None and existing.id != member_id:
            raise ConflictError(duplicate_bank_reference(bank_reference, existing.id))
        return bank_reference

    def create_member(
        self,
        first_name: str,
        last_name: str,
        created_by: str,
        bank_reference: Optional[str] = None,
        is_active: bool = True,
    ) -> int:
        """Create a member.

        Args:
            first_name: Member's first name
            last_name: Member's last name
            created_by: Identifier of the acting user
            bank_reference: Optional reference the member quotes on transfers
            is_active: Whether the member is active

        Returns:
            Member ID

        Raises:
            ValidationError: If a name is blank
            ConflictError: If the bank reference is already used
        """
        first_name = first_name.strip()
        last_name = last_name.strip()
        if not first_name or not last_name:
            raise ValidationError("First and last name are required")

        return self.db.create_member(
            first_name=first_name,
            last_name=last_name,
            created_by=created_by,
            bank_reference=self._clean_reference(bank_reference),
            is_active=is_active,
        )

    def get_member(self, member_id: int) -> Optional[MemberEntity]:
        """Get member by ID."""
        return self.db.get_member(member_id)

    def list_members(self) -> list[MemberEntity]:
        """List all members."""
        return self.db.list_members()

    def update_bank_reference(self, member_id: int, bank_reference: Optional[str]) -> None:
        """Set or clear a member's bank reference.

        Raises:
            NotFoundError: If the member doesn't exist
            ConflictError: If another member already uses the reference
        """
        if self.db.get_member(member_id) is None:
            raise NotFoundError(member_not_found(member_id))
        self.db.update_member_bank_reference(member_id, self._clean_reference(bank_reference, member_id))

    def set_active(self, member_id: int, is_active: bool) -> None:
        """Activate or deactivate a member.

        Inactive members keep their contributions but are not matched to new
        bank credits.
        """
        if self.db.get_member(member_id) is None:
            raise NotFoundError(member_not_found(member_id))
        self.db.update_member_active(member_id, is_active)
