"""Contribution ledger domain service."""

from datetime import datetime, date, UTC
from decimal import Decimal
from typing import Optional

import structlog

from churchregister.database.base import Database
from churchregister.domain.entities import (
    CONTRIBUTION_TYPE_CASH,
    Contribution as ContributionEntity,
    NewContribution,
)
from churchregister.domain.errors import NotFoundError, ValidationError, member_not_found

logger = structlog.get_logger(__name__)


class ContributionService:
    """Service for manual contributions and contribution history."""

    def __init__(self, db: Database, logger=logger):
        """Initialize contribution service.

        Args:
            db: Database instance
            logger: structlog logger
        """
        self.db = db
        self.logger = logger

    def add_one_off_contribution(
        self,
        member_id: int,
        amount: Decimal,
        contribution_date: date,
        created_by: str,
        description: Optional[str] = None,
    ) -> int:
        """Record a manual cash contribution for a member.

        Args:
            member_id: Member ID
            amount: Amount given, must be positive
            contribution_date: Date of the gift
            created_by: Identifier of the acting user
            description: Optional note

        Returns:
            Contribution ID

        Raises:
            ValidationError: If amount is not positive
            NotFoundError: If the member doesn't exist
        """
        if amount <= 0:
            raise ValidationError("Contribution amount must be greater than zero")

        if self.db.get_member(member_id) is None:
            raise NotFoundError(member_not_found(member_id))

        now = datetime.now(UTC)
        [contribution_id] = self.db.add_contributions(
            [
                NewContribution(
                    member_id=member_id,
                    amount=amount,
                    date=contribution_date,
                    transaction_ref=f"MANUAL-{now:%Y%m%d%H%M%S}",
                    description=description,
                    contribution_type_id=CONTRIBUTION_TYPE_CASH,
                    created_by=created_by,
                    created_at=now,
                    manual_contribution=True,
                )
            ]
        )

        self.logger.info(
            "One-off contribution added",
            member_id=member_id,
            amount=str(amount),
            created_by=created_by,
        )
        return contribution_id

    def get_history(
        self,
        member_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[ContributionEntity]:
        """Get a member's contributions, newest first.

        Args:
            member_id: Member ID
            start_date: Optional inclusive start date
            end_date: Optional inclusive end date

        Raises:
            NotFoundError: If the member doesn't exist
        """
        if self.db.get_member(member_id) is None:
            raise NotFoundError(member_not_found(member_id))

        contributions = self.db.list_contributions(
            member_id=member_id, start_date=start_date, end_date=end_date
        )
        self.logger.info("Retrieved contribution history", member_id=member_id, count=len(contributions))
        return contributions
