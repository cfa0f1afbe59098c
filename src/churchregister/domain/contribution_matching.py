"""Matching of stored bank credits to members by bank reference."""

import threading
from datetime import datetime, UTC
from decimal import Decimal
from typing import Optional

import structlog
from sqlalchemy.exc import SQLAlchemyError

from churchregister.database.base import Database
from churchregister.domain.cancellation import raise_if_cancelled
from churchregister.domain.entities import (
    CONTRIBUTION_TYPE_TRANSFER,
    NewContribution,
    ProcessingResult,
)

logger = structlog.get_logger(__name__)

EMPTY_REFERENCE = "[EMPTY]"


def normalize_reference(reference: Optional[str]) -> str:
    """Normalise a bank reference for comparison (trimmed, lower-case)."""
    return (reference or "").strip().lower()


class ContributionMatchingService:
    """Service that turns unprocessed bank credits into member contributions."""

    def __init__(self, db: Database, logger=logger):
        """Initialize contribution matching service.

        Args:
            db: Database instance
            logger: structlog logger
        """
        self.db = db
        self.logger = logger

    def _build_reference_lookup(self) -> dict[str, int]:
        lookup: dict[str, int] = {}
        for member_id, bank_reference in self.db.list_member_bank_references():
            normalized = normalize_reference(bank_reference)
            if normalized:
                lookup.setdefault(normalized, member_id)
        return lookup

    def match_and_create_contributions(
        self,
        uploaded_by: str,
        cancel_event: Optional[threading.Event] = None,
    ) -> ProcessingResult:
        """Create a transfer contribution for every credit whose reference matches a member.

        Reads unprocessed credits, active members' references and the credits
        already linked to a contribution, then writes the new contributions
        and the processed flags in one commit. Credits already linked to a
        contribution are skipped without being counted.

        Args:
            uploaded_by: Identifier of the user stamped on new contributions
            cancel_event: Optional event checked between transactions

        Returns:
            ProcessingResult; success is False if storage failed

        Raises:
            OperationCancelledError: If cancel_event is set; nothing is stored
        """
        result = ProcessingResult()
        self.logger.info("Starting bank transaction processing", uploaded_by=uploaded_by)

        try:
            with self.db.transaction():
                unprocessed = self.db.list_credit_transactions(unprocessed_only=True)
                self.logger.info("Found unprocessed transactions", count=len(unprocessed))

                if not unprocessed:
                    result.success = True
                    return result

                references = self._build_reference_lookup()
                self.logger.info("Found members with bank references", count=len(references))

                already_contributed = self.db.list_contributed_transaction_ids()

                created_at = datetime.now(UTC)
                contributions = []
                unmatched_references = []
                total_amount = Decimal("0")

                for txn in unprocessed:
                    raise_if_cancelled(cancel_event, "Contribution processing")

                    if txn.id in already_contributed:
                        self.logger.warning(
                            "Transaction already has a contribution record, skipping",
                            transaction_id=txn.id,
                        )
                        continue

                    normalized = normalize_reference(txn.reference)
                    if not normalized:
                        unmatched_references.append(EMPTY_REFERENCE)
                        continue

                    member_id = references.get(normalized)
                    if member_id is None:
                        unmatched_references.append(txn.reference)
                        self.logger.debug("No match found for reference", reference=txn.reference)
                        continue

                    contributions.append(
                        NewContribution(
                            member_id=member_id,
                            amount=txn.money_in,
                            date=txn.date,
                            transaction_ref=txn.reference,
                            description=txn.description,
                            contribution_type_id=CONTRIBUTION_TYPE_TRANSFER,
                            source_transaction_id=txn.id,
                            created_by=uploaded_by,
                            created_at=created_at,
                        )
                    )
                    total_amount += txn.money_in
                    self.logger.debug(
                        "Matched transaction",
                        transaction_id=txn.id,
                        member_id=member_id,
                        amount=str(txn.money_in),
                    )

                if contributions:
                    self.db.add_contributions(contributions)
        except SQLAlchemyError as e:
            self.logger.error("Error processing bank transactions", error=str(e), exc_info=True)
            result.success = False
            result.errors.append(f"Processing error: {e}")
            return result

        result.success = True
        result.total_processed = len(unprocessed)
        result.matched_count = len(contributions)
        result.unmatched_count = len(unmatched_references)
        result.total_amount = total_amount
        result.unmatched_references = list(dict.fromkeys(unmatched_references))

        self.logger.info(
            "Processing complete",
            matched=result.matched_count,
            unmatched=result.unmatched_count,
            total_amount=str(total_amount),
        )
        return result
