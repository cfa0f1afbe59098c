"""Import of parsed bank credits with duplicate detection."""

import threading
from datetime import datetime, date, UTC
from decimal import Decimal, InvalidOperation
from typing import Optional

import structlog
from sqlalchemy.exc import SQLAlchemyError

from churchregister.database.base import Database
from churchregister.domain.cancellation import raise_if_cancelled
from churchregister.domain.entities import (
    MAX_DESCRIPTION_LENGTH,
    MAX_REFERENCE_LENGTH,
    ImportResult,
    NewBankCreditTransaction,
    ParsedTransaction,
)
from churchregister.utils.amount_parser import MAX_AMOUNT

logger = structlog.get_logger(__name__)

CENT = Decimal("0.01")

DuplicateKey = tuple[date, Decimal, str]


def stored_amount(money_in: Decimal) -> Decimal:
    """Round an amount to pence as it is stored.

    Raises:
        ValueError: If the amount does not fit the money_in column
    """
    try:
        amount = Decimal(money_in).quantize(CENT)
    except InvalidOperation:
        raise ValueError(f"Amount out of range '{money_in}'")
    if abs(amount) >= MAX_AMOUNT:
        raise ValueError(f"Amount out of range '{money_in}'")
    return amount


def duplicate_key(txn_date: date, money_in: Decimal, description: Optional[str]) -> DuplicateKey:
    """Build the natural key used to detect an already imported credit.

    The description is truncated exactly as it is on store and the amount is
    normalised to two decimal places, so a key built from a parsed row equals
    the key built from the row it produced.
    """
    return (
        txn_date,
        stored_amount(money_in),
        (description or "")[:MAX_DESCRIPTION_LENGTH],
    )


class TransactionImportService:
    """Service for storing parsed bank credits without duplicates."""

    def __init__(self, db: Database, logger=logger):
        """Initialize transaction import service.

        Args:
            db: Database instance
            logger: structlog logger
        """
        self.db = db
        self.logger = logger

    def import_transactions(
        self,
        transactions: list[ParsedTransaction],
        uploaded_by: str,
        cancel_event: Optional[threading.Event] = None,
    ) -> ImportResult:
        """Store the transactions that are not already on file.

        Credits with no money in, after rounding to pence, are ignored, as are
        amounts too large to store. The remaining rows are checked
        against every non-deleted stored credit and against each other, then
        the new ones are inserted in one database transaction.

        Args:
            transactions: Parsed transactions, in statement order
            uploaded_by: Identifier of the user stamped on new rows
            cancel_event: Optional event checked between transactions

        Returns:
            ImportResult with counts; success is False if storage failed

        Raises:
            OperationCancelledError: If cancel_event is set; nothing is stored
        """
        result = ImportResult(total_processed=len(transactions))

        valid = []
        for txn in transactions:
            try:
                amount = stored_amount(txn.money_in)
            except ValueError:
                self.logger.warning("Amount out of range, ignoring transaction", money_in=str(txn.money_in))
                amount = Decimal("0")
            if amount > 0:
                valid.append(txn)
        result.ignored_no_money_in = len(transactions) - len(valid)

        if not valid:
            return result

        try:
            with self.db.transaction():
                seen = set(
                    duplicate_key(txn_date, money_in, description)
                    for txn_date, money_in, description in self.db.list_credit_transaction_keys()
                )

                created_at = datetime.now(UTC)
                new_rows = []
                for txn in valid:
                    raise_if_cancelled(cancel_event, "Transaction import")

                    key = duplicate_key(txn.date, txn.money_in, txn.description)
                    if key in seen:
                        result.duplicates_skipped += 1
                        continue

                    new_rows.append(
                        NewBankCreditTransaction(
                            date=txn.date,
                            description=(txn.description or "")[:MAX_DESCRIPTION_LENGTH],
                            reference=(txn.reference or "")[:MAX_REFERENCE_LENGTH],
                            money_in=key[1],
                            created_by=uploaded_by,
                            created_at=created_at,
                        )
                    )
                    seen.add(key)

                if new_rows:
                    self.db.add_credit_transactions(new_rows)
        except SQLAlchemyError as e:
            self.logger.error("Transaction import failed", error=str(e))
            result.success = False
            result.errors.append(f"Error importing transactions: {e}")
            return result

        result.new_transactions = len(new_rows)
        self.logger.info(
            "Transactions imported",
            uploaded_by=uploaded_by,
            new=result.new_transactions,
            duplicates=result.duplicates_skipped,
            ignored_no_money_in=result.ignored_no_money_in,
        )
        return result
