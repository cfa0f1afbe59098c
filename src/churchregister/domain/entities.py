"""Domain model entities for churchregister.

These are pure data classes representing business concepts, independent of
database schema. Stored rows are converted to these by the database layer,
so the reconciliation services never touch ORM objects.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from typing import Optional

CONTRIBUTION_TYPE_CASH = 1
CONTRIBUTION_TYPE_TRANSFER = 2

MAX_DESCRIPTION_LENGTH = 500
MAX_REFERENCE_LENGTH = 100


@dataclass(frozen=True)
class Member:
    """Church member domain entity."""

    id: int
    first_name: str
    last_name: str
    bank_reference: Optional[str]
    is_active: bool
    created_by: str
    created_at: datetime

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


@dataclass(frozen=True)
class ParsedTransaction:
    """Credit line read from a bank statement, not yet stored."""

    date: date
    description: str
    money_in: Decimal
    reference: str = ""


@dataclass(frozen=True)
class BankCreditTransaction:
    """Stored inbound credit from a bank statement."""

    id: int
    date: date
    description: str
    reference: str
    money_in: Decimal
    is_processed: bool
    deleted: bool
    created_by: str
    created_at: datetime


@dataclass(frozen=True)
class NewBankCreditTransaction:
    """Row to insert into the bank credit transaction table."""

    date: date
    description: str
    reference: str
    money_in: Decimal
    created_by: str
    created_at: datetime


@dataclass(frozen=True)
class Contribution:
    """Contribution ledger entry domain entity."""

    id: int
    member_id: int
    amount: Decimal
    date: date
    transaction_ref: str
    description: Optional[str]
    contribution_type_id: int
    source_transaction_id: Optional[int]
    manual_contribution: bool
    created_by: str
    created_at: datetime
    contribution_type: Optional[str] = None


@dataclass(frozen=True)
class NewContribution:
    """Contribution row to insert into the ledger."""

    member_id: int
    amount: Decimal
    date: date
    transaction_ref: str
    description: Optional[str]
    contribution_type_id: int
    created_by: str
    created_at: datetime
    source_transaction_id: Optional[int] = None
    manual_contribution: bool = False


@dataclass
class ParseResult:
    """Outcome of parsing a bank statement."""

    transactions: list[ParsedTransaction] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    total_rows: int = 0
    success: bool = True


@dataclass
class ImportResult:
    """Outcome of importing parsed transactions."""

    total_processed: int = 0
    new_transactions: int = 0
    duplicates_skipped: int = 0
    ignored_no_money_in: int = 0
    success: bool = True
    errors: list[str] = field(default_factory=list)


@dataclass
class ProcessingResult:
    """Outcome of matching stored transactions to members."""

    success: bool = False
    total_processed: int = 0
    matched_count: int = 0
    unmatched_count: int = 0
    total_amount: Decimal = Decimal("0")
    unmatched_references: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


@dataclass
class UploadResult:
    """Outcome of a full statement upload (parse, import, match)."""

    success: bool
    message: str
    import_result: Optional[ImportResult] = None
    processing_result: Optional[ProcessingResult] = None
    errors: list[str] = field(default_factory=list)
