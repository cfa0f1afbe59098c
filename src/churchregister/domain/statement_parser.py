"""Bank statement CSV parsing with header-driven column detection."""

import threading
from datetime import date
from decimal import Decimal
from typing import Optional, Union

import structlog

from churchregister.domain import errors
from churchregister.domain.cancellation import raise_if_cancelled
from churchregister.domain.entities import ParseResult, ParsedTransaction
from churchregister.domain.reference import extract_reference
from churchregister.utils.amount_parser import parse_optional_amount
from churchregister.utils.csv_line import split_csv_line
from churchregister.utils.date_parser import parse_statement_date

logger = structlog.get_logger(__name__)

# Logical column -> accepted header names (lower-cased, trimmed)
DATE_COLUMNS = ("date", "transaction date")
DESCRIPTION_COLUMNS = ("description", "transaction description")
MONEY_IN_COLUMNS = ("money in", "credit amount", "credit")

REQUIRED_COLUMNS = (
    ("Date", DATE_COLUMNS),
    ("Description", DESCRIPTION_COLUMNS),
    ("Money In", MONEY_IN_COLUMNS),
)


class StatementParser:
    """Parser for HSBC-style bank statement exports.

    Columns are located by header name rather than position, so reordered
    exports and the common naming variants are accepted. Only credit rows
    (money in > 0) are returned.
    """

    def __init__(self, logger=logger):
        self.logger = logger

    def parse(
        self,
        content: Union[bytes, str],
        cancel_event: Optional[threading.Event] = None,
    ) -> ParseResult:
        """Parse statement content into credit transactions.

        Structural problems (too few lines, missing columns, undecodable
        bytes) return a failed result with a single error. Problems with an
        individual row are recorded as row errors and parsing continues.

        Args:
            content: Raw file content, bytes (UTF-8, optional BOM) or text
            cancel_event: Optional event checked between rows

        Returns:
            ParseResult with the credit transactions, errors and row count

        Raises:
            OperationCancelledError: If cancel_event is set while parsing
        """
        result = ParseResult()

        if isinstance(content, bytes):
            try:
                content = content.decode("utf-8-sig")
            except UnicodeDecodeError as e:
                return self._fail(result, errors.unreadable_file(e))

        lines = [line.replace("\r", "") for line in content.split("\n")]
        lines = [line for line in lines if line]

        if len(lines) < 2:
            return self._fail(result, errors.too_few_lines())

        column_index = self._index_header(lines[0])
        missing = [
            name
            for name, aliases in REQUIRED_COLUMNS
            if not any(alias in column_index for alias in aliases)
        ]
        if missing:
            return self._fail(result, errors.missing_columns(missing))

        result.total_rows = len(lines) - 1

        for row_num, line in enumerate(lines[1:], start=2):
            raise_if_cancelled(cancel_event, "Statement parsing")
            try:
                transaction = self._parse_row(split_csv_line(line), column_index)
            except Exception as e:
                result.errors.append(errors.row_parse_error(row_num, e))
                continue

            if transaction.money_in > 0:
                result.transactions.append(transaction)

        self.logger.info(
            "Statement parsed",
            total_rows=result.total_rows,
            credits=len(result.transactions),
            row_errors=len(result.errors),
        )
        return result

    def _fail(self, result: ParseResult, message: str) -> ParseResult:
        result.success = False
        result.errors.append(message)
        self.logger.warning("Statement rejected", error=message)
        return result

    @staticmethod
    def _index_header(header_line: str) -> dict[str, int]:
        """Map lower-cased, trimmed header names to column positions."""
        column_index: dict[str, int] = {}
        for index, name in enumerate(split_csv_line(header_line)):
            column_index.setdefault(name.strip().lower(), index)
        return column_index

    def _parse_row(self, cols: list[str], column_index: dict[str, int]) -> ParsedTransaction:
        description = self._first_value(cols, column_index, DESCRIPTION_COLUMNS)
        money_in = None
        for alias in MONEY_IN_COLUMNS:
            money_in = parse_optional_amount(self._value(cols, column_index, alias))
            if money_in is not None:
                break

        return ParsedTransaction(
            date=self._parse_date(cols, column_index),
            description=description,
            money_in=money_in if money_in is not None else Decimal("0"),
            reference=extract_reference(description),
        )

    def _parse_date(self, cols: list[str], column_index: dict[str, int]) -> date:
        for alias in DATE_COLUMNS:
            value = self._value(cols, column_index, alias)
            if value is None:
                continue
            parsed = parse_statement_date(value)
            if parsed != date.min:
                return parsed
        return date.min

    @staticmethod
    def _value(cols: list[str], column_index: dict[str, int], alias: str) -> Optional[str]:
        index = column_index.get(alias)
        if index is None or index >= len(cols):
            return None
        return cols[index].strip()

    def _first_value(self, cols: list[str], column_index: dict[str, int], aliases) -> str:
        for alias in aliases:
            value = self._value(cols, column_index, alias)
            if value is not None:
                return value
        return ""


def parse_statement(content: Union[bytes, str], cancel_event: Optional[threading.Event] = None) -> ParseResult:
    """Parse bank statement content with a default StatementParser."""
    return StatementParser().parse(content, cancel_event=cancel_event)
