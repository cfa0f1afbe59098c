"""Bank statement upload workflow: parse, import, then match."""

import threading
from typing import Optional, Union

import structlog

from churchregister.database.base import Database
from churchregister.domain.contribution_matching import ContributionMatchingService
from churchregister.domain.entities import ImportResult, ProcessingResult, UploadResult
from churchregister.domain.errors import ValidationError
from churchregister.domain.statement_parser import StatementParser
from churchregister.domain.transaction_import import TransactionImportService

logger = structlog.get_logger(__name__)

MAX_FILE_SIZE = 10 * 1024 * 1024


def build_upload_message(import_result: ImportResult, processing_result: ProcessingResult) -> str:
    """Summarise an upload for the uploading user."""
    message = f"{import_result.new_transactions} new transaction(s) imported successfully"

    if import_result.duplicates_skipped > 0:
        message += f", {import_result.duplicates_skipped} duplicate(s) skipped"

    if import_result.ignored_no_money_in > 0:
        message += f", {import_result.ignored_no_money_in} transaction(s) ignored (no credit amount)"

    if processing_result.success:
        message += f". {processing_result.matched_count} contribution(s) matched to members"
        if processing_result.unmatched_count > 0:
            message += f", {processing_result.unmatched_count} unmatched reference(s)"
    else:
        message += ". Warning: Contribution processing encountered errors"

    return message


class StatementUploadService:
    """Service that runs an uploaded statement through the whole pipeline."""

    def __init__(self, db: Database, logger=logger):
        """Initialize statement upload service.

        Args:
            db: Database instance
            logger: structlog logger
        """
        self.db = db
        self.logger = logger
        self.parser = StatementParser(logger=logger)
        self.import_service = TransactionImportService(db, logger=logger)
        self.matching_service = ContributionMatchingService(db, logger=logger)

    @staticmethod
    def validate_file(filename: Optional[str], content: Union[bytes, str, None]) -> None:
        """Check an uploaded file before parsing.

        Raises:
            ValidationError: If no file was given, it isn't a .csv file, or
                it exceeds MAX_FILE_SIZE
        """
        if not filename or content is None:
            raise ValidationError("No file uploaded")

        if not filename.lower().endswith(".csv"):
            raise ValidationError("Only CSV files are accepted")

        size = len(content) if isinstance(content, bytes) else len(content.encode("utf-8"))
        if size > MAX_FILE_SIZE:
            raise ValidationError("File size must not exceed 10 MB")

    def upload(
        self,
        filename: str,
        content: Union[bytes, str],
        uploaded_by: str,
        cancel_event: Optional[threading.Event] = None,
    ) -> UploadResult:
        """Parse a statement, store its new credits and match them to members.

        Args:
            filename: Name of the uploaded file
            content: File content
            uploaded_by: Identifier of the acting user
            cancel_event: Optional cancellation event passed to every stage

        Returns:
            UploadResult describing each stage

        Raises:
            ValidationError: If the file fails validation
            OperationCancelledError: If cancel_event is set mid-way
        """
        self.logger.info("Processing bank statement upload", filename=filename)
        self.validate_file(filename, content)

        parse_result = self.parser.parse(content, cancel_event=cancel_event)
        if not parse_result.success:
            return UploadResult(
                success=False,
                message="Failed to parse CSV file",
                errors=parse_result.errors,
            )

        if not parse_result.transactions:
            return UploadResult(
                success=False,
                message="No valid transactions found in file",
                errors=["The CSV file did not contain any valid bank credit transaction records"]
                + parse_result.errors,
            )

        import_result = self.import_service.import_transactions(
            parse_result.transactions, uploaded_by, cancel_event=cancel_event
        )
        if not import_result.success:
            self.logger.warning("Transaction import failed", errors=", ".join(import_result.errors))
            return UploadResult(
                success=False,
                message="Failed to import transactions",
                import_result=import_result,
                errors=parse_result.errors + import_result.errors,
            )

        processing_result = self.matching_service.match_and_create_contributions(
            uploaded_by, cancel_event=cancel_event
        )

        if not processing_result.success:
            self.logger.warning(
                "Contribution processing failed", errors=", ".join(processing_result.errors)
            )

        message = build_upload_message(import_result, processing_result)
        self.logger.info("Bank statement uploaded", message=message)

        return UploadResult(
            success=True,
            message=message,
            import_result=import_result,
            processing_result=processing_result if processing_result.success else None,
            errors=parse_result.errors + import_result.errors + processing_result.errors,
        )
