"""Shared pytest fixtures for churchregister tests."""

import tempfile
import os
from datetime import date
from decimal import Decimal
from pathlib import Path
import pytest
import structlog

from churchregister.database.factories import create_sqlite_database
from churchregister.domain.contribution import ContributionService
from churchregister.domain.contribution_matching import ContributionMatchingService
from churchregister.domain.entities import ParsedTransaction
from churchregister.domain.member import MemberService
from churchregister.domain.statement_upload import StatementUploadService
from churchregister.domain.transaction_import import TransactionImportService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo any structlog configuration a CLI test applied."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def member_service(temp_db):
    """Create a MemberService with a temporary database."""
    return MemberService(temp_db)


@pytest.fixture
def contribution_service(temp_db):
    """Create a ContributionService with a temporary database."""
    return ContributionService(temp_db)


@pytest.fixture
def import_service(temp_db):
    """Create a TransactionImportService with a temporary database."""
    return TransactionImportService(temp_db)


@pytest.fixture
def matching_service(temp_db):
    """Create a ContributionMatchingService with a temporary database."""
    return ContributionMatchingService(temp_db)


@pytest.fixture
def upload_service(temp_db):
    """Create a StatementUploadService with a temporary database."""
    return StatementUploadService(temp_db)


@pytest.fixture
def sample_members(member_service):
    """Create members matching references in the sample statement."""
    return {
        "smith": member_service.create_member("John", "Smith", "admin", bank_reference="ABC123"),
        "jones": member_service.create_member("Mary", "Jones", "admin", bank_reference="jones01"),
        "brown": member_service.create_member("Ann", "Brown", "admin"),
    }


@pytest.fixture
def parsed_transactions():
    """Three distinct credits as produced by the statement parser."""
    return [
        ParsedTransaction(
            date=date(2024, 1, 1),
            description="SMITH J REF ABC123 VIA MOBILE APP",
            money_in=Decimal("50.00"),
            reference="ABC123",
        ),
        ParsedTransaction(
            date=date(2024, 1, 2),
            description="JONES M REF JONES01 ONLINE BANKING",
            money_in=Decimal("25.50"),
            reference="JONES01",
        ),
        ParsedTransaction(
            date=date(2024, 1, 4),
            description="BLOGGS F REF UNKNOWNREF",
            money_in=Decimal("10.00"),
            reference="UNKNOWNREF",
        ),
    ]


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def fixtures_dir():
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"
