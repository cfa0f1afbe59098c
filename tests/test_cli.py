"""Tests for the command line interface."""

import pytest

from churchregister.cli.main import cli
from churchregister.database.factories import create_sqlite_database


@pytest.fixture
def invoke(cli_runner, temp_db):
    """Run a CLI command against the temporary database."""

    def run(*args, **kwargs):
        return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args], **kwargs)

    return run


@pytest.fixture
def fresh_db(temp_db):
    """Open a second handle on the temporary database to see CLI writes."""
    db = create_sqlite_database(database_path=temp_db.database_path)
    yield db
    db.disconnect()


def test_help_does_not_open_database(cli_runner, tmp_path):
    db_path = tmp_path / "never.db"

    result = cli_runner.invoke(cli, ["--db-path", str(db_path), "--help"])

    assert result.exit_code == 0
    assert "upload" in result.output
    assert not db_path.exists()


def test_upload(invoke, sample_members, fixtures_dir):
    result = invoke("upload", str(fixtures_dir / "hsbc_statement.csv"), "--user", "treasurer")

    assert result.exit_code == 0, result.output
    assert (
        "4 new transaction(s) imported successfully. "
        "2 contribution(s) matched to members, 2 unmatched reference(s)"
    ) in result.output
    assert "Import complete:" in result.output
    assert "New: 4 transactions" in result.output
    assert "Matched: 2 contributions (total 75.50)" in result.output
    assert "UNKNOWNREF" in result.output
    assert "[EMPTY]" in result.output


def test_upload_twice_reports_duplicates(invoke, fixtures_dir):
    statement = str(fixtures_dir / "hsbc_statement.csv")
    invoke("upload", statement)

    result = invoke("upload", statement)

    assert result.exit_code == 0
    assert "4 duplicate(s) skipped" in result.output
    assert "Skipped: 4 duplicates" in result.output


def test_upload_records_user_from_environment(invoke, fixtures_dir, fresh_db):
    result = invoke(
        "upload",
        str(fixtures_dir / "hsbc_statement.csv"),
        env={"CHURCHREGISTER_USER": "treasurer"},
    )

    assert result.exit_code == 0
    assert {t.created_by for t in fresh_db.list_credit_transactions()} == {"treasurer"}


def test_upload_default_user(invoke, fixtures_dir, fresh_db):
    invoke("upload", str(fixtures_dir / "hsbc_statement.csv"), env={"CHURCHREGISTER_USER": None})

    assert {t.created_by for t in fresh_db.list_credit_transactions()} == {"Unknown"}


def test_upload_unparsable_statement(invoke, fixtures_dir):
    result = invoke("upload", str(fixtures_dir / "hsbc_statement_missing_money_in.csv"))

    assert result.exit_code == 1
    assert "Failed to parse CSV file" in result.output
    assert "Missing required columns: Money In" in result.output


def test_upload_rejects_non_csv(invoke, fixtures_dir):
    result = invoke("upload", str(fixtures_dir / "not_a_statement.txt"))

    assert result.exit_code == 1
    assert "Error: Only CSV files are accepted" in result.output


def test_process_matches_late_members(invoke, fixtures_dir):
    invoke("upload", str(fixtures_dir / "hsbc_statement.csv"))
    invoke("member", "add", "Fred", "Bloggs", "--bank-reference", "UNKNOWNREF")

    result = invoke("process")

    assert result.exit_code == 0
    assert "Processing complete:" in result.output
    assert "Processed: 4 transactions" in result.output
    assert "Matched: 1 contributions (total 10.00)" in result.output


def test_parse_does_not_store(invoke, fixtures_dir, fresh_db):
    result = invoke("parse", str(fixtures_dir / "hsbc_statement.csv"))

    assert result.exit_code == 0
    assert "Rows: 5, credits: 4" in result.output
    assert "ABC123" in result.output
    assert fresh_db.list_credit_transactions() == []


def test_member_commands(invoke, fresh_db):
    result = invoke("member", "add", "Jane", "Smith", "--bank-reference", "SMITHJ01")
    assert result.exit_code == 0
    assert "Created member 'Jane Smith' (ID: 1)" in result.output

    result = invoke("member", "list")
    assert "Jane Smith" in result.output
    assert "SMITHJ01" in result.output

    result = invoke("member", "set-reference", "1", "JSMITH")
    assert result.exit_code == 0
    assert "Updated bank reference for member 1" in result.output

    result = invoke("member", "deactivate", "1")
    assert result.exit_code == 0
    assert "Member 1 is now inactive" in result.output

    member = fresh_db.get_member(1)
    assert member.bank_reference == "JSMITH"
    assert member.is_active is False


def test_member_list_empty(invoke):
    result = invoke("member", "list")

    assert result.exit_code == 0
    assert "No members found." in result.output


def test_member_add_duplicate_reference(invoke, sample_members):
    result = invoke("member", "add", "Jim", "Smith", "--bank-reference", "abc123")

    assert result.exit_code == 1
    assert "Error: Bank reference 'abc123' is already used by member" in result.output


def test_member_activate_unknown(invoke):
    result = invoke("member", "activate", "42")

    assert result.exit_code == 1
    assert "Error: Member with ID 42 not found" in result.output


def test_contribution_commands(invoke, sample_members):
    member_id = str(sample_members["brown"])

    result = invoke("contribution", "add", member_id, "20.00", "--date", "04/02/2024")
    assert result.exit_code == 0, result.output
    assert "Contribution of £20.00 added successfully (ID: 1)" in result.output

    result = invoke("contribution", "history", member_id)
    assert result.exit_code == 0
    assert "2024-02-04" in result.output
    assert "Cash" in result.output
    assert "Total: 20.00 (1 contributions)" in result.output


def test_contribution_history_empty(invoke, sample_members):
    result = invoke("contribution", "history", str(sample_members["brown"]))

    assert "No contributions found." in result.output


@pytest.mark.parametrize("amount", ["abc", "0", "-5"])
def test_contribution_add_rejects_bad_amount(invoke, sample_members, amount):
    result = invoke("contribution", "add", str(sample_members["brown"]), "--", amount)

    assert result.exit_code == 1
    assert "Error:" in result.output


def test_transactions_commands(invoke, fixtures_dir):
    result = invoke("transactions", "list")
    assert "No transactions found." in result.output

    invoke("upload", str(fixtures_dir / "hsbc_statement.csv"))

    result = invoke("transactions", "list", "--unprocessed")
    assert result.exit_code == 0
    assert "UNKNOWNREF" in result.output
    assert "pending" in result.output

    result = invoke("transactions", "delete", "3")
    assert result.exit_code == 0
    assert "Deleted transaction 3" in result.output

    result = invoke("transactions", "list")
    assert "UNKNOWNREF" not in result.output


def test_transactions_delete_unknown(invoke):
    result = invoke("transactions", "delete", "99")

    assert result.exit_code == 1
    assert "Error: Bank credit transaction 99 not found" in result.output


def test_log_level_option(invoke, fixtures_dir):
    result = invoke("--log-level", "debug", "parse", str(fixtures_dir / "hsbc_statement.csv"))

    assert result.exit_code == 0
