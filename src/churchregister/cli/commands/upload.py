"""Bank statement upload and processing commands."""

from pathlib import Path

import click
from churchregister.cli.error_handling import handle_domain_error
from churchregister.cli.options import user_option
from churchregister.domain.contribution_matching import ContributionMatchingService
from churchregister.domain.entities import ProcessingResult
from churchregister.domain.errors import DomainError
from churchregister.domain.statement_parser import StatementParser
from churchregister.domain.statement_upload import StatementUploadService


def _echo_processing(result: ProcessingResult) -> None:
    click.echo(f"  Matched: {result.matched_count} contributions (total {result.total_amount:.2f})")
    click.echo(f"  Unmatched: {result.unmatched_count} transactions")
    for reference in result.unmatched_references:
        click.echo(f"    {reference}")


@click.command("upload")
@click.argument("csv_file", type=click.Path(exists=True, dir_okay=False))
@user_option
@click.pass_context
def upload_statement(ctx, csv_file: str, user: str):
    """Upload a bank statement CSV export.

    New credits are stored (duplicates of earlier uploads are skipped) and
    then matched to members by bank reference.

    Examples:
        churchregister upload statement.csv --user treasurer
    """
    db = ctx.obj["db"]
    service = StatementUploadService(db)
    path = Path(csv_file)

    try:
        result = service.upload(path.name, path.read_bytes(), uploaded_by=user)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(result.message)
    if result.import_result is not None:
        summary = result.import_result
        click.echo("\nImport complete:")
        click.echo(f"  Processed: {summary.total_processed} transactions")
        click.echo(f"  New: {summary.new_transactions} transactions")
        click.echo(f"  Skipped: {summary.duplicates_skipped} duplicates")
        click.echo(f"  Ignored: {summary.ignored_no_money_in} without money in")
    if result.processing_result is not None:
        _echo_processing(result.processing_result)
    if result.errors:
        click.echo(f"  Errors: {len(result.errors)}")
        for error in result.errors:
            click.echo(f"    {error}", err=True)

    if not result.success:
        ctx.exit(1)


@click.command("process")
@user_option
@click.pass_context
def process_transactions(ctx, user: str):
    """Match unprocessed bank credits to members.

    Examples:
        churchregister process --user treasurer
    """
    db = ctx.obj["db"]
    service = ContributionMatchingService(db)

    result = service.match_and_create_contributions(uploaded_by=user)
    if not result.success:
        for error in result.errors:
            click.echo(f"Error: {error}", err=True)
        ctx.exit(1)

    click.echo("\nProcessing complete:")
    click.echo(f"  Processed: {result.total_processed} transactions")
    _echo_processing(result)


@click.command("parse")
@click.argument("csv_file", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def parse_statement(ctx, csv_file: str):
    """Parse a bank statement without storing anything.

    Examples:
        churchregister parse statement.csv
    """
    result = StatementParser().parse(Path(csv_file).read_bytes())

    for txn in result.transactions:
        click.echo(
            f"{txn.date.isoformat()} | {txn.money_in:>10.2f} | "
            f"{txn.reference or '-':20s} | {txn.description}"
        )
    click.echo(f"\nRows: {result.total_rows}, credits: {len(result.transactions)}")
    for error in result.errors:
        click.echo(f"  {error}", err=True)

    if not result.success:
        ctx.exit(1)


def register_commands(cli):
    """Register upload commands with main CLI."""
    cli.add_command(upload_statement)
    cli.add_command(process_transactions)
    cli.add_command(parse_statement)
