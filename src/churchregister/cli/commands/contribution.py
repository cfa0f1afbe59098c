"""Contribution commands."""

from datetime import date

import click
from churchregister.cli.error_handling import handle_domain_error
from churchregister.cli.options import user_option
from churchregister.domain.contribution import ContributionService
from churchregister.domain.errors import DomainError
from churchregister.utils.amount_parser import parse_amount
from churchregister.utils.date_parser import parse_date


@click.group()
def contribution_group():
    """Record and review contributions."""
    pass


@contribution_group.command("add")
@click.argument("member_id", type=int)
@click.argument("amount")
@click.option("--date", "date_str", help="Contribution date (DD/MM/YYYY or YYYY-MM-DD, default today)")
@click.option("--description", help="Note stored with the contribution")
@user_option
@click.pass_context
def add_contribution(ctx, member_id: int, amount: str, date_str: str | None, description: str | None, user: str):
    """Record a one-off cash contribution.

    Examples:
        churchregister contribution add 12 25.00 --date 07/01/2024
    """
    db = ctx.obj["db"]
    service = ContributionService(db)

    try:
        contribution_date = parse_date(date_str) if date_str else date.today()
        value = parse_amount(amount)
        contribution_id = service.add_one_off_contribution(
            member_id=member_id,
            amount=value,
            contribution_date=contribution_date,
            created_by=user,
            description=description,
        )
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Contribution of £{value:.2f} added successfully (ID: {contribution_id})")


@contribution_group.command("history")
@click.argument("member_id", type=int)
@click.option("--start-date", help="Start date (inclusive)")
@click.option("--end-date", help="End date (inclusive)")
@click.pass_context
def contribution_history(ctx, member_id: int, start_date: str | None, end_date: str | None):
    """Show a member's contributions, newest first."""
    db = ctx.obj["db"]
    service = ContributionService(db)

    try:
        start = parse_date(start_date) if start_date else None
        end = parse_date(end_date) if end_date else None
        contributions = service.get_history(member_id, start_date=start, end_date=end)
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)
        return

    if not contributions:
        click.echo("No contributions found.")
        return

    total = sum(c.amount for c in contributions)
    for c in contributions:
        click.echo(
            f"{c.date.isoformat()} | {c.amount:>10.2f} | {c.contribution_type:8s} | "
            f"{c.transaction_ref}"
        )
    click.echo(f"\nTotal: {total:.2f} ({len(contributions)} contributions)")


def register_commands(cli):
    """Register contribution commands with main CLI."""
    cli.add_command(contribution_group, name="contribution")
