"""Stored bank credit transaction commands."""

import click
from churchregister.cli.error_handling import handle_domain_error
from churchregister.domain.errors import DomainError


@click.group()
def transactions_group():
    """Review stored bank credit transactions."""
    pass


@transactions_group.command("list")
@click.option("--unprocessed", is_flag=True, help="Only show credits not yet matched to a member")
@click.pass_context
def list_transactions(ctx, unprocessed: bool):
    """List stored bank credits."""
    db = ctx.obj["db"]

    transactions = db.list_credit_transactions(unprocessed_only=unprocessed)
    if not transactions:
        click.echo("No transactions found.")
        return

    for txn in transactions:
        status = "processed" if txn.is_processed else "pending"
        click.echo(
            f"ID: {txn.id:5d} | {txn.date.isoformat()} | {txn.money_in:>10.2f} | "
            f"{txn.reference or '-':20s} | {status}"
        )


@transactions_group.command("delete")
@click.argument("transaction_id", type=int)
@click.pass_context
def delete_transaction(ctx, transaction_id: int):
    """Soft-delete a stored bank credit.

    Deleted credits are ignored by duplicate detection and matching.
    """
    db = ctx.obj["db"]
    try:
        db.soft_delete_credit_transaction(transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Deleted transaction {transaction_id}")


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transactions_group, name="transactions")
