"""Member directory commands."""

import click
from churchregister.cli.error_handling import handle_domain_error
from churchregister.cli.options import user_option
from churchregister.domain.errors import DomainError
from churchregister.domain.member import MemberService


@click.group()
def member_group():
    """Manage members and their bank references."""
    pass


@member_group.command("add")
@click.argument("first_name")
@click.argument("last_name")
@click.option("--bank-reference", help="Reference the member quotes on bank transfers")
@click.option("--inactive", is_flag=True, help="Create the member as inactive")
@user_option
@click.pass_context
def add_member(ctx, first_name: str, last_name: str, bank_reference: str | None, inactive: bool, user: str):
    """Add a member.

    Examples:
        churchregister member add Jane Smith --bank-reference SMITHJ01
    """
    db = ctx.obj["db"]
    service = MemberService(db)

    try:
        member_id = service.create_member(
            first_name=first_name,
            last_name=last_name,
            created_by=user,
            bank_reference=bank_reference,
            is_active=not inactive,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Created member '{first_name} {last_name}' (ID: {member_id})")


@member_group.command("list")
@click.pass_context
def list_members(ctx):
    """List all members."""
    db = ctx.obj["db"]
    service = MemberService(db)

    members = service.list_members()
    if not members:
        click.echo("No members found.")
        return

    click.echo("\nMembers:")
    click.echo("-" * 70)
    for m in members:
        status = "active" if m.is_active else "inactive"
        click.echo(f"ID: {m.id:4d} | {m.full_name:30s} | Ref: {m.bank_reference or '-':15s} | {status}")


@member_group.command("set-reference")
@click.argument("member_id", type=int)
@click.argument("bank_reference")
@click.pass_context
def set_reference(ctx, member_id: int, bank_reference: str):
    """Set a member's bank reference. Pass "" to clear it."""
    db = ctx.obj["db"]
    service = MemberService(db)

    try:
        service.update_bank_reference(member_id, bank_reference)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Updated bank reference for member {member_id}")


@member_group.command("deactivate")
@click.argument("member_id", type=int)
@click.pass_context
def deactivate_member(ctx, member_id: int):
    """Stop matching bank credits to a member."""
    _set_active(ctx, member_id, False)


@member_group.command("activate")
@click.argument("member_id", type=int)
@click.pass_context
def activate_member(ctx, member_id: int):
    """Resume matching bank credits to a member."""
    _set_active(ctx, member_id, True)


def _set_active(ctx, member_id: int, is_active: bool) -> None:
    service = MemberService(ctx.obj["db"])
    try:
        service.set_active(member_id, is_active)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Member {member_id} is now {'active' if is_active else 'inactive'}")


def register_commands(cli):
    """Register member commands with main CLI."""
    cli.add_command(member_group, name="member")
