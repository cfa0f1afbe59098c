"""Shared click options."""

import click

user_option = click.option(
    "--user",
    default="Unknown",
    show_default=True,
    envvar="CHURCHREGISTER_USER",
    help="User recorded as creator of new records (CHURCHREGISTER_USER)",
)
