"""Login command."""

import click
from ledgerbook.client.errors import BackendError
from ledgerbook.cli.error_handling import handle_domain_error


@click.command("login")
@click.argument("username")
@click.password_option("--password", confirmation_prompt=False, help="Password (prompted if omitted)")
@click.pass_context
def login(ctx, username: str, password: str):
    """Log in and print a bearer token.

    Export the token as LEDGERBOOK_TOKEN (or pass --token) for the other
    commands.

    Examples:
        ledgerbook login alice
        export LEDGERBOOK_TOKEN=$(ledgerbook login alice --password secret)
    """
    try:
        token = ctx.obj["backend"].login(username, password)
    except BackendError as e:
        handle_domain_error(ctx, e)

    click.echo(token)


def register_commands(cli):
    """Register login command with main CLI."""
    cli.add_command(login)
