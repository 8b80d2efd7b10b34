"""Client management commands."""

import click
from khata.cli.error_handling import handle_domain_error
from khata.cli.resolution import resolve_client_or_exit
from khata.domain.client import ClientService
from khata.domain.summary import SummaryService
from khata.utils.currency import format_amount
from khata.utils.date_parser import format_timestamp


@click.group()
def client_group():
    """Manage clients."""
    pass


def _contact_options(command):
    for name, help_text in reversed(
        [
            ("--institution", "Company or organization"),
            ("--contact-number", "Phone number"),
            ("--email", "Email address"),
            ("--website", "Website URL"),
            ("--address", "Postal address"),
            ("--notes", "Free-form notes"),
        ]
    ):
        command = click.option(name, help=help_text)(command)
    return command


@client_group.command("add")
@click.argument("name", metavar="CLIENT_NAME")
@_contact_options
@click.pass_context
def add_client(ctx, name: str, **contact):
    """Add a client.

    Examples:
        khata client add "Rahim Traders"
        khata client add "Acme" --email ops@acme.test --institution "Acme Ltd"
    """
    service = ClientService(ctx.obj["db"])
    contact = {k: v for k, v in contact.items() if v is not None}
    try:
        client_id = service.create_client(ctx.obj.get("user_id"), name, **contact)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created client '{name.strip()}' (ID: {client_id})")


@client_group.command("list")
@click.option("--active-only", is_flag=True, help="Hide inactive clients")
@click.pass_context
def list_clients(ctx, active_only: bool):
    """List clients."""
    service = ClientService(ctx.obj["db"])
    clients = service.list_clients(active_only=active_only)
    if not clients:
        click.echo("No clients found.")
        return

    click.echo("\nClients:")
    click.echo("-" * 72)
    for c in clients:
        state = "" if c.active else " (inactive)"
        click.echo(f"{c.id} | {c.client_name}{state}")


@client_group.command("show")
@click.argument("client", metavar="CLIENT")
@click.pass_context
def show_client(ctx, client: str):
    """Show a client with job and payment totals.

    CLIENT can be a client name or ID.
    """
    db = ctx.obj["db"]
    service = ClientService(db)
    client_id = resolve_client_or_exit(ctx, service, client)
    c = service.require_client(client_id)
    summary = SummaryService(db).client_summary(client_id)

    click.echo(f"{c.client_name}{'' if c.active else ' (inactive)'}")
    click.echo(f"  ID: {c.id}")
    for label, value in (
        ("Institution", c.institution),
        ("Phone", c.contact_number),
        ("Email", c.email),
        ("Website", c.website),
        ("Address", c.address),
        ("Notes", c.notes),
    ):
        if value:
            click.echo(f"  {label}: {value}")
    click.echo(f"  Added: {format_timestamp(c.created_at, short=True)}")
    click.echo(f"  Jobs: {summary.job_count}")
    for currency, billed in sorted(summary.billed_by_currency.items(), key=lambda i: i[0].value):
        paid = summary.paid_by_currency.get(currency, 0)
        click.echo(
            f"  {currency.value}: billed {format_amount(billed, currency.value)}, "
            f"paid {format_amount(paid, currency.value)}"
        )


@client_group.command("update")
@click.argument("client", metavar="CLIENT")
@click.option("--name", "client_name", help="New display name")
@_contact_options
@click.pass_context
def update_client(ctx, client: str, **fields):
    """Update client details. Only the given fields change.

    Existing jobs keep the client name they were created with.
    """
    service = ClientService(ctx.obj["db"])
    client_id = resolve_client_or_exit(ctx, service, client)
    fields = {k: v for k, v in fields.items() if v is not None}
    if not fields:
        click.echo("Nothing to update.")
        return
    try:
        service.update_client(client_id, **fields)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated client {client_id}")


def _set_active(ctx, client: str, active: bool) -> None:
    service = ClientService(ctx.obj["db"])
    client_id = resolve_client_or_exit(ctx, service, client)
    service.set_active(client_id, active)
    click.echo(f"Client {client_id} is now {'active' if active else 'inactive'}")


@client_group.command("deactivate")
@click.argument("client", metavar="CLIENT")
@click.pass_context
def deactivate_client(ctx, client: str):
    """Hide a client from job creation."""
    _set_active(ctx, client, False)


@client_group.command("activate")
@click.argument("client", metavar="CLIENT")
@click.pass_context
def activate_client(ctx, client: str):
    """Make a client available for new jobs again."""
    _set_active(ctx, client, True)


@client_group.command("delete")
@click.argument("client", metavar="CLIENT")
@click.pass_context
def delete_client(ctx, client: str):
    """Delete a client that has no jobs."""
    service = ClientService(ctx.obj["db"])
    client_id = resolve_client_or_exit(ctx, service, client)
    try:
        service.delete_client(client_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted client {client_id}")


def register_commands(cli):
    """Register client commands with main CLI."""
    cli.add_command(client_group, name="client")
