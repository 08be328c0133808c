"""Client management commands."""

import click
from basbook.cli.error_handling import handle_domain_error
from basbook.domain.client import ClientService
from basbook.domain.errors import DomainError


@click.group()
def client_group():
    """Manage clients (who invoices are issued to)."""
    pass


@client_group.command("list")
@click.pass_context
def list_clients(ctx):
    """List all clients."""
    db = ctx.obj["db"]
    service = ClientService(db)

    clients = service.list_clients()
    if not clients:
        click.echo("No clients found. Use 'client create' to add one.")
        return

    click.echo("\nClients:")
    for c in clients:
        psi = " [PSI]" if c.is_psi_eligible else ""
        click.echo(f"  {c.name}{psi} (ID: {c.id})")


@client_group.command("create")
@click.argument("name")
@click.option("--abn", help="Client ABN")
@click.option("--psi", is_flag=True, help="Income from this client is personal services income")
@click.pass_context
def create_client(ctx, name: str, abn: str | None, psi: bool):
    """Create a new client."""
    db = ctx.obj["db"]
    service = ClientService(db)

    try:
        client_id = service.create_client(name=name, abn=abn, is_psi_eligible=psi)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Created client '{name}' (ID: {client_id})")


def register_commands(cli):
    """Register client commands with main CLI."""
    cli.add_command(client_group, name="client")
