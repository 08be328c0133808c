"""Provider management commands."""

import click
from basbook.cli.error_handling import handle_domain_error
from basbook.domain.errors import DomainError
from basbook.domain.provider import ProviderService


@click.group()
def provider_group():
    """Manage providers (who expenses are paid to)."""
    pass


@provider_group.command("list")
@click.pass_context
def list_providers(ctx):
    """List all providers."""
    db = ctx.obj["db"]
    service = ProviderService(db)

    providers = service.list_providers()
    if not providers:
        click.echo("No providers found. Use 'provider create' or 'init-data' to add some.")
        return

    categories = {cat.id: cat.name for cat in db.list_categories()}

    click.echo("\nProviders:")
    for p in providers:
        where = "international" if p.is_international else "domestic"
        category = categories.get(p.default_category_id, "-")
        click.echo(f"  {p.name} ({where}, default category: {category}) (ID: {p.id})")


@provider_group.command("create")
@click.argument("name")
@click.option("--international", is_flag=True, help="Overseas provider; imported expenses carry no GST")
@click.option("--category", help="Default category name")
@click.option("--abn", "abn_arn", help="ABN or ARN")
@click.pass_context
def create_provider(ctx, name: str, international: bool, category: str | None, abn_arn: str | None):
    """Create a new provider."""
    db = ctx.obj["db"]
    service = ProviderService(db)

    try:
        provider_id = service.create_provider(
            name=name,
            is_international=international,
            default_category=category,
            abn_arn=abn_arn,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Created provider '{name}' (ID: {provider_id})")


def register_commands(cli):
    """Register provider commands with main CLI."""
    cli.add_command(provider_group, name="provider")
