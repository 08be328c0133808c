"""Initialize default categories and providers."""

import click
from basbook.domain.seed import seed_categories, seed_providers


@click.command("init-data")
@click.pass_context
def init_data(ctx):
    """Initialize database with default BAS categories and common providers."""
    db = ctx.obj["db"]

    created_categories = seed_categories(db)
    if created_categories:
        click.echo(f"Created {created_categories} categories")
    else:
        click.echo("Categories already exist, skipped.")

    created_providers = seed_providers(db)
    if created_providers:
        click.echo(f"Created {created_providers} providers")
    else:
        click.echo("Providers already exist, skipped.")


def register_commands(cli):
    """Register init-data command with main CLI."""
    cli.add_command(init_data)
