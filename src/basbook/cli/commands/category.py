"""Category management commands."""

import click
from basbook.cli.error_handling import handle_domain_error
from basbook.domain.category import CategoryService
from basbook.domain.errors import DomainError


@click.group()
def category_group():
    """Manage expense categories."""
    pass


@category_group.command("list")
@click.pass_context
def list_categories(ctx):
    """List all categories."""
    db = ctx.obj["db"]
    service = CategoryService(db)

    categories = service.list_categories()
    if not categories:
        click.echo("No categories found. Run 'init-data' to create default categories.")
        return

    click.echo("\nCategories:")
    for cat in categories:
        label = cat.bas_label or "-"
        deductible = "" if cat.is_deductible else " (non-deductible)"
        click.echo(f"  {cat.name} [BAS {label}]{deductible} (ID: {cat.id})")


@category_group.command("create")
@click.argument("name")
@click.option("--bas-label", help="BAS field, e.g. 1B or G10")
@click.option("--non-deductible", is_flag=True, help="Expenses in this category are not deductible")
@click.option("--description", help="Category description")
@click.pass_context
def create_category(ctx, name: str, bas_label: str | None, non_deductible: bool, description: str | None):
    """Create a new category."""
    db = ctx.obj["db"]
    service = CategoryService(db)

    try:
        category_id = service.create_category(
            name=name,
            bas_label=bas_label,
            is_deductible=not non_deductible,
            description=description,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Created category '{name}' (ID: {category_id})")


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
