"""Import job ledger commands."""

import click
from basbook.cli.error_handling import handle_domain_error
from basbook.domain.errors import DomainError
from basbook.domain.import_jobs import ImportJobService
from basbook.utils.money import format_cents


def _format_timestamp(value) -> str:
    return value.strftime("%Y-%m-%d %H:%M") if value else "-"


@click.group()
def job_group():
    """Inspect and roll back import jobs."""
    pass


@job_group.command("list")
@click.option("--limit", type=click.IntRange(min=1), default=20, show_default=True)
@click.option("--offset", type=click.IntRange(min=0), default=0, show_default=True)
@click.pass_context
def list_jobs(ctx, limit: int, offset: int):
    """List import jobs, newest first."""
    db = ctx.obj["db"]
    service = ImportJobService(db)

    jobs = service.list_jobs(limit=limit, offset=offset)
    if not jobs:
        click.echo("No import jobs found.")
        return

    click.echo(f"\n{'ID':<5} {'Kind':<8} {'Status':<12} {'Source':<9} {'Rows':>5} {'OK':>5} {'Err':>5}  {'Created':<16}  Filename")
    click.echo("-" * 90)
    for job in jobs:
        click.echo(
            f"{job.id:<5} {job.kind.value:<8} {job.status.value:<12} {job.source.value:<9} "
            f"{job.total_rows:>5} {job.imported_count:>5} {job.error_count:>5}  "
            f"{_format_timestamp(job.created_at):<16}  {job.filename}"
        )


@job_group.command("show")
@click.argument("job_id", type=int)
@click.pass_context
def show_job(ctx, job_id: int):
    """Show an import job and the records it created."""
    db = ctx.obj["db"]
    service = ImportJobService(db)

    try:
        job = service.get_job(job_id)
        stats = service.get_statistics(job_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Import job {job.id}")
    click.echo(f"  Kind: {job.kind.value}")
    click.echo(f"  File: {job.filename}")
    click.echo(f"  Source: {job.source.value}")
    click.echo(f"  Status: {job.status.value}")
    click.echo(f"  Rows: {job.total_rows}")
    click.echo(f"  Imported: {job.imported_count}")
    click.echo(f"  Skipped (duplicates): {job.skipped_count}")
    click.echo(f"  Errors: {job.error_count}")
    click.echo(f"  Created: {_format_timestamp(job.created_at)}")
    click.echo(f"  Completed: {_format_timestamp(job.completed_at)}")
    if job.error_message:
        click.echo(f"  Error message: {job.error_message}")
    click.echo(f"  Records: {stats['record_count']}")
    click.echo(f"  Amount: {format_cents(stats['total_amount_cents'])}")
    click.echo(f"  GST: {format_cents(stats['total_gst_cents'])}")


@job_group.command("rollback")
@click.argument("job_id", type=int)
@click.option("--yes", is_flag=True, help="Skip confirmation prompt")
@click.pass_context
def rollback_job(ctx, job_id: int, yes: bool):
    """Delete every record an import job created."""
    db = ctx.obj["db"]
    service = ImportJobService(db)

    if not yes and not click.confirm(f"Roll back import job {job_id}?"):
        click.echo("Cancelled.")
        return

    try:
        deleted = service.rollback(job_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Rolled back import job {job_id} ({deleted} records deleted)")


@job_group.command("delete")
@click.argument("job_id", type=int)
@click.pass_context
def delete_job(ctx, job_id: int):
    """Delete an import job that no longer owns any records."""
    db = ctx.obj["db"]
    service = ImportJobService(db)

    try:
        service.delete_job(job_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Deleted import job {job_id}")


def register_commands(cli):
    """Register job commands with main CLI."""
    cli.add_command(job_group, name="job")
