"""CSV import commands."""

import json
from dataclasses import asdict, fields
from pathlib import Path

import click
from basbook.cli.error_handling import handle_domain_error
from basbook.domain.csv_import import ExpenseImportService
from basbook.domain.csv_parser import ExpenseCSVParser, decode_csv_bytes, extract_headers
from basbook.domain.csv_types import (
    DEFAULT_MATCH_THRESHOLD,
    ColumnMapping,
    ImportOptions,
    IncomeColumnMapping,
    IncomeImportOptions,
)
from basbook.domain.errors import ValidationError
from basbook.domain.income_import import IncomeImportService
from basbook.utils.money import format_cents


def require_csv_file(ctx: click.Context, csv_file: str) -> None:
    """Exit with an error unless the path has a .csv extension."""
    if not csv_file.lower().endswith(".csv"):
        click.echo("Error: Only CSV files are allowed", err=True)
        ctx.exit(1)


def parse_column_options(values: tuple[str, ...], mapping_cls):
    """Build a column mapping from repeated FIELD=HEADER options.

    Returns:
        Mapping instance, or None when no options were given

    Raises:
        ValidationError: On malformed options, unknown fields or missing
            required fields
    """
    if not values:
        return None

    known = {f.name for f in fields(mapping_cls)}
    columns = {}
    for value in values:
        field_name, sep, header = value.partition("=")
        field_name = field_name.strip().lower()
        if not sep or not header.strip():
            raise ValidationError(f"Invalid --column '{value}', expected FIELD=HEADER")
        if field_name not in known:
            raise ValidationError(
                f"Unknown column field '{field_name}'. Valid fields: {', '.join(sorted(known))}"
            )
        columns[field_name] = header.strip()

    try:
        return mapping_cls(**columns)
    except TypeError as e:
        raise ValidationError(f"Incomplete column mapping: {e}") from e


def _print_json(result) -> None:
    click.echo(json.dumps(asdict(result), indent=2, default=str))


def _print_row_errors(rows) -> None:
    for row in rows:
        if row.error:
            label = "duplicate" if row.is_duplicate else "error"
            click.echo(f"  Row {row.row_number} ({label}): {row.error}", err=True)
        warning = getattr(row, "warning", None)
        if warning:
            click.echo(f"  Row {row.row_number} (warning): {warning}", err=True)


def _print_header(result, dry_run: bool) -> None:
    if dry_run:
        click.echo(f"\nDry run complete (job {result.import_job_id}), nothing was written:")
    else:
        click.echo(f"\nImport complete (job {result.import_job_id}):")
    click.echo(f"  Rows: {result.total_rows}")
    click.echo(f"  Imported: {result.success_count}")
    click.echo(f"  Failed: {result.failed_count} ({result.duplicate_count} duplicates)")


threshold_option = click.option(
    "--threshold",
    type=click.FloatRange(0.0, 1.0),
    default=DEFAULT_MATCH_THRESHOLD,
    show_default=True,
    envvar="BASBOOK_MATCH_THRESHOLD",
    help="Minimum fuzzy match similarity (0-1)",
)


@click.group("import")
def import_group():
    """Import expenses and incomes from CSV files."""
    pass


@import_group.command("expenses")
@click.argument("csv_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--source",
    default="custom",
    show_default=True,
    help="Column preset: custom, manual, commbank, amex, or 'auto' to detect from headers",
)
@click.option(
    "--column",
    "columns",
    multiple=True,
    help="Explicit mapping FIELD=HEADER (fields: date, item, total, gst, biz_percent, category, description)",
)
@threshold_option
@click.option("--dry-run", is_flag=True, help="Match and report without writing expenses")
@click.option("--allow-duplicates", is_flag=True, help="Skip duplicate detection")
@click.option("--json", "as_json", is_flag=True, help="Print the full result as JSON")
@click.pass_context
def import_expenses(
    ctx,
    csv_file: str,
    source: str | None,
    columns: tuple[str, ...],
    threshold: float,
    dry_run: bool,
    allow_duplicates: bool,
    as_json: bool,
):
    """Import expenses from a CSV file."""
    require_csv_file(ctx, csv_file)
    db = ctx.obj["db"]
    service = ExpenseImportService(db)

    try:
        options = ImportOptions(
            source=source,
            mapping=parse_column_options(columns, ColumnMapping),
            match_threshold=threshold,
            skip_duplicates=not allow_duplicates,
            dry_run=dry_run,
            filename=Path(csv_file).name,
        )
        result = service.import_from_bytes(Path(csv_file).read_bytes(), options)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    if as_json:
        _print_json(result)
        return

    _print_header(result, dry_run)
    click.echo(
        f"  Total: {format_cents(result.total_amount_cents)} "
        f"(GST {format_cents(result.total_gst_cents)})"
    )
    _print_row_errors(result.rows)


@import_group.command("incomes")
@click.argument("csv_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--source", help="Column preset (default: custom)")
@click.option(
    "--column",
    "columns",
    multiple=True,
    help="Explicit mapping FIELD=HEADER (fields: client, subtotal, gst, total, invoice_num, date, description)",
)
@threshold_option
@click.option(
    "--default-date",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    help="Date for rows without one (default: today)",
)
@click.option("--mark-paid", is_flag=True, help="Record imported invoices as paid")
@click.option("--dry-run", is_flag=True, help="Match and report without writing incomes")
@click.option("--allow-duplicates", is_flag=True, help="Skip duplicate detection")
@click.option("--json", "as_json", is_flag=True, help="Print the full result as JSON")
@click.pass_context
def import_incomes(
    ctx,
    csv_file: str,
    source: str | None,
    columns: tuple[str, ...],
    threshold: float,
    default_date,
    mark_paid: bool,
    dry_run: bool,
    allow_duplicates: bool,
    as_json: bool,
):
    """Import incomes (issued invoices) from a CSV file."""
    require_csv_file(ctx, csv_file)
    db = ctx.obj["db"]
    service = IncomeImportService(db)

    try:
        options = IncomeImportOptions(
            source=source,
            mapping=parse_column_options(columns, IncomeColumnMapping),
            match_threshold=threshold,
            skip_duplicates=not allow_duplicates,
            dry_run=dry_run,
            filename=Path(csv_file).name,
            default_date=default_date.date() if default_date else None,
            mark_as_paid=mark_paid,
        )
        result = service.import_from_bytes(Path(csv_file).read_bytes(), options)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    if as_json:
        _print_json(result)
        return

    _print_header(result, dry_run)
    click.echo(
        f"  Total: {format_cents(result.total_amount_cents)} "
        f"(subtotal {format_cents(result.total_subtotal_cents)}, "
        f"GST {format_cents(result.total_gst_cents)})"
    )
    if result.warning_count:
        click.echo(f"  Warnings: {result.warning_count}")
    _print_row_errors(result.rows)


@import_group.command("detect")
@click.argument("csv_file", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def detect_columns(ctx, csv_file: str):
    """Show the expense column mapping detected from a CSV header row."""
    require_csv_file(ctx, csv_file)

    try:
        headers = extract_headers(decode_csv_bytes(Path(csv_file).read_bytes()))
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    mapping = ExpenseCSVParser().detect_mapping(headers)
    if mapping is None:
        click.echo("Error: Could not detect date, item and total columns", err=True)
        click.echo(f"Headers: {', '.join(headers)}", err=True)
        ctx.exit(1)
        return

    click.echo("Detected columns:")
    for field_name, header in asdict(mapping).items():
        if header is not None:
            click.echo(f"  {field_name}: {header}")


def register_commands(cli):
    """Register import commands with main CLI."""
    cli.add_command(import_group, name="import")
