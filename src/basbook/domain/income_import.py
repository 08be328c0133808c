"""Income CSV import domain service."""

import logging
import time
from dataclasses import replace

from basbook.database.base import Database
from basbook.domain.client_matcher import ClientMatcher
from basbook.domain.csv_parser import decode_csv_bytes
from basbook.domain.csv_types import (
    CachedClient,
    IncomeColumnMapping,
    IncomeImportOptions,
    IncomeImportResult,
    IncomeRowResult,
    ParsedIncomeRow,
)
from basbook.domain.entities import ImportKind, NewIncome
from basbook.domain.errors import (
    PersistenceError,
    ValidationError,
    invalid_match_threshold,
    unknown_import_source,
)
from basbook.domain.import_jobs import ImportJobService
from basbook.domain.income_csv_parser import IncomeCSVParser
from basbook.utils.money import format_cents

logger = logging.getLogger(__name__)

DEFAULT_INCOME_SOURCE = "custom"


class IncomeImportService:
    """Service for importing incomes (issued invoices) from CSV.

    Incomes are always fully business income and always domestic, so there
    is no category, business-use percentage or international GST handling.
    """

    def __init__(self, db: Database):
        """Initialize income import service.

        Args:
            db: Database instance
        """
        self.db = db
        self.parser = IncomeCSVParser()
        self.client_matcher = ClientMatcher()
        self.job_service = ImportJobService(db)

    def import_from_bytes(
        self, data: bytes, options: IncomeImportOptions
    ) -> IncomeImportResult:
        """Import incomes from uploaded file bytes (UTF-8, optional BOM)."""
        return self.import_from_string(decode_csv_bytes(data), options)

    def import_from_string(
        self, content: str, options: IncomeImportOptions
    ) -> IncomeImportResult:
        """Import incomes from CSV content.

        Args:
            content: CSV text including the header row
            options: Income import options

        Returns:
            Per-row results and batch totals

        Raises:
            ValidationError: If the source is unknown, the match threshold is
                outside 0..1 or no row has a client name; no import job is
                created in these cases
            PersistenceError: If the batch could not be written; the import
                job is marked failed first
        """
        if not 0.0 <= options.match_threshold <= 1.0:
            raise ValidationError(invalid_match_threshold(options.match_threshold))
        mapping = self.resolve_mapping(options)
        rows = self.parser.parse(content, mapping, options.default_date)
        return self._process_rows(rows, options)

    def preview_import(
        self, content: str, options: IncomeImportOptions
    ) -> IncomeImportResult:
        """Run an import without writing any incomes.

        The import job is still recorded.
        """
        return self.import_from_string(content, replace(options, dry_run=True))

    def resolve_mapping(self, options: IncomeImportOptions) -> IncomeColumnMapping:
        """Pick the column mapping: explicit mapping, preset source, else custom.

        Raises:
            ValidationError: If a source is named that has no preset
        """
        if options.mapping is not None:
            return options.mapping

        source = options.source or DEFAULT_INCOME_SOURCE
        preset = self.parser.get_mapping(source)
        if preset is None:
            raise ValidationError(unknown_import_source(source))
        return preset

    def _process_rows(
        self, rows: list[ParsedIncomeRow], options: IncomeImportOptions
    ) -> IncomeImportResult:
        start = time.monotonic()

        cached_clients = self.client_matcher.prepare_clients_for_matching(self.db.list_clients())

        job_id = self.job_service.create_job(
            ImportKind.INCOME,
            source=options.source or DEFAULT_INCOME_SOURCE,
            total_rows=len(rows),
            filename=options.filename,
        )

        results = [self._process_row(row, cached_clients, options, job_id) for row in rows]
        to_create = [r.income_data for r in results if r.success and r.income_data is not None]

        if to_create and not options.dry_run:
            try:
                self.db.insert_incomes(to_create)
            except PersistenceError as e:
                self.job_service.mark_failed(job_id, str(e))
                raise

        successful = [r.income_data for r in results if r.success and r.income_data is not None]
        success_count = sum(1 for r in results if r.success)
        failed_count = len(results) - success_count
        duplicate_count = sum(1 for r in results if r.is_duplicate)
        warning_count = sum(1 for r in results if r.warning)

        self.job_service.finalize(
            job_id,
            total_rows=len(rows),
            success_count=success_count,
            failed_count=failed_count,
            duplicate_count=duplicate_count,
        )

        processing_time_ms = int((time.monotonic() - start) * 1000)
        logger.info(
            "Income import job %d: %d success, %d failed, %d warnings in %dms%s",
            job_id,
            success_count,
            failed_count,
            warning_count,
            processing_time_ms,
            " (dry run)" if options.dry_run else "",
        )

        return IncomeImportResult(
            import_job_id=job_id,
            total_rows=len(rows),
            success_count=success_count,
            failed_count=failed_count,
            duplicate_count=duplicate_count,
            warning_count=warning_count,
            total_subtotal_cents=sum(income.subtotal_cents for income in successful),
            total_gst_cents=sum(income.gst_cents for income in successful),
            total_amount_cents=sum(income.total_cents for income in successful),
            processing_time_ms=processing_time_ms,
            rows=results,
        )

    def _process_row(
        self,
        row: ParsedIncomeRow,
        cached_clients: list[CachedClient],
        options: IncomeImportOptions,
        job_id: int,
    ) -> IncomeRowResult:
        match = self.client_matcher.find_best_match(
            row.client_name, cached_clients, options.match_threshold
        )
        if match is None:
            logger.debug("Row %d: no client for %r", row.row_number, row.client_name)
            return IncomeRowResult(
                row_number=row.row_number,
                success=False,
                client_match=None,
                error=(
                    f'No matching client found for "{row.client_name}". '
                    "Create the client first or check the name."
                ),
            )

        if options.skip_duplicates and self._is_duplicate(row, match.client_id):
            return IncomeRowResult(
                row_number=row.row_number,
                success=False,
                client_match=match,
                is_duplicate=True,
                error="Duplicate income detected (same date, amount, client, invoice)",
            )

        warning = None
        if not row.total_matches:
            warning = (
                f"Total mismatch: CSV shows {format_cents(row.total_cents_from_csv)} "
                f"but Subtotal + GST = {format_cents(row.calculated_total_cents)}. "
                "Using calculated value."
            )

        return IncomeRowResult(
            row_number=row.row_number,
            success=True,
            client_match=match,
            warning=warning,
            income_data=NewIncome(
                date=row.date,
                client_id=match.client_id,
                invoice_num=row.invoice_num,
                description=row.description,
                subtotal_cents=row.subtotal_cents,
                gst_cents=row.gst_cents,
                total_cents=row.calculated_total_cents,
                is_paid=options.mark_as_paid,
                import_job_id=job_id,
            ),
        )

    def _is_duplicate(self, row: ParsedIncomeRow, client_id: int) -> bool:
        """Same invoice number for the client, or same date, total and client."""
        if row.invoice_num and self.db.income_invoice_exists(client_id, row.invoice_num):
            return True
        return self.db.income_exists(row.date, row.calculated_total_cents, client_id)
