"""Expense CSV import domain service."""

import logging
import time
from dataclasses import replace
from typing import Optional

from basbook.database.base import Database
from basbook.domain.csv_parser import ExpenseCSVParser, decode_csv_bytes, extract_headers
from basbook.domain.csv_types import (
    AUTO_DETECT_SOURCE,
    ColumnMapping,
    ExpenseImportResult,
    ExpenseRowResult,
    ImportOptions,
    ParsedRow,
)
from basbook.domain.entities import Category, ImportKind, NewExpense, Provider
from basbook.domain.errors import (
    PersistenceError,
    ValidationError,
    invalid_match_threshold,
    unknown_import_source,
)
from basbook.domain.import_jobs import ImportJobService
from basbook.domain.provider_matcher import ProviderMatcher
from basbook.utils.money import calc_gst_from_total

logger = logging.getLogger(__name__)

FALLBACK_CATEGORY_NAME = "other"


class ExpenseImportService:
    """Service for importing expenses from CSV exports."""

    def __init__(self, db: Database):
        """Initialize expense import service.

        Args:
            db: Database instance
        """
        self.db = db
        self.parser = ExpenseCSVParser()
        self.provider_matcher = ProviderMatcher()
        self.job_service = ImportJobService(db)

    def import_from_bytes(self, data: bytes, options: ImportOptions) -> ExpenseImportResult:
        """Import expenses from uploaded file bytes (UTF-8, optional BOM)."""
        return self.import_from_string(decode_csv_bytes(data), options)

    def import_from_string(self, content: str, options: ImportOptions) -> ExpenseImportResult:
        """Import expenses from CSV content.

        Args:
            content: CSV text including the header row
            options: Import options

        Returns:
            Per-row results and batch totals

        Raises:
            ValidationError: If no column mapping can be resolved or the match
                threshold is outside 0..1
            PersistenceError: If the batch could not be written; the import
                job is marked failed first
        """
        if not 0.0 <= options.match_threshold <= 1.0:
            raise ValidationError(invalid_match_threshold(options.match_threshold))
        mapping = self.resolve_mapping(content, options)
        rows = self.parser.parse(content, mapping)
        return self._process_rows(rows, options)

    def preview_import(self, content: str, options: ImportOptions) -> ExpenseImportResult:
        """Run an import without writing any expenses.

        The import job is still recorded.
        """
        return self.import_from_string(content, replace(options, dry_run=True))

    def resolve_mapping(self, content: str, options: ImportOptions) -> ColumnMapping:
        """Pick the column mapping: explicit mapping, preset source, or auto-detect.

        Raises:
            ValidationError: If none of them yields a mapping
        """
        if options.mapping is not None:
            return options.mapping

        if options.source:
            if options.source.lower() == AUTO_DETECT_SOURCE:
                detected = self.parser.detect_mapping(extract_headers(content))
                if detected is None:
                    raise ValidationError(
                        "Could not detect date, item and total columns from CSV headers"
                    )
                return detected

            preset = self.parser.get_mapping(options.source)
            if preset is not None:
                return preset

        raise ValidationError(unknown_import_source(options.source))

    def _process_rows(self, rows: list[ParsedRow], options: ImportOptions) -> ExpenseImportResult:
        start = time.monotonic()

        providers = self.db.list_providers()
        categories = self.db.list_categories()
        provider_names = [provider.name for provider in providers]

        job_id = self.job_service.create_job(
            ImportKind.EXPENSE,
            source=options.source or "custom",
            total_rows=len(rows),
            filename=options.filename,
        )

        results = [
            self._process_row(row, providers, provider_names, categories, options, job_id)
            for row in rows
        ]
        to_create = [r.expense_data for r in results if r.success and r.expense_data is not None]

        if to_create and not options.dry_run:
            try:
                self.db.insert_expenses(to_create)
            except PersistenceError as e:
                self.job_service.mark_failed(job_id, str(e))
                raise

        successful = [r for r in results if r.success and r.expense_data is not None]
        success_count = sum(1 for r in results if r.success)
        failed_count = len(results) - success_count
        duplicate_count = sum(1 for r in results if r.is_duplicate)

        self.job_service.finalize(
            job_id,
            total_rows=len(rows),
            success_count=success_count,
            failed_count=failed_count,
            duplicate_count=duplicate_count,
        )

        processing_time_ms = int((time.monotonic() - start) * 1000)
        logger.info(
            "Import job %d: %d success, %d failed in %dms%s",
            job_id,
            success_count,
            failed_count,
            processing_time_ms,
            " (dry run)" if options.dry_run else "",
        )

        return ExpenseImportResult(
            import_job_id=job_id,
            total_rows=len(rows),
            success_count=success_count,
            failed_count=failed_count,
            duplicate_count=duplicate_count,
            total_amount_cents=sum(r.expense_data.amount_cents for r in successful),
            total_gst_cents=sum(r.expense_data.gst_cents for r in successful),
            processing_time_ms=processing_time_ms,
            rows=results,
        )

    def _process_row(
        self,
        row: ParsedRow,
        providers: list[Provider],
        provider_names: list[str],
        categories: list[Category],
        options: ImportOptions,
        job_id: int,
    ) -> ExpenseRowResult:
        match = self.provider_matcher.find_best_match(
            row.item_name, provider_names, options.match_threshold
        )
        if match is None:
            logger.debug("Row %d: no provider for %r", row.row_number, row.item_name)
            return ExpenseRowResult(
                row_number=row.row_number,
                success=False,
                provider_match=None,
                error=f'No matching provider found for "{row.item_name}"',
            )

        provider = next((p for p in providers if p.name == match.provider_name), None)
        if provider is None:
            return ExpenseRowResult(
                row_number=row.row_number,
                success=False,
                provider_match=match,
                error=f'Provider "{match.provider_name}" not found in database',
            )

        category = self._resolve_category(row, provider, categories)
        if category is None:
            return ExpenseRowResult(
                row_number=row.row_number,
                success=False,
                provider_match=match,
                error="No category found and no default category available",
            )

        if options.skip_duplicates and self.db.expense_exists(
            row.date, row.total_cents, provider.id
        ):
            return ExpenseRowResult(
                row_number=row.row_number,
                success=False,
                provider_match=match,
                is_duplicate=True,
                error="Duplicate expense detected (same date, amount, provider)",
            )

        # Imports from overseas providers are GST-free
        gst_cents = row.gst_cents
        if provider.is_international:
            gst_cents = 0
        elif gst_cents == 0 and row.total_cents > 0:
            gst_cents = calc_gst_from_total(row.total_cents)

        logger.debug(
            "Row %d: %r -> %s (%s, %.2f)",
            row.row_number,
            row.item_name,
            provider.name,
            match.match_type.value,
            match.score,
        )

        # Full amounts; biz_percent is applied by reporting
        return ExpenseRowResult(
            row_number=row.row_number,
            success=True,
            provider_match=match,
            category_name=category.name,
            expense_data=NewExpense(
                date=row.date,
                amount_cents=row.total_cents,
                gst_cents=gst_cents,
                biz_percent=row.biz_percent,
                provider_id=provider.id,
                category_id=category.id,
                description=row.description or row.item_name,
                import_job_id=job_id,
            ),
        )

    def _resolve_category(
        self, row: ParsedRow, provider: Provider, categories: list[Category]
    ) -> Optional[Category]:
        """CSV category, provider default, keyword hit, "Other", then the first one."""
        if row.category_name:
            wanted = row.category_name.lower()
            for category in categories:
                if category.name.lower() == wanted:
                    return category

        if provider.default_category_id is not None:
            for category in categories:
                if category.id == provider.default_category_id:
                    return category

        keywords = self.provider_matcher.extract_keywords(row.item_name)
        for category in categories:
            if any(keyword in category.name.lower() for keyword in keywords):
                return category

        for category in categories:
            if category.name.lower() == FALLBACK_CATEGORY_NAME:
                return category

        return categories[0] if categories else None

