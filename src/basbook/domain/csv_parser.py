"""Expense-shaped CSV parsing.

Rows that are incomplete, unparseable, non-positive or look like spreadsheet
"Total" lines are dropped here without being reported. They never reach the
import service, so they only show up as a lower ``total_rows``.
"""

import csv
import io
import logging
from typing import Optional

from basbook.domain.csv_types import EXPENSE_COLUMN_MAPPINGS, ColumnMapping, ParsedRow
from basbook.utils.amount_parser import parse_currency, parse_percentage
from basbook.utils.date_parser import parse_date

logger = logging.getLogger(__name__)

_DELIMITERS = ",;\t|"

# Header synonyms for auto-detection (compared lowercase, trimmed)
DATE_HEADERS = ("date", "transaction date", "trans date")
ITEM_HEADERS = ("item", "description", "merchant", "vendor", "payee")
TOTAL_HEADERS = ("total", "amount", "debit", "value", "price")
GST_HEADERS = ("gst", "tax", "vat")
BIZ_PERCENT_HEADERS = ("biz%", "biz", "business", "business%", "business use")
CATEGORY_HEADERS = ("category", "cat", "type")


def decode_csv_bytes(data: bytes) -> str:
    """Decode uploaded CSV bytes, dropping a UTF-8 byte order mark."""
    return data.decode("utf-8-sig")


def detect_delimiter(content: str) -> str:
    """Guess the delimiter from the header line, defaulting to a comma."""
    header_line = content.splitlines()[0] if content else ""
    try:
        return csv.Sniffer().sniff(header_line, delimiters=_DELIMITERS).delimiter
    except csv.Error:
        return ","


def read_csv_records(content: str) -> list[dict[str, str]]:
    """Read CSV content with a header row into trimmed dict records.

    Rows with more or fewer cells than the header are tolerated: extra cells
    are ignored and missing cells read as "".
    """
    content = content.lstrip("\ufeff")
    if not content.strip():
        return []

    reader = csv.DictReader(io.StringIO(content), delimiter=detect_delimiter(content))
    if reader.fieldnames is None:
        return []
    reader.fieldnames = [name.strip() for name in reader.fieldnames]

    # DictReader files surplus cells under the None key
    return [
        {key: (value or "").strip() for key, value in row.items() if key is not None}
        for row in reader
    ]


def extract_headers(content: str) -> list[str]:
    """Return the trimmed header names of CSV content."""
    content = content.lstrip("\ufeff")
    if not content.strip():
        return []
    reader = csv.reader(io.StringIO(content), delimiter=detect_delimiter(content))
    first_row = next(reader, [])
    return [name.strip() for name in first_row]


def _find_header(headers: list[str], synonyms: tuple[str, ...]) -> Optional[str]:
    for header in headers:
        if header.strip().lower() in synonyms:
            return header
    return None


class ExpenseCSVParser:
    """Parses expense CSV exports into ``ParsedRow`` objects."""

    def parse_bytes(self, data: bytes, mapping: ColumnMapping) -> list[ParsedRow]:
        """Parse raw uploaded bytes."""
        return self.parse(decode_csv_bytes(data), mapping)

    def parse(self, content: str, mapping: ColumnMapping) -> list[ParsedRow]:
        """Parse CSV content using a column mapping.

        Args:
            content: CSV text including the header row
            mapping: Column mapping for this CSV dialect

        Returns:
            Parsed rows in file order. row_number is 1-indexed over data rows
            (header excluded) and counts dropped rows too.
        """
        results = []
        for row_number, record in enumerate(read_csv_records(content), start=1):
            item_value = record.get(mapping.item, "")
            total_value = record.get(mapping.total, "")
            date_value = record.get(mapping.date, "")

            if not item_value or not total_value or not date_value:
                logger.debug("Row %d: missing date, item or total, skipped", row_number)
                continue

            if self.is_summary_row(item_value, total_value):
                logger.debug("Row %d: summary row skipped", row_number)
                continue

            parsed = self._parse_row(record, mapping, row_number)
            if parsed is None:
                logger.debug("Row %d: unparseable date or non-positive total, skipped", row_number)
                continue
            results.append(parsed)

        return results

    def _parse_row(
        self, record: dict[str, str], mapping: ColumnMapping, row_number: int
    ) -> Optional[ParsedRow]:
        txn_date = parse_date(record[mapping.date])
        if txn_date is None:
            return None

        # Refunds and credits are not imported
        total_cents = parse_currency(record[mapping.total])
        if total_cents is None or total_cents <= 0:
            return None

        # 0 lets the import service back GST out of the total
        gst_value = record.get(mapping.gst, "") if mapping.gst else ""
        gst_cents = (parse_currency(gst_value) or 0) if gst_value else 0

        biz_value = record.get(mapping.biz_percent, "") if mapping.biz_percent else ""
        biz_percent = parse_percentage(biz_value) if biz_value else 100

        category_value = record.get(mapping.category, "") if mapping.category else ""
        description_value = record.get(mapping.description, "") if mapping.description else ""

        return ParsedRow(
            row_number=row_number,
            date=txn_date,
            item_name=record[mapping.item],
            total_cents=total_cents,
            gst_cents=gst_cents,
            biz_percent=biz_percent,
            category_name=category_value or None,
            description=description_value or None,
        )

    def is_summary_row(self, item: str, total: str) -> bool:
        """Check whether a row looks like a spreadsheet "Total" line."""
        return (
            "total" in item.lower()
            or "total" in total.lower()
            or item == ""
            or total == ""
        )

    def get_mapping(self, source: str) -> Optional[ColumnMapping]:
        """Get the preset column mapping for a named source."""
        return EXPENSE_COLUMN_MAPPINGS.get(source.lower())

    def detect_mapping(self, headers: list[str]) -> Optional[ColumnMapping]:
        """Auto-detect a column mapping from CSV headers.

        Returns:
            Mapping, or None if the date, item and total columns cannot all be
            located
        """
        date_col = _find_header(headers, DATE_HEADERS)
        item_col = _find_header(headers, ITEM_HEADERS)
        total_col = _find_header(headers, TOTAL_HEADERS)

        if date_col is None or item_col is None or total_col is None:
            return None

        return ColumnMapping(
            date=date_col,
            item=item_col,
            total=total_col,
            gst=_find_header(headers, GST_HEADERS),
            biz_percent=_find_header(headers, BIZ_PERCENT_HEADERS),
            category=_find_header(headers, CATEGORY_HEADERS),
        )
