"""Income-shaped CSV parsing (Client, Invoice #, Subtotal, GST, Total)."""

import logging
from datetime import date
from typing import Optional

from basbook.domain.csv_parser import decode_csv_bytes, read_csv_records
from basbook.domain.csv_types import INCOME_COLUMN_MAPPINGS, IncomeColumnMapping, ParsedIncomeRow
from basbook.domain.errors import ValidationError, no_valid_income_rows
from basbook.utils.amount_parser import parse_simple_cents
from basbook.utils.date_parser import parse_invoice_date
from basbook.utils.money import add_amounts

logger = logging.getLogger(__name__)


class IncomeCSVParser:
    """Parses invoice spreadsheets into ``ParsedIncomeRow`` objects.

    Unlike the expense parser, rows are only dropped when the client cell is
    empty. Garbled amounts read as 0 and the row is still processed.
    """

    def parse_bytes(
        self, data: bytes, mapping: IncomeColumnMapping, default_date: Optional[date] = None
    ) -> list[ParsedIncomeRow]:
        """Parse raw uploaded bytes."""
        return self.parse(decode_csv_bytes(data), mapping, default_date)

    def parse(
        self,
        content: str,
        mapping: IncomeColumnMapping,
        default_date: Optional[date] = None,
    ) -> list[ParsedIncomeRow]:
        """Parse CSV content using an income column mapping.

        Args:
            content: CSV text including the header row
            mapping: Income column mapping
            default_date: Date for rows without a usable date (today if None)

        Returns:
            Parsed rows in file order. row_number is the spreadsheet line
            (the header is line 1).

        Raises:
            ValidationError: If no row has a client name
        """
        rows = []
        for index, record in enumerate(read_csv_records(content)):
            row_number = index + 2
            row = self._parse_row(record, mapping, row_number, default_date)
            if row is None:
                logger.warning("Row %d: empty client name, skipped", row_number)
                continue
            rows.append(row)

        if not rows:
            raise ValidationError(no_valid_income_rows())

        return rows

    def _parse_row(
        self,
        record: dict[str, str],
        mapping: IncomeColumnMapping,
        row_number: int,
        default_date: Optional[date],
    ) -> Optional[ParsedIncomeRow]:
        client_name = record.get(mapping.client, "")
        if not client_name:
            return None

        subtotal_cents = parse_simple_cents(record.get(mapping.subtotal))
        gst_cents = parse_simple_cents(record.get(mapping.gst))
        total_cents_from_csv = parse_simple_cents(record.get(mapping.total))

        # Subtotal + GST is authoritative; the CSV total is only checked
        calculated_total_cents = add_amounts(subtotal_cents, gst_cents)

        invoice_num = record.get(mapping.invoice_num, "") if mapping.invoice_num else ""
        description = record.get(mapping.description, "") if mapping.description else ""

        row_date = None
        if mapping.date:
            row_date = parse_invoice_date(record.get(mapping.date))
        if row_date is None:
            row_date = default_date or date.today()

        return ParsedIncomeRow(
            row_number=row_number,
            client_name=client_name,
            subtotal_cents=subtotal_cents,
            gst_cents=gst_cents,
            total_cents_from_csv=total_cents_from_csv,
            calculated_total_cents=calculated_total_cents,
            total_matches=total_cents_from_csv == calculated_total_cents,
            date=row_date,
            invoice_num=invoice_num or None,
            description=description or None,
        )

    def get_mapping(self, source: str) -> Optional[IncomeColumnMapping]:
        """Get the preset income column mapping for a named source."""
        return INCOME_COLUMN_MAPPINGS.get(source.lower())
