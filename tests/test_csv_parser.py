"""Tests for expense CSV parsing."""

import pytest
from datetime import date

from basbook.domain.csv_parser import (
    ExpenseCSVParser,
    detect_delimiter,
    extract_headers,
    read_csv_records,
)
from basbook.domain.csv_types import EXPENSE_COLUMN_MAPPINGS

CUSTOM = EXPENSE_COLUMN_MAPPINGS["custom"]


@pytest.fixture
def parser():
    """Create an ExpenseCSVParser."""
    return ExpenseCSVParser()


class TestReadRecords:
    """Tests for low-level CSV reading."""

    def test_detect_delimiter(self):
        """Delimiter comes from the header line."""
        assert detect_delimiter("Date,Item,Total\n") == ","
        assert detect_delimiter("Date;Item;Total\n") == ";"
        assert detect_delimiter("Date\tItem\tTotal\n") == "\t"

    def test_single_column_defaults_to_comma(self):
        """A header without any delimiter falls back to a comma."""
        assert detect_delimiter("Date\n2025-07-15\n") == ","

    def test_trims_headers_and_values(self):
        """Header names and cell values are stripped."""
        records = read_csv_records(" Date , Item \n 2025-07-15 , GitHub \n")
        assert records == [{"Date": "2025-07-15", "Item": "GitHub"}]

    def test_short_and_long_rows(self):
        """Missing cells read as empty and surplus cells are ignored."""
        records = read_csv_records("A,B\n1\n1,2,3\n")
        assert records == [{"A": "1", "B": ""}, {"A": "1", "B": "2"}]

    def test_empty_content(self):
        """Empty content yields no records and no headers."""
        assert read_csv_records("") == []
        assert extract_headers("") == []

    def test_extract_headers_strips_bom(self):
        """A leading byte order mark is not part of the first header."""
        assert extract_headers("\ufeffDate,Item,Total\n") == ["Date", "Item", "Total"]


class TestExpenseCSVParser:
    """Tests for ExpenseCSVParser.parse."""

    def test_parses_custom_row(self, parser):
        """A complete custom row parses into cents and percentages."""
        content = "Date,Item,Total,GST,Biz%,Category\n2025-07-15,iiNet,$110.00,$0.00,100,Internet\n"

        rows = parser.parse(content, CUSTOM)

        assert len(rows) == 1
        row = rows[0]
        assert row.row_number == 1
        assert row.date == date(2025, 7, 15)
        assert row.item_name == "iiNet"
        assert row.total_cents == 11000
        assert row.gst_cents == 0
        assert row.biz_percent == 100
        assert row.category_name == "Internet"
        assert row.description is None

    def test_header_only(self, parser):
        """A header without rows parses to nothing."""
        assert parser.parse("Date,Item,Total,GST,Biz%,Category\n", CUSTOM) == []

    def test_drops_bad_rows_silently(self, parser):
        """Incomplete, unparseable, non-positive and summary rows are dropped."""
        content = (
            "Date,Item,Total,GST,Biz%,Category\n"
            "2025-07-01,GitHub,$10.00,,50%,\n"
            "2025-07-02,,$5.00,,,\n"
            "31/02/2025,Warp,$5.00,,,\n"
            "2025-07-03,Refund,-$5.00,,,\n"
            "2025-07-04,Total,$20.00,,,\n"
            '03/07/2025,NordVPN,"$1,234.50",$0.00,0.5,VPN\n'
        )

        rows = parser.parse(content, CUSTOM)

        assert [r.row_number for r in rows] == [1, 6]
        assert rows[0].gst_cents == 0
        assert rows[0].biz_percent == 50
        assert rows[0].category_name is None
        assert rows[1].date == date(2025, 7, 3)
        assert rows[1].total_cents == 123450
        assert rows[1].biz_percent == 50

    def test_zero_total_dropped(self, parser):
        """Zero totals are not imported."""
        content = "Date,Item,Total\n2025-07-01,GitHub,$0.00\n"
        assert parser.parse(content, CUSTOM) == []

    def test_semicolon_file(self, parser):
        """Semicolon-delimited exports parse the same way."""
        content = "Date;Item;Total\n2025-07-15;GitHub;12.50\n"
        rows = parser.parse(content, CUSTOM)
        assert rows[0].total_cents == 1250

    def test_parse_bytes_with_bom(self, parser):
        """Uploaded bytes may start with a UTF-8 byte order mark."""
        data = "\ufeffDate,Item,Total\n2025-07-15,GitHub,$12.50\n".encode("utf-8")
        rows = parser.parse_bytes(data, CUSTOM)
        assert rows[0].item_name == "GitHub"

    def test_commbank_preset(self, parser):
        """The CommBank preset reads Debit as the total and keeps the description."""
        mapping = parser.get_mapping("CommBank")
        content = "Date,Description,Debit\n15/07/2025,GITHUB INC,$15.00\n"

        rows = parser.parse(content, mapping)

        assert rows[0].item_name == "GITHUB INC"
        assert rows[0].description == "GITHUB INC"
        assert rows[0].total_cents == 1500

    def test_unknown_preset(self, parser):
        """Banks without a preset have no mapping."""
        assert parser.get_mapping("nab") is None

    def test_is_summary_row(self, parser):
        """Rows mentioning total are summaries."""
        assert parser.is_summary_row("Subtotal", "$5.00")
        assert parser.is_summary_row("GitHub", "TOTAL")
        assert parser.is_summary_row("", "$5.00")
        assert not parser.is_summary_row("GitHub", "$5.00")


class TestDetectMapping:
    """Tests for header auto-detection."""

    def test_detects_synonyms(self, parser):
        """Common header names are recognized case-insensitively."""
        mapping = parser.detect_mapping(["Transaction Date", "Merchant", "AMOUNT", "Tax", "Business Use"])

        assert mapping.date == "Transaction Date"
        assert mapping.item == "Merchant"
        assert mapping.total == "AMOUNT"
        assert mapping.gst == "Tax"
        assert mapping.biz_percent == "Business Use"
        assert mapping.category is None

    def test_missing_required_column(self, parser):
        """Without date, item and total there is no mapping."""
        assert parser.detect_mapping(["Date", "Merchant"]) is None
        assert parser.detect_mapping([]) is None
