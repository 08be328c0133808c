"""Value types shared by the CSV parsers, matchers and import services."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional

from basbook.domain.entities import NewExpense, NewIncome

DEFAULT_MATCH_THRESHOLD = 0.6


@dataclass(frozen=True)
class ColumnMapping:
    """Logical expense field -> literal CSV header name."""

    date: str
    item: str
    total: str
    gst: Optional[str] = None
    biz_percent: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class IncomeColumnMapping:
    """Logical income field -> literal CSV header name."""

    client: str
    subtotal: str
    gst: str
    total: str
    invoice_num: Optional[str] = None
    date: Optional[str] = None
    description: Optional[str] = None


_CUSTOM_EXPENSE_MAPPING = ColumnMapping(
    date="Date",
    item="Item",
    total="Total",
    gst="GST",
    biz_percent="Biz%",
    category="Category",
)

# Named presets. nab/westpac/anz exports have no dedicated preset and need an
# explicit mapping.
EXPENSE_COLUMN_MAPPINGS: dict[str, ColumnMapping] = {
    "custom": _CUSTOM_EXPENSE_MAPPING,
    "manual": _CUSTOM_EXPENSE_MAPPING,
    "commbank": ColumnMapping(
        date="Date",
        item="Description",
        total="Debit",
        description="Description",
    ),
    "amex": ColumnMapping(
        date="Date",
        item="Description",
        total="Amount",
        description="Description",
    ),
}

_CUSTOM_INCOME_MAPPING = IncomeColumnMapping(
    client="Client",
    invoice_num="Invoice #",
    subtotal="Subtotal",
    gst="GST",
    total="Total",
    date="Date",
    description="Description",
)

INCOME_COLUMN_MAPPINGS: dict[str, IncomeColumnMapping] = {
    "custom": _CUSTOM_INCOME_MAPPING,
    "manual": _CUSTOM_INCOME_MAPPING,
}

# Source name used to request header auto-detection instead of a preset.
AUTO_DETECT_SOURCE = "auto"


class MatchType(str, Enum):
    """How a free-text name was matched to a known name."""

    EXACT = "exact"
    ALIAS = "alias"
    CONTAINS = "contains"
    STARTS_WITH = "startsWith"
    PARTIAL = "partial"
    FUZZY = "fuzzy"


@dataclass(frozen=True)
class ProviderMatch:
    """Result of matching CSV item text against known provider names."""

    provider_name: str
    score: float
    match_type: MatchType


@dataclass(frozen=True)
class ClientMatch:
    """Result of matching CSV client text against known clients."""

    client_id: int
    client_name: str
    score: float
    match_type: MatchType


@dataclass(frozen=True)
class CachedClient:
    """Client prepared for in-memory matching."""

    id: int
    name: str
    normalized_name: str


@dataclass(frozen=True)
class ParsedRow:
    """Expense-shaped CSV row that survived parsing."""

    row_number: int
    date: date
    item_name: str
    total_cents: int
    gst_cents: int
    biz_percent: int
    category_name: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class ParsedIncomeRow:
    """Income-shaped CSV row that survived parsing."""

    row_number: int
    client_name: str
    subtotal_cents: int
    gst_cents: int
    total_cents_from_csv: int
    calculated_total_cents: int
    total_matches: bool
    date: date
    invoice_num: Optional[str] = None
    description: Optional[str] = None


@dataclass
class ExpenseRowResult:
    """Outcome of processing one expense row."""

    row_number: int
    success: bool
    provider_match: Optional[ProviderMatch]
    error: Optional[str] = None
    is_duplicate: bool = False
    category_name: Optional[str] = None
    expense_data: Optional[NewExpense] = None


@dataclass
class IncomeRowResult:
    """Outcome of processing one income row."""

    row_number: int
    success: bool
    client_match: Optional[ClientMatch]
    error: Optional[str] = None
    warning: Optional[str] = None
    is_duplicate: bool = False
    income_data: Optional[NewIncome] = None


@dataclass(frozen=True)
class ImportOptions:
    """Options for an expense import.

    An explicit ``mapping`` wins over ``source``.
    """

    source: Optional[str] = None
    mapping: Optional[ColumnMapping] = None
    match_threshold: float = DEFAULT_MATCH_THRESHOLD
    skip_duplicates: bool = True
    dry_run: bool = False
    filename: Optional[str] = None


@dataclass(frozen=True)
class IncomeImportOptions:
    """Options for an income import."""

    source: Optional[str] = None
    mapping: Optional[IncomeColumnMapping] = None
    match_threshold: float = DEFAULT_MATCH_THRESHOLD
    skip_duplicates: bool = True
    dry_run: bool = False
    filename: Optional[str] = None
    default_date: Optional[date] = None
    mark_as_paid: bool = False


@dataclass
class ExpenseImportResult:
    """Summary of an expense import call."""

    import_job_id: int
    total_rows: int
    success_count: int
    failed_count: int
    duplicate_count: int
    total_amount_cents: int
    total_gst_cents: int
    processing_time_ms: int
    rows: list[ExpenseRowResult] = field(default_factory=list)


@dataclass
class IncomeImportResult:
    """Summary of an income import call."""

    import_job_id: int
    total_rows: int
    success_count: int
    failed_count: int
    duplicate_count: int
    warning_count: int
    total_subtotal_cents: int
    total_gst_cents: int
    total_amount_cents: int
    processing_time_ms: int
    rows: list[IncomeRowResult] = field(default_factory=list)
