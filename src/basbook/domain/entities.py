"""Domain model entities for basbook.

These are pure data classes representing business concepts, independent of
database schema. Amounts are always integer cents.
"""

from dataclasses import dataclass
from datetime import datetime, date
from enum import Enum
from typing import Optional


class ImportSource(str, Enum):
    """Bank or origin of an imported CSV file."""

    COMMBANK = "commbank"
    NAB = "nab"
    WESTPAC = "westpac"
    ANZ = "anz"
    MANUAL = "manual"
    OTHER = "other"


class ImportStatus(str, Enum):
    """Lifecycle of an import job."""

    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    ROLLED_BACK = "rolled_back"


class ImportKind(str, Enum):
    """Which kind of record an import job created."""

    EXPENSE = "expense"
    INCOME = "income"


@dataclass(frozen=True)
class Category:
    """Expense category domain entity."""

    id: int
    name: str
    bas_label: Optional[str]
    is_deductible: bool
    description: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class Provider:
    """Vendor/supplier domain entity."""

    id: int
    name: str
    is_international: bool
    default_category_id: Optional[int]
    abn_arn: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class Client:
    """Client (income payer) domain entity."""

    id: int
    name: str
    abn: Optional[str]
    is_psi_eligible: bool
    created_at: datetime


@dataclass(frozen=True)
class Expense:
    """Expense domain entity.

    amount_cents and gst_cents are the full GST-inclusive figures; biz_percent
    is applied by reporting, never at import time.
    """

    id: int
    date: date
    description: Optional[str]
    amount_cents: int
    gst_cents: int
    biz_percent: int
    currency: str
    provider_id: int
    category_id: int
    import_job_id: Optional[int]
    created_at: datetime


@dataclass(frozen=True)
class Income:
    """Income (invoice) domain entity."""

    id: int
    date: date
    invoice_num: Optional[str]
    description: Optional[str]
    subtotal_cents: int
    gst_cents: int
    total_cents: int
    is_paid: bool
    client_id: int
    import_job_id: Optional[int]
    created_at: datetime


@dataclass(frozen=True)
class ImportJob:
    """Ledger entry for one CSV import batch."""

    id: int
    kind: ImportKind
    filename: str
    source: ImportSource
    status: ImportStatus
    total_rows: int
    imported_count: int
    skipped_count: int
    error_count: int
    created_at: datetime
    completed_at: Optional[datetime] = None
    error_message: Optional[str] = None


@dataclass(frozen=True)
class NewExpense:
    """Expense to be created by an import, before it has an ID."""

    date: date
    amount_cents: int
    gst_cents: int
    biz_percent: int
    provider_id: int
    category_id: int
    description: Optional[str]
    import_job_id: Optional[int]


@dataclass(frozen=True)
class NewIncome:
    """Income to be created by an import, before it has an ID."""

    date: date
    client_id: int
    invoice_num: Optional[str]
    description: Optional[str]
    subtotal_cents: int
    gst_cents: int
    total_cents: int
    is_paid: bool
    import_job_id: Optional[int]
