"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional, Any
from datetime import date, datetime

# Import entities directly to avoid circular import through domain/__init__.py
from basbook.domain.entities import (
    Category,
    Provider,
    Client,
    Expense,
    Income,
    ImportJob,
    ImportKind,
    ImportSource,
    ImportStatus,
    NewExpense,
    NewIncome,
)


class Database(ABC):
    """Abstract database interface for basbook."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Category operations
    @abstractmethod
    def create_category(
        self,
        name: str,
        bas_label: Optional[str] = None,
        is_deductible: bool = True,
        description: Optional[str] = None,
    ) -> int:
        """Create a new category. Returns category ID."""
        pass

    @abstractmethod
    def get_category(self, category_id: int) -> Optional[Category]:
        """Get category by ID."""
        pass

    @abstractmethod
    def get_category_by_name(self, name: str) -> Optional[Category]:
        """Get category by exact name."""
        pass

    @abstractmethod
    def list_categories(self) -> list[Category]:
        """List all categories in creation order."""
        pass

    # Provider operations
    @abstractmethod
    def create_provider(
        self,
        name: str,
        is_international: bool = False,
        default_category_id: Optional[int] = None,
        abn_arn: Optional[str] = None,
    ) -> int:
        """Create a new provider. Returns provider ID."""
        pass

    @abstractmethod
    def get_provider(self, provider_id: int) -> Optional[Provider]:
        """Get provider by ID."""
        pass

    @abstractmethod
    def get_provider_by_name(self, name: str) -> Optional[Provider]:
        """Get provider by exact name."""
        pass

    @abstractmethod
    def list_providers(self) -> list[Provider]:
        """List all providers."""
        pass

    # Client operations
    @abstractmethod
    def create_client(
        self, name: str, abn: Optional[str] = None, is_psi_eligible: bool = False
    ) -> int:
        """Create a new client. Returns client ID."""
        pass

    @abstractmethod
    def get_client(self, client_id: int) -> Optional[Client]:
        """Get client by ID."""
        pass

    @abstractmethod
    def get_client_by_name(self, name: str) -> Optional[Client]:
        """Get client by exact name."""
        pass

    @abstractmethod
    def list_clients(self) -> list[Client]:
        """List all clients."""
        pass

    # Expense operations
    @abstractmethod
    def expense_exists(self, expense_date: date, amount_cents: int, provider_id: int) -> bool:
        """Check if an expense with this date, amount and provider exists."""
        pass

    @abstractmethod
    def insert_expenses(self, expenses: list[NewExpense]) -> list[int]:
        """Insert expenses in one transaction. Returns new IDs.

        Raises:
            PersistenceError: If the write fails; nothing is committed
        """
        pass

    @abstractmethod
    def list_expenses(self, import_job_id: Optional[int] = None) -> list[Expense]:
        """List expenses, optionally only those created by one import job."""
        pass

    @abstractmethod
    def count_expenses(self) -> int:
        """Count all expenses."""
        pass

    # Income operations
    @abstractmethod
    def income_exists(self, income_date: date, total_cents: int, client_id: int) -> bool:
        """Check if an income with this date, total and client exists."""
        pass

    @abstractmethod
    def income_invoice_exists(self, client_id: int, invoice_num: str) -> bool:
        """Check if this client already has an income with this invoice number."""
        pass

    @abstractmethod
    def insert_incomes(self, incomes: list[NewIncome]) -> list[int]:
        """Insert incomes in one transaction. Returns new IDs.

        Raises:
            PersistenceError: If the write fails; nothing is committed
        """
        pass

    @abstractmethod
    def list_incomes(self, import_job_id: Optional[int] = None) -> list[Income]:
        """List incomes, optionally only those created by one import job."""
        pass

    @abstractmethod
    def count_incomes(self) -> int:
        """Count all incomes."""
        pass

    # Import job operations
    @abstractmethod
    def create_import_job(
        self, kind: ImportKind, filename: str, source: ImportSource, total_rows: int
    ) -> int:
        """Create a pending import job. Returns job ID."""
        pass

    @abstractmethod
    def get_import_job(self, job_id: int) -> Optional[ImportJob]:
        """Get import job by ID."""
        pass

    @abstractmethod
    def list_import_jobs(self, limit: int = 20, offset: int = 0) -> list[ImportJob]:
        """List import jobs, newest first."""
        pass

    @abstractmethod
    def update_import_job(
        self,
        job_id: int,
        status: ImportStatus,
        imported_count: Optional[int] = None,
        skipped_count: Optional[int] = None,
        error_count: Optional[int] = None,
        completed_at: Optional[datetime] = None,
        error_message: Optional[str] = None,
    ) -> None:
        """Update status and counters of an import job.

        Only arguments that are not None are written.
        """
        pass

    @abstractmethod
    def delete_import_job(self, job_id: int) -> None:
        """Delete an import job row."""
        pass

    @abstractmethod
    def rollback_import_job(self, job_id: int) -> int:
        """Delete every record created by a job and mark it rolled back.

        Both happen in one transaction.

        Returns:
            Number of expenses and incomes deleted
        """
        pass

    @abstractmethod
    def get_import_job_statistics(self, job_id: int) -> dict[str, Any]:
        """Get record_count, total_amount_cents and total_gst_cents for a job."""
        pass
