"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so the domain stays unaware of how
enums and amounts are stored.
"""

from basbook.domain import entities as domain
from basbook.database.models import (
    Category as ORMCategory,
    Provider as ORMProvider,
    Client as ORMClient,
    Expense as ORMExpense,
    Income as ORMIncome,
    ImportJob as ORMImportJob,
)


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    return domain.Category(
        id=orm_category.id,
        name=orm_category.name,
        bas_label=orm_category.bas_label,
        is_deductible=orm_category.is_deductible,
        description=orm_category.description,
        created_at=orm_category.created_at,
    )


def provider_to_domain(orm_provider: ORMProvider) -> domain.Provider:
    """Convert SQLAlchemy Provider model to domain Provider entity."""
    return domain.Provider(
        id=orm_provider.id,
        name=orm_provider.name,
        is_international=orm_provider.is_international,
        default_category_id=orm_provider.default_category_id,
        abn_arn=orm_provider.abn_arn,
        created_at=orm_provider.created_at,
    )


def client_to_domain(orm_client: ORMClient) -> domain.Client:
    """Convert SQLAlchemy Client model to domain Client entity."""
    return domain.Client(
        id=orm_client.id,
        name=orm_client.name,
        abn=orm_client.abn,
        is_psi_eligible=orm_client.is_psi_eligible,
        created_at=orm_client.created_at,
    )


def expense_to_domain(orm_expense: ORMExpense) -> domain.Expense:
    """Convert SQLAlchemy Expense model to domain Expense entity."""
    return domain.Expense(
        id=orm_expense.id,
        date=orm_expense.date,
        description=orm_expense.description,
        amount_cents=orm_expense.amount_cents,
        gst_cents=orm_expense.gst_cents,
        biz_percent=orm_expense.biz_percent,
        currency=orm_expense.currency,
        provider_id=orm_expense.provider_id,
        category_id=orm_expense.category_id,
        import_job_id=orm_expense.import_job_id,
        created_at=orm_expense.created_at,
    )


def income_to_domain(orm_income: ORMIncome) -> domain.Income:
    """Convert SQLAlchemy Income model to domain Income entity."""
    return domain.Income(
        id=orm_income.id,
        date=orm_income.date,
        invoice_num=orm_income.invoice_num,
        description=orm_income.description,
        subtotal_cents=orm_income.subtotal_cents,
        gst_cents=orm_income.gst_cents,
        total_cents=orm_income.total_cents,
        is_paid=orm_income.is_paid,
        client_id=orm_income.client_id,
        import_job_id=orm_income.import_job_id,
        created_at=orm_income.created_at,
    )


def import_job_to_domain(orm_job: ORMImportJob) -> domain.ImportJob:
    """Convert SQLAlchemy ImportJob model to domain ImportJob entity."""
    return domain.ImportJob(
        id=orm_job.id,
        kind=domain.ImportKind(orm_job.kind),
        filename=orm_job.filename,
        source=domain.ImportSource(orm_job.source),
        status=domain.ImportStatus(orm_job.status),
        total_rows=orm_job.total_rows,
        imported_count=orm_job.imported_count,
        skipped_count=orm_job.skipped_count,
        error_count=orm_job.error_count,
        created_at=orm_job.created_at,
        completed_at=orm_job.completed_at,
        error_message=orm_job.error_message,
    )


def new_expense_to_orm(expense: domain.NewExpense) -> ORMExpense:
    """Build an unsaved SQLAlchemy Expense from an import candidate."""
    return ORMExpense(
        date=expense.date,
        description=expense.description,
        amount_cents=expense.amount_cents,
        gst_cents=expense.gst_cents,
        biz_percent=expense.biz_percent,
        provider_id=expense.provider_id,
        category_id=expense.category_id,
        import_job_id=expense.import_job_id,
    )


def new_income_to_orm(income: domain.NewIncome) -> ORMIncome:
    """Build an unsaved SQLAlchemy Income from an import candidate."""
    return ORMIncome(
        date=income.date,
        invoice_num=income.invoice_num,
        description=income.description,
        subtotal_cents=income.subtotal_cents,
        gst_cents=income.gst_cents,
        total_cents=income.total_cents,
        is_paid=income.is_paid,
        client_id=income.client_id,
        import_job_id=income.import_job_id,
    )
