"""Tests for database mappers."""

from datetime import datetime, date, UTC

from basbook.database.models import (
    Category as ORMCategory,
    Client as ORMClient,
    Expense as ORMExpense,
    ImportJob as ORMImportJob,
    Income as ORMIncome,
    Provider as ORMProvider,
)
from basbook.database.mappers import (
    category_to_domain,
    client_to_domain,
    expense_to_domain,
    import_job_to_domain,
    income_to_domain,
    new_expense_to_orm,
    provider_to_domain,
)
from basbook.domain.entities import (
    Category,
    Expense,
    ImportJob,
    ImportKind,
    ImportSource,
    ImportStatus,
    NewExpense,
)


class TestReferenceMappers:
    """Tests for category, provider and client mappers."""

    def test_category_to_domain(self):
        """Test converting ORM Category to domain Category."""
        orm_category = ORMCategory(
            id=1,
            name="Capital Purchases",
            bas_label="G10",
            is_deductible=True,
            description="Capital acquisitions over $1,000",
            created_at=datetime.now(UTC),
        )
        category = category_to_domain(orm_category)

        assert isinstance(category, Category)
        assert category.bas_label == "G10"
        assert category.created_at == orm_category.created_at

    def test_provider_to_domain(self):
        """Test converting ORM Provider to domain Provider."""
        orm_provider = ORMProvider(
            id=2,
            name="VentraIP",
            is_international=False,
            default_category_id=1,
            abn_arn="93166330331",
            created_at=datetime.now(UTC),
        )
        provider = provider_to_domain(orm_provider)

        assert provider.name == "VentraIP"
        assert provider.is_international is False
        assert provider.default_category_id == 1
        assert provider.abn_arn == "93166330331"

    def test_client_to_domain(self):
        """Test converting ORM Client to domain Client."""
        orm_client = ORMClient(
            id=3, name="Aida Tomescu", abn=None, is_psi_eligible=True, created_at=datetime.now(UTC)
        )
        client = client_to_domain(orm_client)

        assert client.name == "Aida Tomescu"
        assert client.abn is None
        assert client.is_psi_eligible is True


class TestRecordMappers:
    """Tests for expense, income and import job mappers."""

    def test_expense_to_domain(self):
        """Test converting ORM Expense to domain Expense."""
        orm_expense = ORMExpense(
            id=10,
            date=date(2025, 7, 15),
            description="iiNet broadband",
            amount_cents=8999,
            gst_cents=818,
            biz_percent=50,
            currency="AUD",
            provider_id=2,
            category_id=3,
            import_job_id=7,
            created_at=datetime.now(UTC),
        )
        expense = expense_to_domain(orm_expense)

        assert isinstance(expense, Expense)
        assert expense.amount_cents == 8999
        assert expense.biz_percent == 50
        assert expense.import_job_id == 7

    def test_income_to_domain(self):
        """Test converting ORM Income to domain Income."""
        orm_income = ORMIncome(
            id=11,
            date=date(2025, 7, 31),
            invoice_num="1",
            description=None,
            subtotal_cents=56000,
            gst_cents=5600,
            total_cents=61600,
            is_paid=True,
            client_id=3,
            import_job_id=None,
            created_at=datetime.now(UTC),
        )
        income = income_to_domain(orm_income)

        assert income.total_cents == 61600
        assert income.is_paid is True
        assert income.import_job_id is None

    def test_import_job_enums(self):
        """Stored strings come back as enums."""
        completed = datetime.now(UTC)
        orm_job = ORMImportJob(
            id=4,
            kind="income",
            filename="income-import-1.csv",
            source="manual",
            status="rolled_back",
            total_rows=2,
            imported_count=2,
            skipped_count=0,
            error_count=0,
            created_at=completed,
            completed_at=completed,
            error_message=None,
        )
        job = import_job_to_domain(orm_job)

        assert isinstance(job, ImportJob)
        assert job.kind is ImportKind.INCOME
        assert job.source is ImportSource.MANUAL
        assert job.status is ImportStatus.ROLLED_BACK
        assert job.completed_at == completed

    def test_new_expense_to_orm(self):
        """Import candidates become unsaved ORM rows."""
        new_expense = NewExpense(
            date=date(2025, 7, 15),
            amount_cents=2200,
            gst_cents=0,
            biz_percent=100,
            provider_id=1,
            category_id=2,
            description="GitHub",
            import_job_id=9,
        )
        orm_expense = new_expense_to_orm(new_expense)

        assert orm_expense.id is None
        assert orm_expense.amount_cents == 2200
        assert orm_expense.import_job_id == 9
