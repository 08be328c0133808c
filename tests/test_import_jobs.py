"""Tests for the import job ledger."""

import pytest

from basbook.domain.csv_types import ImportOptions, IncomeImportOptions
from basbook.domain.entities import ImportKind, ImportSource, ImportStatus
from basbook.domain.errors import ConflictError, NotFoundError
from basbook.domain.import_jobs import generate_filename, map_source

EXPENSES = (
    "Date,Item,Total,GST,Biz%,Category\n"
    "2025-07-15,VentraIP,$110.00,,100,\n"
    "2025-07-16,GitHub,$22.00,,100,\n"
)


@pytest.mark.parametrize(
    "source,expected",
    [
        ("custom", ImportSource.MANUAL),
        ("manual", ImportSource.MANUAL),
        ("CommBank", ImportSource.COMMBANK),
        ("amex", ImportSource.OTHER),
        ("nab", ImportSource.NAB),
        ("westpac", ImportSource.WESTPAC),
        ("anz", ImportSource.ANZ),
        ("somebank", ImportSource.OTHER),
        (None, ImportSource.OTHER),
    ],
)
def test_map_source(source, expected):
    """CSV presets are classified into recorded sources."""
    assert map_source(source) == expected


def test_generate_filename():
    """Generated names carry the kind and a timestamp."""
    assert generate_filename(ImportKind.EXPENSE).startswith("import-")
    assert generate_filename(ImportKind.INCOME).startswith("income-import-")
    assert generate_filename(ImportKind.EXPENSE).endswith(".csv")


class TestJobLifecycle:
    """Tests for creating and finishing jobs."""

    def test_create_job(self, job_service):
        """New jobs are pending."""
        job_id = job_service.create_job(ImportKind.EXPENSE, "nab", 5, filename="july.csv")

        job = job_service.get_job(job_id)
        assert job.status == ImportStatus.PENDING
        assert job.source == ImportSource.NAB
        assert job.total_rows == 5
        assert job.filename == "july.csv"
        assert job.completed_at is None

    def test_get_missing_job(self, job_service):
        """Unknown job IDs raise NotFoundError."""
        with pytest.raises(NotFoundError):
            job_service.get_job(999)

    @pytest.mark.parametrize(
        "total,success,failed,expected",
        [
            (3, 2, 1, ImportStatus.COMPLETED),
            (3, 3, 0, ImportStatus.COMPLETED),
            (3, 0, 3, ImportStatus.FAILED),
            (0, 0, 0, ImportStatus.COMPLETED),
        ],
    )
    def test_finalize(self, job_service, total, success, failed, expected):
        """Only complete failure of a non-empty import fails the job."""
        job_id = job_service.create_job(ImportKind.EXPENSE, "custom", total)

        status = job_service.finalize(
            job_id, total_rows=total, success_count=success, failed_count=failed, duplicate_count=0
        )

        job = job_service.get_job(job_id)
        assert status == expected
        assert job.status == expected
        assert job.imported_count == success
        assert job.error_count == failed
        assert job.completed_at is not None

    def test_mark_failed(self, job_service):
        """Failed jobs keep the error message."""
        job_id = job_service.create_job(ImportKind.INCOME, "custom", 1)

        job_service.mark_failed(job_id, "database is locked")

        job = job_service.get_job(job_id)
        assert job.status == ImportStatus.FAILED
        assert job.error_message == "database is locked"

    def test_list_jobs_newest_first(self, job_service):
        """Jobs list newest first with paging."""
        ids = [job_service.create_job(ImportKind.EXPENSE, "custom", n) for n in range(3)]

        assert [j.id for j in job_service.list_jobs()] == list(reversed(ids))
        assert [j.id for j in job_service.list_jobs(limit=1, offset=1)] == [ids[1]]


class TestRollback:
    """Tests for rolling back and deleting jobs."""

    def test_rollback_deletes_records(self, seeded_db, expense_import_service, job_service):
        """Rollback removes every expense the job created."""
        result = expense_import_service.import_from_string(EXPENSES, ImportOptions(source="custom"))
        assert seeded_db.count_expenses() == 2

        deleted = job_service.rollback(result.import_job_id)

        assert deleted == 2
        assert seeded_db.count_expenses() == 0
        assert job_service.get_job(result.import_job_id).status == ImportStatus.ROLLED_BACK

    def test_rollback_only_touches_its_job(self, seeded_db, expense_import_service, job_service):
        """Records from other jobs survive."""
        first = expense_import_service.import_from_string(EXPENSES, ImportOptions(source="custom"))
        other = (
            "Date,Item,Total,GST,Biz%,Category\n"
            "2025-08-01,VentraIP,$55.00,,100,\n"
        )
        expense_import_service.import_from_string(other, ImportOptions(source="custom"))

        job_service.rollback(first.import_job_id)

        assert seeded_db.count_expenses() == 1

    def test_rollback_twice_raises(self, seeded_db, expense_import_service, job_service):
        """A second rollback is an error, not a no-op."""
        result = expense_import_service.import_from_string(EXPENSES, ImportOptions(source="custom"))
        job_service.rollback(result.import_job_id)

        with pytest.raises(ConflictError) as excinfo:
            job_service.rollback(result.import_job_id)
        assert "already been rolled back" in str(excinfo.value)

    def test_rollback_income_job(self, sample_clients, income_import_service, job_service, temp_db):
        """Income imports can be rolled back too."""
        result = income_import_service.import_from_string(
            "Client,Invoice #,Subtotal,GST,Total\nAida Tomescu,1,$560,$56,$616.00\n",
            IncomeImportOptions(),
        )

        assert job_service.rollback(result.import_job_id) == 1
        assert temp_db.count_incomes() == 0

    def test_rollback_missing_job(self, job_service):
        """Rolling back an unknown job raises NotFoundError."""
        with pytest.raises(NotFoundError):
            job_service.rollback(42)

    def test_delete_blocked_while_records_exist(self, seeded_db, expense_import_service, job_service):
        """Jobs that still own records cannot be deleted."""
        result = expense_import_service.import_from_string(EXPENSES, ImportOptions(source="custom"))

        with pytest.raises(ConflictError) as excinfo:
            job_service.delete_job(result.import_job_id)
        assert "2 associated records" in str(excinfo.value)

    def test_delete_after_rollback(self, seeded_db, expense_import_service, job_service):
        """Rolled-back jobs can be deleted."""
        result = expense_import_service.import_from_string(EXPENSES, ImportOptions(source="custom"))
        job_service.rollback(result.import_job_id)

        job_service.delete_job(result.import_job_id)

        with pytest.raises(NotFoundError):
            job_service.get_job(result.import_job_id)

    def test_statistics(self, seeded_db, expense_import_service, job_service):
        """Statistics sum the records a job created."""
        result = expense_import_service.import_from_string(EXPENSES, ImportOptions(source="custom"))

        stats = job_service.get_statistics(result.import_job_id)

        # VentraIP is domestic (GST backed out), GitHub is international
        assert stats == {
            "record_count": 2,
            "total_amount_cents": 13200,
            "total_gst_cents": 1000,
        }
