"""Import job ledger service.

Every CSV import creates one job row. Records created by the import point
back at it, which is what makes a whole batch removable with ``rollback``.
"""

import logging
import time
from datetime import datetime, UTC
from typing import Any, Optional

from basbook.database.base import Database
from basbook.domain.entities import ImportJob, ImportKind, ImportSource, ImportStatus
from basbook.domain.errors import (
    ConflictError,
    NotFoundError,
    import_job_already_rolled_back,
    import_job_has_records,
    import_job_not_found,
)

logger = logging.getLogger(__name__)

# CSV preset name -> recorded import source
_SOURCE_MAP = {
    "custom": ImportSource.MANUAL,
    "manual": ImportSource.MANUAL,
    "commbank": ImportSource.COMMBANK,
    "amex": ImportSource.OTHER,
    "nab": ImportSource.NAB,
    "westpac": ImportSource.WESTPAC,
    "anz": ImportSource.ANZ,
}


def map_source(source: Optional[str]) -> ImportSource:
    """Classify a CSV preset name as the source recorded on the job."""
    if source is None:
        return ImportSource.OTHER
    return _SOURCE_MAP.get(source.lower(), ImportSource.OTHER)


def generate_filename(kind: ImportKind) -> str:
    """Name used for a job when the caller didn't supply a filename."""
    millis = int(time.time() * 1000)
    if kind == ImportKind.INCOME:
        return f"income-import-{millis}.csv"
    return f"import-{millis}.csv"


class ImportJobService:
    """Service for the import job ledger."""

    def __init__(self, db: Database):
        """Initialize import job service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_job(
        self,
        kind: ImportKind,
        source: Optional[str],
        total_rows: int,
        filename: Optional[str] = None,
    ) -> int:
        """Create a pending import job.

        Args:
            kind: Whether the job creates expenses or incomes
            source: CSV preset name, classified with ``map_source``
            total_rows: Number of parsed rows the import will process
            filename: Original filename (generated when None)

        Returns:
            Import job ID
        """
        job_id = self.db.create_import_job(
            kind=kind,
            filename=filename or generate_filename(kind),
            source=map_source(source),
            total_rows=total_rows,
        )
        logger.info("Created %s import job %d (%d rows)", kind.value, job_id, total_rows)
        return job_id

    def get_job(self, job_id: int) -> ImportJob:
        """Get an import job.

        Raises:
            NotFoundError: If the job doesn't exist
        """
        job = self.db.get_import_job(job_id)
        if job is None:
            raise NotFoundError(import_job_not_found(job_id))
        return job

    def list_jobs(self, limit: int = 20, offset: int = 0) -> list[ImportJob]:
        """List import jobs, newest first."""
        return self.db.list_import_jobs(limit=limit, offset=offset)

    def mark_completed(
        self,
        job_id: int,
        imported_count: int,
        skipped_count: int,
        error_count: int,
        status: ImportStatus = ImportStatus.COMPLETED,
    ) -> None:
        """Write final counters and a terminal status."""
        self.db.update_import_job(
            job_id,
            status=status,
            imported_count=imported_count,
            skipped_count=skipped_count,
            error_count=error_count,
            completed_at=datetime.now(UTC),
        )

    def finalize(
        self,
        job_id: int,
        total_rows: int,
        success_count: int,
        failed_count: int,
        duplicate_count: int,
    ) -> ImportStatus:
        """Finalize a job from the outcome of its rows.

        The job fails only when rows were attempted and none succeeded.

        Returns:
            The status written
        """
        if success_count > 0 or total_rows == 0:
            status = ImportStatus.COMPLETED
        else:
            status = ImportStatus.FAILED

        self.mark_completed(
            job_id,
            imported_count=success_count,
            skipped_count=duplicate_count,
            error_count=failed_count,
            status=status,
        )
        return status

    def mark_failed(self, job_id: int, error_message: str) -> None:
        """Mark a job failed after a batch-fatal error."""
        self.db.update_import_job(
            job_id,
            status=ImportStatus.FAILED,
            completed_at=datetime.now(UTC),
            error_message=error_message,
        )
        logger.warning("Import job %d failed: %s", job_id, error_message)

    def rollback(self, job_id: int) -> int:
        """Delete every record the job created and mark it rolled back.

        Returns:
            Number of deleted records

        Raises:
            NotFoundError: If the job doesn't exist
            ConflictError: If the job was already rolled back
        """
        job = self.get_job(job_id)
        if job.status == ImportStatus.ROLLED_BACK:
            raise ConflictError(import_job_already_rolled_back(job_id))

        deleted = self.db.rollback_import_job(job_id)
        logger.info("Rolled back import job %d (%d records deleted)", job_id, deleted)
        return deleted

    def delete_job(self, job_id: int) -> None:
        """Delete a job from the ledger.

        Raises:
            NotFoundError: If the job doesn't exist
            ConflictError: If records still reference the job
        """
        self.get_job(job_id)
        record_count = self.db.get_import_job_statistics(job_id)["record_count"]
        if record_count > 0:
            raise ConflictError(import_job_has_records(job_id, record_count))
        self.db.delete_import_job(job_id)

    def get_statistics(self, job_id: int) -> dict[str, Any]:
        """Get record count and amount/GST sums of the records a job created.

        Raises:
            NotFoundError: If the job doesn't exist
        """
        self.get_job(job_id)
        return self.db.get_import_job_statistics(job_id)
