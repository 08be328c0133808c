"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic (a bad request)."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations or repeated rollback."""


class PersistenceError(DomainError):
    """A database write failed and was rolled back."""


def import_job_not_found(job_id: int) -> str:
    """Return message for missing import job."""
    return f"Import job {job_id} not found"


def import_job_already_rolled_back(job_id: int) -> str:
    """Return message for a second rollback of the same job."""
    return f"Import job {job_id} has already been rolled back"


def import_job_has_records(job_id: int, record_count: int) -> str:
    """Return message when deleting a job that still owns records."""
    return (
        f"Cannot delete import job {job_id} with {record_count} "
        f"associated record{'s' if record_count != 1 else ''}. Rollback first."
    )


def unknown_import_source(source: str | None) -> str:
    """Return message when no column mapping can be resolved."""
    if source is None:
        return "No column mapping provided and no source given"
    return f"No column mapping provided and source '{source}' is not a known format"


def no_valid_income_rows() -> str:
    """Return message for an income CSV without usable rows."""
    return "CSV file contains no valid data rows"


def duplicate_name(kind: str, name: str) -> str:
    """Return message for a reference-data name that already exists."""
    return f"{kind} with name '{name}' already exists"


def invalid_match_threshold(threshold: float) -> str:
    """Return message for a match threshold outside 0..1."""
    return f"Match threshold must be between 0 and 1, got {threshold}"
