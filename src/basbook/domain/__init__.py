"""Domain layer for basbook application."""

__all__ = [
    "CategoryService",
    "ProviderService",
    "ClientService",
    "ExpenseImportService",
    "IncomeImportService",
    "ImportJobService",
]

_SERVICES = {
    "CategoryService": "basbook.domain.category",
    "ProviderService": "basbook.domain.provider",
    "ClientService": "basbook.domain.client",
    "ExpenseImportService": "basbook.domain.csv_import",
    "IncomeImportService": "basbook.domain.income_import",
    "ImportJobService": "basbook.domain.import_jobs",
}


# Services import the database layer, which imports domain entities; load
# them lazily so that importing basbook.database first does not cycle back here
def __getattr__(name):
    if name in _SERVICES:
        from importlib import import_module
        return getattr(import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
