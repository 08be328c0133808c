"""Shared pytest fixtures for basbook tests."""

import tempfile
import os
import pytest

from basbook.database.factories import create_sqlite_database
from basbook.domain.category import CategoryService
from basbook.domain.client import ClientService
from basbook.domain.csv_import import ExpenseImportService
from basbook.domain.import_jobs import ImportJobService
from basbook.domain.income_import import IncomeImportService
from basbook.domain.provider import ProviderService
from basbook.domain.seed import seed_categories, seed_providers


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for CLI tests that open their own connection
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def category_service(temp_db):
    """Create a CategoryService with a temporary database."""
    return CategoryService(temp_db)


@pytest.fixture
def provider_service(temp_db):
    """Create a ProviderService with a temporary database."""
    return ProviderService(temp_db)


@pytest.fixture
def client_service(temp_db):
    """Create a ClientService with a temporary database."""
    return ClientService(temp_db)


@pytest.fixture
def job_service(temp_db):
    """Create an ImportJobService with a temporary database."""
    return ImportJobService(temp_db)


@pytest.fixture
def expense_import_service(temp_db):
    """Create an ExpenseImportService with a temporary database."""
    return ExpenseImportService(temp_db)


@pytest.fixture
def income_import_service(temp_db):
    """Create an IncomeImportService with a temporary database."""
    return IncomeImportService(temp_db)


@pytest.fixture
def seeded_db(temp_db):
    """Temporary database holding the default categories and providers."""
    seed_categories(temp_db)
    seed_providers(temp_db)
    return temp_db


@pytest.fixture
def sample_clients(client_service):
    """Create sample clients and return their IDs by name."""
    return {
        "Aida Tomescu": client_service.create_client("Aida Tomescu"),
        "Acme Corporation": client_service.create_client("Acme Corporation", abn="12345678901"),
    }


@pytest.fixture
def write_csv(tmp_path):
    """Write CSV text to a file in tmp_path and return its path as a string."""

    def _write(content: str, name: str = "import.csv") -> str:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return str(path)

    return _write


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
