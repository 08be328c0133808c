"""Tests for categories and category commands."""

import pytest
from basbook.cli.main import cli
from basbook.domain.errors import ConflictError, ValidationError


class TestCategoryService:
    """Tests for CategoryService."""

    def test_create_category(self, category_service):
        """Test creating a category."""
        category_id = category_service.create_category("Hosting", bas_label="1B")

        category = category_service.get_category(category_id)
        assert category.name == "Hosting"
        assert category.bas_label == "1B"
        assert category.is_deductible is True

    def test_create_category_strips_name(self, category_service):
        """Test that surrounding whitespace is dropped."""
        category_id = category_service.create_category("  Hosting ")

        assert category_service.get_category(category_id).name == "Hosting"

    def test_create_category_blank_name(self, category_service):
        """Test that blank names are rejected."""
        with pytest.raises(ValidationError):
            category_service.create_category("   ")

    def test_create_category_duplicate(self, category_service):
        """Test that names are unique."""
        category_service.create_category("Hosting")

        with pytest.raises(ConflictError) as excinfo:
            category_service.create_category("Hosting")
        assert "already exists" in str(excinfo.value)


def test_init_data(cli_runner, temp_db):
    """Test seeding default categories and providers."""
    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "init-data"])

    assert result.exit_code == 0
    assert "Created 14 categories" in result.output
    assert "Created 10 providers" in result.output
    ventraip = temp_db.get_provider_by_name("VentraIP")
    assert temp_db.get_category(ventraip.default_category_id).name == "Hosting"


def test_init_data_twice(cli_runner, temp_db):
    """Test that seeding twice skips existing data."""
    cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "init-data"])

    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "init-data"])

    assert result.exit_code == 0
    assert "Categories already exist, skipped." in result.output
    assert "Providers already exist, skipped." in result.output
    assert len(temp_db.list_categories()) == 14


def test_category_list(cli_runner, seeded_db):
    """Test listing categories."""
    result = cli_runner.invoke(cli, ["--db-path", seeded_db.database_path, "category", "list"])

    assert result.exit_code == 0
    assert "Capital Purchases [BAS G10]" in result.output
    assert "Non-Deductible [BAS N/A] (non-deductible)" in result.output


def test_category_list_empty(cli_runner, temp_db):
    """Test listing with no categories."""
    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "category", "list"])

    assert result.exit_code == 0
    assert "No categories found" in result.output


def test_category_create(cli_runner, temp_db):
    """Test creating a category."""
    result = cli_runner.invoke(
        cli,
        ["--db-path", temp_db.database_path, "category", "create", "Coworking", "--bas-label", "1B"],
    )

    assert result.exit_code == 0
    assert "Created category 'Coworking'" in result.output
    assert temp_db.get_category_by_name("Coworking").bas_label == "1B"


def test_category_create_duplicate(cli_runner, seeded_db):
    """Test creating a category that already exists."""
    result = cli_runner.invoke(
        cli, ["--db-path", seeded_db.database_path, "category", "create", "Hosting"]
    )

    assert result.exit_code == 1
    assert "Error: Category with name 'Hosting' already exists" in result.output
