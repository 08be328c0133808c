"""Category domain service."""

from typing import Optional
from basbook.database.base import Database
from basbook.domain.entities import Category
from basbook.domain.errors import ConflictError, ValidationError, duplicate_name


class CategoryService:
    """Service for managing expense categories."""

    def __init__(self, db: Database):
        """Initialize category service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_category(
        self,
        name: str,
        bas_label: Optional[str] = None,
        is_deductible: bool = True,
        description: Optional[str] = None,
    ) -> int:
        """Create a category.

        Args:
            name: Category name
            bas_label: BAS field the category reports under (e.g., "1B", "G10")
            is_deductible: Whether expenses in this category are deductible
            description: Optional free-text description

        Returns:
            Category ID

        Raises:
            ValidationError: If the name is blank
            ConflictError: If a category with this name already exists
        """
        name = name.strip()
        if not name:
            raise ValidationError("Category name cannot be empty")
        if self.db.get_category_by_name(name) is not None:
            raise ConflictError(duplicate_name("Category", name))

        return self.db.create_category(
            name=name,
            bas_label=bas_label,
            is_deductible=is_deductible,
            description=description,
        )

    def get_category(self, category_id: int) -> Optional[Category]:
        """Get category by ID."""
        return self.db.get_category(category_id)

    def get_category_by_name(self, name: str) -> Optional[Category]:
        """Get category by exact name."""
        return self.db.get_category_by_name(name)

    def list_categories(self) -> list[Category]:
        """List all categories."""
        return self.db.list_categories()
