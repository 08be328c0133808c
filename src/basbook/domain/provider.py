"""Provider domain service."""

from typing import Optional
from basbook.database.base import Database
from basbook.domain.entities import Provider
from basbook.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    duplicate_name,
)


class ProviderService:
    """Service for managing providers (vendors an expense is paid to)."""

    def __init__(self, db: Database):
        """Initialize provider service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_provider(
        self,
        name: str,
        is_international: bool = False,
        default_category: Optional[str] = None,
        abn_arn: Optional[str] = None,
    ) -> int:
        """Create a provider.

        Args:
            name: Provider name as it should be matched against CSV text
            is_international: Whether purchases from this provider are GST-free
            default_category: Optional name of the category used when a CSV row
                names none
            abn_arn: Optional ABN (domestic) or ARN (overseas GST registration)

        Returns:
            Provider ID

        Raises:
            ValidationError: If the name is blank
            ConflictError: If a provider with this name already exists
            NotFoundError: If the default category doesn't exist
        """
        name = name.strip()
        if not name:
            raise ValidationError("Provider name cannot be empty")
        if self.db.get_provider_by_name(name) is not None:
            raise ConflictError(duplicate_name("Provider", name))

        default_category_id = None
        if default_category is not None:
            category = self.db.get_category_by_name(default_category)
            if category is None:
                raise NotFoundError(f"Category '{default_category}' not found")
            default_category_id = category.id

        return self.db.create_provider(
            name=name,
            is_international=is_international,
            default_category_id=default_category_id,
            abn_arn=abn_arn,
        )

    def get_provider(self, provider_id: int) -> Optional[Provider]:
        """Get provider by ID."""
        return self.db.get_provider(provider_id)

    def list_providers(self) -> list[Provider]:
        """List all providers."""
        return self.db.list_providers()
