"""Client domain service."""

from typing import Optional
from basbook.database.base import Database
from basbook.domain.entities import Client
from basbook.domain.errors import ConflictError, ValidationError, duplicate_name


class ClientService:
    """Service for managing clients that invoices are issued to."""

    def __init__(self, db: Database):
        """Initialize client service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_client(
        self, name: str, abn: Optional[str] = None, is_psi_eligible: bool = False
    ) -> int:
        """Create a client.

        Raises:
            ValidationError: If the name is blank
            ConflictError: If a client with this name already exists
        """
        name = name.strip()
        if not name:
            raise ValidationError("Client name cannot be empty")
        if self.db.get_client_by_name(name) is not None:
            raise ConflictError(duplicate_name("Client", name))
        return self.db.create_client(name=name, abn=abn, is_psi_eligible=is_psi_eligible)

    def get_client(self, client_id: int) -> Optional[Client]:
        """Get client by ID."""
        return self.db.get_client(client_id)

    def list_clients(self) -> list[Client]:
        """List all clients."""
        return self.db.list_clients()
