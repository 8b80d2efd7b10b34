"""Client directory domain service."""

import logging
from typing import Any, Optional

from khata.database.base import Database
from khata.domain.entities import Client as ClientEntity
from khata.domain.errors import (
    DependencyError,
    NotFoundError,
    ValidationError,
    client_delete_blocked,
    client_not_found,
)

logger = logging.getLogger(__name__)

CONTACT_FIELDS = ("institution", "contact_number", "email", "website", "address", "notes")


class ClientService:
    """Service for managing the client directory."""

    def __init__(self, db: Database):
        """Initialize client service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_client(
        self, creator_id: Optional[str], client_name: str, **contact: Any
    ) -> str:
        """Create a client.

        Args:
            creator_id: Acting user ID, kept for audit
            client_name: Display name (required)
            **contact: Optional contact fields (institution, email, ...)

        Returns:
            Client ID

        Raises:
            ValidationError: If the name is blank or a field is unknown
        """
        fields = self._normalize(dict(contact, client_name=client_name))
        fields.setdefault("active", True)
        client_id = self.db.create_client(fields, user_id=creator_id or None)
        logger.info("Created client %s (%s)", client_id, fields["client_name"])
        return client_id

    def get_client(self, client_id: str) -> Optional[ClientEntity]:
        """Get client by ID, or None if not found."""
        return self.db.get_client(client_id)

    def require_client(self, client_id: str) -> ClientEntity:
        """Get client by ID.

        Raises:
            NotFoundError: If client doesn't exist
        """
        client = self.db.get_client(client_id)
        if client is None:
            raise NotFoundError(client_not_found(client_id))
        return client

    def list_clients(self, active_only: bool = False) -> list[ClientEntity]:
        """List clients ordered by name; inactive ones are hidden on request."""
        return self.db.list_clients(active_only=active_only)

    def update_client(self, client_id: str, **fields: Any) -> None:
        """Update only the given client fields.

        Jobs keep the client name they were created with.
        """
        self.require_client(client_id)
        normalized = self._normalize(fields, partial=True)
        if not normalized:
            return
        self.db.update_client(client_id, normalized)
        logger.info("Updated client %s: %s", client_id, ", ".join(sorted(normalized)))

    def set_active(self, client_id: str, active: bool) -> None:
        """Show or hide a client in job creation."""
        self.update_client(client_id, active=active)

    def delete_client(self, client_id: str) -> None:
        """Delete a client.

        Raises:
            NotFoundError: If client doesn't exist
            DependencyError: If the client still has jobs
        """
        client = self.require_client(client_id)
        job_count = self.db.count_client_jobs(client_id)
        if job_count > 0:
            raise DependencyError(client_delete_blocked(client.client_name, job_count))
        self.db.delete_client(client_id)
        logger.info("Deleted client %s", client_id)

    def _normalize(self, fields: dict[str, Any], partial: bool = False) -> dict[str, Any]:
        allowed = set(CONTACT_FIELDS) | {"client_name", "active"}
        unknown = sorted(set(fields) - allowed)
        if unknown:
            raise ValidationError(f"Unknown client fields: {', '.join(unknown)}")

        normalized: dict[str, Any] = {}
        for key, value in fields.items():
            if key == "active":
                normalized[key] = bool(value)
            else:
                normalized[key] = "" if value is None else str(value).strip()

        if ("client_name" in normalized or not partial) and not normalized.get("client_name"):
            raise ValidationError("Client name is required")
        return normalized
