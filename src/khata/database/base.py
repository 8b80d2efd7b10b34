"""Abstract database interface.

The database is the single shared repository behind every service: all
actors read and write the same clients, jobs and payment records.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
import logging
from typing import Any, Callable, Optional

# Import entities directly to avoid circular import through domain/__init__.py
from khata.domain.entities import Client, Job, JobStatus, PaymentRecord
from khata.domain.lifecycle import StatusChange

logger = logging.getLogger(__name__)

JobsListener = Callable[[list[Job]], None]
RecordsListener = Callable[[list[PaymentRecord]], None]


class Database(ABC):
    """Abstract database interface for khata.

    Besides CRUD, the interface offers live collection views:
    ``subscribe_jobs`` and ``subscribe_payment_records`` call back with the
    whole collection right away and again after every committed change.
    """

    def __init__(self) -> None:
        self._job_listeners: list[JobsListener] = []
        self._record_listeners: list[RecordsListener] = []

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    @abstractmethod
    def atomic(self) -> AbstractContextManager[None]:
        """Group reads and writes into one unit that commits or rolls back together.

        The outermost block holds the write lock from its first statement, so
        a check made inside it still holds when its writes commit.
        """
        pass

    # Live views
    def subscribe_jobs(self, callback: JobsListener) -> Callable[[], None]:
        """Push the job collection (newest first) to ``callback`` on every change.

        Returns:
            Function that removes the subscription
        """
        self._job_listeners.append(callback)
        callback(self.list_jobs())
        return lambda: self._unsubscribe(self._job_listeners, callback)

    def subscribe_payment_records(self, callback: RecordsListener) -> Callable[[], None]:
        """Push the payment record collection (newest first) on every change.

        Returns:
            Function that removes the subscription
        """
        self._record_listeners.append(callback)
        callback(self.list_payment_records())
        return lambda: self._unsubscribe(self._record_listeners, callback)

    @staticmethod
    def _unsubscribe(listeners: list, callback: Callable) -> None:
        if callback in listeners:
            listeners.remove(callback)

    def publish_changes(self, jobs: bool, records: bool) -> None:
        """Notify subscribers after a commit touched jobs and/or records.

        The write is already committed, so a failing listener is logged and
        the remaining listeners still run.
        """
        if jobs and self._job_listeners:
            self._notify(self._job_listeners, self.list_jobs())
        if records and self._record_listeners:
            self._notify(self._record_listeners, self.list_payment_records())

    @staticmethod
    def _notify(listeners: list, snapshot: list) -> None:
        for listener in list(listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Change listener %r failed", listener)

    # Client operations
    @abstractmethod
    def create_client(self, fields: dict[str, Any], user_id: Optional[str] = None) -> str:
        """Create a client. Returns client ID."""
        pass

    @abstractmethod
    def get_client(self, client_id: str) -> Optional[Client]:
        """Get client by ID."""
        pass

    @abstractmethod
    def list_clients(self, active_only: bool = False) -> list[Client]:
        """List clients ordered by name."""
        pass

    @abstractmethod
    def update_client(self, client_id: str, fields: dict[str, Any]) -> None:
        """Update the given client fields."""
        pass

    @abstractmethod
    def delete_client(self, client_id: str) -> None:
        """Delete a client."""
        pass

    @abstractmethod
    def count_client_jobs(self, client_id: str) -> int:
        """Count jobs referencing a client."""
        pass

    # Job operations
    @abstractmethod
    def create_job(self, fields: dict[str, Any], user_id: Optional[str] = None) -> str:
        """Create a Pending job stamped with creation time. Returns job ID."""
        pass

    @abstractmethod
    def get_job(self, job_id: str, for_update: bool = False) -> Optional[Job]:
        """Get job by ID.

        With ``for_update`` inside ``atomic()``, other writers wait on the job
        until the block ends.
        """
        pass

    @abstractmethod
    def list_jobs(
        self, client_id: Optional[str] = None, status: Optional[JobStatus] = None
    ) -> list[Job]:
        """List jobs, newest first, optionally filtered by client or status."""
        pass

    @abstractmethod
    def update_job_fields(self, job_id: str, fields: dict[str, Any]) -> None:
        """Overwrite plain job fields. Never touches status or timestamps."""
        pass

    @abstractmethod
    def apply_status_change(self, job_id: str, change: StatusChange) -> None:
        """Apply a planned transition, stamping its fields with the write time."""
        pass

    @abstractmethod
    def delete_job(self, job_id: str) -> None:
        """Delete a job. Its payment records are left in place."""
        pass

    # Payment record operations
    @abstractmethod
    def create_payment_record(
        self, fields: dict[str, Any], user_id: Optional[str] = None
    ) -> str:
        """Create a payment record stamped with the write time. Returns record ID."""
        pass

    @abstractmethod
    def get_payment_record(self, record_id: str) -> Optional[PaymentRecord]:
        """Get payment record by ID."""
        pass

    @abstractmethod
    def list_payment_records(self, job_id: Optional[str] = None) -> list[PaymentRecord]:
        """List payment records, newest first, optionally for one job."""
        pass

    @abstractmethod
    def delete_payment_record(self, record_id: str) -> None:
        """Delete a payment record."""
        pass
