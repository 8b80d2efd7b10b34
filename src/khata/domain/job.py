"""Job domain service: creation, edits and status transitions."""

import logging
from typing import Any, Optional

from khata.database.base import Database
from khata.domain.entities import Job as JobEntity, JobStatus
from khata.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    amount_below_paid,
    job_not_found,
)
from khata.domain.client import ClientService
from khata.domain.ledger import sum_payments
from khata.domain.lifecycle import plan_requested_status
from khata.domain.records import normalize_job_fields, parse_status

logger = logging.getLogger(__name__)


class JobService:
    """Service for managing jobs and their status lifecycle."""

    def __init__(self, db: Database):
        """Initialize job service.

        Args:
            db: Database instance
        """
        self.db = db
        self.clients = ClientService(db)

    def create_job(self, creator_id: Optional[str], fields: dict[str, Any]) -> str:
        """Create a job in Pending status.

        Args:
            creator_id: Acting user ID, kept for audit
            fields: client_id, amount and optionally currency,
                work_description, notes

        Returns:
            Job ID

        Raises:
            ValidationError: If the payload is invalid or the client is inactive
            NotFoundError: If the client doesn't exist
        """
        normalized = normalize_job_fields(fields)
        client = self.clients.require_client(normalized["client_id"])
        if not client.active:
            raise ValidationError(f"Client '{client.client_name}' is inactive")
        normalized["client_name"] = client.client_name

        job_id = self.db.create_job(normalized, user_id=creator_id or None)
        logger.info(
            "Created job %s for client %s: %s %s",
            job_id, client.id, normalized["amount"], normalized["currency"].value,
        )
        return job_id

    def get_job(self, job_id: str) -> Optional[JobEntity]:
        """Get job by ID, or None if not found."""
        return self.db.get_job(job_id)

    def require_job(self, job_id: str, for_update: bool = False) -> JobEntity:
        """Get job by ID, locking it when ``for_update`` is set inside ``atomic()``.

        Raises:
            NotFoundError: If job doesn't exist
        """
        job = self.db.get_job(job_id, for_update=for_update)
        if job is None:
            raise NotFoundError(job_not_found(job_id))
        return job

    def list_jobs(
        self, client_id: Optional[str] = None, status: Optional[str | JobStatus] = None
    ) -> list[JobEntity]:
        """List jobs, newest first.

        Raises:
            ValidationError: If ``status`` is not a known status
        """
        parsed = parse_status(status) if status is not None else None
        return self.db.list_jobs(client_id=client_id, status=parsed)

    def edit_job(self, job_id: str, fields: dict[str, Any]) -> None:
        """Edit plain job fields without touching status or timestamps.

        Changing ``client_id`` re-takes the client name snapshot.

        Raises:
            ValidationError: If the payload is invalid
            NotFoundError: If the job or new client doesn't exist
            ConflictError: If the new amount is below what is already paid
        """
        normalized = normalize_job_fields(fields, partial=True)
        if not normalized:
            return

        with self.db.atomic():
            job = self.require_job(job_id, for_update=True)

            if "client_id" in normalized:
                client = self.clients.require_client(normalized["client_id"])
                normalized["client_name"] = client.client_name

            if "amount" in normalized:
                total_paid = sum_payments(self.db.list_payment_records(job_id=job.id))
                if normalized["amount"] < total_paid:
                    raise ConflictError(amount_below_paid(normalized["amount"], total_paid))

            self.db.update_job_fields(job.id, normalized)
        logger.info("Edited job %s: %s", job_id, ", ".join(sorted(normalized)))

    def set_job_status(
        self,
        job_id: str,
        new_status: str | JobStatus,
        auto_pay_if_fully_paid: bool = False,
    ) -> JobStatus:
        """Move a job to a new status.

        Any status may move to any other. With ``auto_pay_if_fully_paid``, a
        request to deliver a job whose payments already cover its amount
        moves it straight to Paid.

        Returns:
            The status the job ended up in

        Raises:
            ValidationError: If ``new_status`` is not a known status
            NotFoundError: If job doesn't exist
        """
        requested = parse_status(new_status)

        with self.db.atomic():
            job = self.require_job(job_id, for_update=True)
            total_paid = None
            if auto_pay_if_fully_paid:
                total_paid = sum_payments(self.db.list_payment_records(job_id=job.id))
            change = plan_requested_status(job, requested, total_paid)
            self.db.apply_status_change(job.id, change)

        logger.info("Job %s moved from %s to %s", job_id, job.status.value, change.status.value)
        return change.status

    def delete_job(self, job_id: str) -> None:
        """Delete a job. Its payment records are not deleted.

        Raises:
            NotFoundError: If job doesn't exist
        """
        job = self.require_job(job_id)
        self.db.delete_job(job.id)
        logger.info("Deleted job %s", job_id)
