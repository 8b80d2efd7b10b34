"""Payment ledger domain service.

The ledger is the source of truth for what has been paid. Totals are always
recomputed from the payment records, never cached on the job, so a job
status that lags behind the ledger is corrected by the next add/remove.
"""

import logging
from decimal import Decimal
from typing import Iterable, Optional

from khata.database.base import Database
from khata.domain.entities import Job, PaymentRecord
from khata.domain.errors import (
    NotFoundError,
    OverpaymentError,
    job_not_found,
    overpayment,
    payment_record_not_found,
)
from khata.domain.lifecycle import (
    plan_payment_demotion,
    plan_payment_promotion,
    should_demote,
    should_promote,
)
from khata.domain.records import normalize_payment_fields

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def sum_payments(records: Iterable[PaymentRecord], job_id: Optional[str] = None) -> Decimal:
    """Sum record amounts, optionally only those for ``job_id``."""
    return sum(
        (r.amount for r in records if job_id is None or r.job_id == job_id),
        ZERO,
    )


def remaining_balance(job: Job, total_paid: Decimal) -> Decimal:
    """Unpaid part of a job, never negative."""
    return max(ZERO, job.amount - total_paid)


class LedgerService:
    """Service for recording and removing payments against jobs."""

    def __init__(self, db: Database):
        """Initialize ledger service.

        Args:
            db: Database instance
        """
        self.db = db

    def add_payment(
        self,
        job_id: str,
        amount: Decimal,
        note: Optional[str] = None,
        recorder_id: Optional[str] = None,
    ) -> str:
        """Record a payment against a job.

        The overpayment check and the record creation run in one transaction.
        If the new total covers the job amount and the job is already
        Delivered, the job is promoted to Paid in the same transaction. A job
        that is still Pending or Ongoing keeps its status.

        Args:
            job_id: Job the payment is for
            amount: Positive amount in the job's currency
            note: Optional note
            recorder_id: Acting user ID, kept for audit

        Returns:
            Payment record ID

        Raises:
            ValidationError: If the amount is not positive
            NotFoundError: If the job doesn't exist
            OverpaymentError: If the payment exceeds the remaining balance;
                ``max_amount`` holds the largest acceptable amount
        """
        fields = normalize_payment_fields(job_id, amount, note)

        with self.db.atomic():
            job = self.db.get_job(fields["job_id"], for_update=True)
            if job is None:
                raise NotFoundError(job_not_found(fields["job_id"]))

            current_total = self.total_paid(job.id)
            new_total = current_total + fields["amount"]
            if new_total > job.amount:
                max_amount = remaining_balance(job, current_total)
                logger.warning(
                    "Rejected payment of %s on job %s: at most %s remaining",
                    fields["amount"], job.id, max_amount,
                )
                raise OverpaymentError(overpayment(fields["amount"], max_amount), max_amount)

            record_id = self.db.create_payment_record(fields, user_id=recorder_id or None)
            logger.info("Recorded payment %s of %s on job %s", record_id, fields["amount"], job.id)

            if should_promote(job, new_total):
                self.db.apply_status_change(job.id, plan_payment_promotion())
                logger.info("Job %s paid in full, promoted to Paid", job.id)

        return record_id

    def remove_payment(self, record_id: str) -> None:
        """Delete a payment record.

        A Paid job whose remaining records no longer cover its amount is
        demoted to Delivered. Records whose job was deleted are removed
        without touching any job.

        Raises:
            NotFoundError: If the record doesn't exist
        """
        with self.db.atomic():
            record = self.db.get_payment_record(record_id)
            if record is None:
                raise NotFoundError(payment_record_not_found(record_id))

            self.db.delete_payment_record(record_id)
            logger.info("Removed payment %s of %s from job %s", record_id, record.amount, record.job_id)

            job = self.db.get_job(record.job_id, for_update=True)
            if job is None:
                return
            if should_demote(job, self.total_paid(job.id)):
                self.db.apply_status_change(job.id, plan_payment_demotion())
                logger.info("Job %s no longer paid in full, demoted to Delivered", job.id)

    def get_record(self, record_id: str) -> Optional[PaymentRecord]:
        """Get payment record by ID, or None if not found."""
        return self.db.get_payment_record(record_id)

    def list_records(self, job_id: Optional[str] = None) -> list[PaymentRecord]:
        """List payment records, newest first, optionally for one job."""
        return self.db.list_payment_records(job_id=job_id)

    def total_paid(self, job_id: str) -> Decimal:
        """Sum of every recorded payment for a job, read fresh from the store."""
        return sum_payments(self.db.list_payment_records(job_id=job_id))

    def remaining(self, job: Job) -> Decimal:
        """Amount still owed on a job."""
        return remaining_balance(job, self.total_paid(job.id))
