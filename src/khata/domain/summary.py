"""Dashboard and rollup domain service.

Everything here is read-only. Amounts are grouped per currency and never
converted between currencies.
"""

from collections import defaultdict
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional, Sequence

from khata.database.base import Database
from khata.domain.entities import (
    ClientSummary,
    Currency,
    CurrencyTotals,
    DashboardStats,
    Job,
    JobStatus,
    PaymentRecord,
)
from khata.domain.ledger import ZERO, remaining_balance

DateRange = tuple[datetime, datetime]


def total_paid_by_job(records: Sequence[PaymentRecord]) -> dict[str, Decimal]:
    """Map each job ID to the sum of its payment records."""
    totals: dict[str, Decimal] = defaultdict(lambda: ZERO)
    for record in records:
        totals[record.job_id] += record.amount
    return dict(totals)


def filter_jobs_by_range(jobs: Sequence[Job], date_range: Optional[DateRange]) -> list[Job]:
    """Keep jobs created within [start, end], both ends inclusive."""
    if date_range is None:
        return list(jobs)
    start, end = date_range
    return [job for job in jobs if start <= job.timestamp <= end]


def build_dashboard(
    jobs: Sequence[Job],
    records: Sequence[PaymentRecord],
    date_range: Optional[DateRange] = None,
) -> DashboardStats:
    """Roll jobs and their ledger up into dashboard statistics.

    Outstanding covers Delivered jobs with a positive remaining balance only;
    a Paid job counts its full amount as paid.
    """
    paid_by_job = total_paid_by_job(records)
    selected = filter_jobs_by_range(jobs, date_range)

    sums: dict[Currency, dict[str, Any]] = {}
    status_counts = {status: 0 for status in JobStatus}
    delivered_count = 0
    outstanding_count = 0

    for job in selected:
        bucket = sums.setdefault(
            job.currency,
            defaultdict(int, {
                "total_amount": ZERO,
                "paid_amount": ZERO,
                "pending_amount": ZERO,
                "ongoing_amount": ZERO,
                "outstanding_amount": ZERO,
            }),
        )
        bucket["total_amount"] += job.amount
        status_counts[job.status] += 1

        if job.status == JobStatus.PAID:
            bucket["paid_amount"] += job.amount
            bucket["paid_count"] += 1
        elif job.status == JobStatus.PENDING:
            bucket["pending_amount"] += job.amount
            bucket["pending_count"] += 1
        elif job.status == JobStatus.ONGOING:
            bucket["ongoing_amount"] += job.amount
            bucket["ongoing_count"] += 1
        elif job.status == JobStatus.DELIVERED:
            remaining = remaining_balance(job, paid_by_job.get(job.id, ZERO))
            bucket["outstanding_amount"] += remaining
            if remaining > 0:
                bucket["outstanding_count"] += 1
                outstanding_count += 1

        if job.is_delivered:
            delivered_count += 1

    by_currency = {
        currency: CurrencyTotals(currency=currency, **values)
        for currency, values in sums.items()
    }
    return DashboardStats(
        by_currency=by_currency,
        currencies=tuple(sorted(by_currency, key=lambda c: c.value)),
        total_jobs=len(selected),
        delivered_count=delivered_count,
        paid_count=status_counts[JobStatus.PAID],
        outstanding_count=outstanding_count,
        status_counts=status_counts,
    )


class SummaryService:
    """Service for building dashboard rollups from the live collections."""

    def __init__(self, db: Database):
        """Initialize summary service.

        Args:
            db: Database instance
        """
        self.db = db

    def get_dashboard(self, date_range: Optional[DateRange] = None) -> DashboardStats:
        """Dashboard over all jobs, optionally limited to a creation-time range."""
        return build_dashboard(
            self.db.list_jobs(), self.db.list_payment_records(), date_range
        )

    def jobs_awaiting_payment(self) -> list[Job]:
        """Jobs whose payments do not yet cover their amount."""
        paid_by_job = total_paid_by_job(self.db.list_payment_records())
        return [
            job for job in self.db.list_jobs()
            if paid_by_job.get(job.id, ZERO) < job.amount
        ]

    def jobs_paid_in_full(self) -> list[Job]:
        """Jobs with a positive amount that their payments fully cover."""
        paid_by_job = total_paid_by_job(self.db.list_payment_records())
        return [
            job for job in self.db.list_jobs()
            if job.amount > 0 and paid_by_job.get(job.id, ZERO) >= job.amount
        ]

    def jobs_with_payments(self) -> list[Job]:
        """Jobs that have at least one payment record."""
        paid_by_job = total_paid_by_job(self.db.list_payment_records())
        return [job for job in self.db.list_jobs() if job.id in paid_by_job]

    def client_summary(self, client_id: str) -> ClientSummary:
        """Job count and billed/paid totals per currency for one client."""
        jobs = self.db.list_jobs(client_id=client_id)
        paid_by_job = total_paid_by_job(self.db.list_payment_records())

        billed: dict[Currency, Decimal] = defaultdict(lambda: ZERO)
        paid: dict[Currency, Decimal] = defaultdict(lambda: ZERO)
        for job in jobs:
            billed[job.currency] += job.amount
            paid[job.currency] += paid_by_job.get(job.id, ZERO)

        return ClientSummary(
            client_id=client_id,
            job_count=len(jobs),
            billed_by_currency=dict(billed),
            paid_by_currency=dict(paid),
        )
