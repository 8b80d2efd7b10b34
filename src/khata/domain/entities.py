"""Domain model entities for khata.

These are pure data classes representing business concepts, independent of
the storage schema. Jobs and payment records are separate collections: a job
does not hold its ledger, the ledger is rebuilt by filtering records on
``job_id``.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional


class JobStatus(str, Enum):
    """Job lifecycle states, declared in lifecycle order."""

    PENDING = "Pending"
    ONGOING = "Ongoing"
    DELIVERED = "Delivered"
    PAID = "Paid"

    @property
    def order(self) -> int:
        return list(JobStatus).index(self)

    @property
    def timestamp_field(self) -> str:
        return STATUS_TIMESTAMP_FIELDS[self]

    @property
    def is_delivered(self) -> bool:
        return self in (JobStatus.DELIVERED, JobStatus.PAID)


STATUS_TIMESTAMP_FIELDS = {
    JobStatus.PENDING: "pending_at",
    JobStatus.ONGOING: "ongoing_at",
    JobStatus.DELIVERED: "delivered_at",
    JobStatus.PAID: "paid_at",
}


class Currency(str, Enum):
    """Supported job currencies. Amounts are never converted between them."""

    BDT = "BDT"
    USD = "USD"
    EUR = "EUR"


DEFAULT_CURRENCY = Currency.BDT


@dataclass(frozen=True)
class Client:
    """Client directory entry referenced by jobs."""

    id: str
    client_name: str
    created_at: datetime
    institution: str = ""
    contact_number: str = ""
    email: str = ""
    website: str = ""
    address: str = ""
    notes: str = ""
    active: bool = True
    user_id: Optional[str] = None


@dataclass(frozen=True)
class Job:
    """Unit of billable work for a client."""

    id: str
    client_id: str
    client_name: str
    work_description: str
    amount: Decimal
    currency: Currency
    status: JobStatus
    is_delivered: bool
    timestamp: datetime
    notes: str = ""
    pending_at: Optional[datetime] = None
    ongoing_at: Optional[datetime] = None
    delivered_at: Optional[datetime] = None
    paid_at: Optional[datetime] = None
    payment_recorded_at: Optional[datetime] = None
    user_id: Optional[str] = None

    def status_timestamp(self, status: JobStatus) -> Optional[datetime]:
        """Return when the job entered ``status``, if it has."""
        return getattr(self, status.timestamp_field)


@dataclass(frozen=True)
class PaymentRecord:
    """One receipt of money against a job, in the job's currency."""

    id: str
    job_id: str
    amount: Decimal
    paid_at: datetime
    note: str = ""
    user_id: Optional[str] = None


@dataclass(frozen=True)
class CurrencyTotals:
    """Monetary rollup for the jobs of one currency."""

    currency: Currency
    total_amount: Decimal = Decimal("0")
    paid_amount: Decimal = Decimal("0")
    pending_amount: Decimal = Decimal("0")
    ongoing_amount: Decimal = Decimal("0")
    outstanding_amount: Decimal = Decimal("0")
    paid_count: int = 0
    pending_count: int = 0
    ongoing_count: int = 0
    outstanding_count: int = 0


@dataclass(frozen=True)
class DashboardStats:
    """Dashboard rollup over a (possibly date-filtered) set of jobs."""

    by_currency: dict[Currency, CurrencyTotals]
    currencies: tuple[Currency, ...]
    total_jobs: int
    delivered_count: int
    paid_count: int
    outstanding_count: int
    status_counts: dict[JobStatus, int] = field(default_factory=dict)


@dataclass(frozen=True)
class ClientSummary:
    """Per-client job count and billed/paid totals by currency."""

    client_id: str
    job_count: int
    billed_by_currency: dict[Currency, Decimal]
    paid_by_currency: dict[Currency, Decimal]
