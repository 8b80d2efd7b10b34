"""Job status state machine.

Transitions are planned here as plain values and applied by the store in a
single write. Any status may move to any other; the planner only decides
which status timestamps are stamped and which are cleared.
"""

from dataclasses import dataclass, replace
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from khata.domain.entities import Job, JobStatus

PAYMENT_RECORDED_AT = "payment_recorded_at"


@dataclass(frozen=True)
class StatusChange:
    """A planned status transition.

    ``stamp`` fields are all set to the same write instant, ``clear`` fields
    are unset.
    """

    status: JobStatus
    stamp: tuple[str, ...]
    clear: tuple[str, ...] = ()

    @property
    def is_delivered(self) -> bool:
        return self.status.is_delivered

    def field_values(self, now: datetime) -> dict[str, Any]:
        """Return the attribute values this change writes, stamped with ``now``."""
        values: dict[str, Any] = {
            "status": self.status,
            "is_delivered": self.is_delivered,
        }
        for name in self.clear:
            values[name] = None
        for name in self.stamp:
            values[name] = now
        return values


def later_timestamp_fields(status: JobStatus) -> tuple[str, ...]:
    """Timestamp fields of every status strictly after ``status``."""
    return tuple(s.timestamp_field for s in JobStatus if s.order > status.order)


def plan_status_change(new_status: JobStatus) -> StatusChange:
    """Plan a plain transition into ``new_status``.

    The new status is stamped and every later status timestamp is cleared, so
    moving backward (e.g. Delivered to Ongoing) undoes the downstream
    progress. Earlier timestamps are left alone, which means a jump such as
    Pending to Paid leaves ongoing_at and delivered_at unset.
    """
    clear = later_timestamp_fields(new_status)
    if new_status == JobStatus.DELIVERED:
        clear += (PAYMENT_RECORDED_AT,)
    return StatusChange(status=new_status, stamp=(new_status.timestamp_field,), clear=clear)


def plan_delivery_with_auto_pay() -> StatusChange:
    """Plan delivering a job whose ledger already covers its amount.

    The job goes straight to Paid with delivered_at and paid_at stamped at the
    same instant.
    """
    return StatusChange(
        status=JobStatus.PAID,
        stamp=(JobStatus.DELIVERED.timestamp_field, JobStatus.PAID.timestamp_field),
        clear=(PAYMENT_RECORDED_AT,),
    )


def plan_payment_promotion() -> StatusChange:
    """Plan the Delivered to Paid promotion triggered by a recorded payment."""
    return StatusChange(
        status=JobStatus.PAID,
        stamp=(JobStatus.PAID.timestamp_field, PAYMENT_RECORDED_AT),
    )


def plan_payment_demotion() -> StatusChange:
    """Plan the Paid to Delivered demotion after a payment is removed."""
    return plan_status_change(JobStatus.DELIVERED)


def plan_requested_status(
    job: Job, requested: JobStatus, total_paid: Optional[Decimal] = None
) -> StatusChange:
    """Plan a caller-requested transition.

    When the caller asks to deliver a job and passes the ledger total, a fully
    paid job is moved to Paid instead.
    """
    if (
        requested == JobStatus.DELIVERED
        and total_paid is not None
        and is_fully_paid(job.amount, total_paid)
    ):
        return plan_delivery_with_auto_pay()
    return plan_status_change(requested)


def is_fully_paid(amount: Decimal, total_paid: Decimal) -> bool:
    """A job with a positive amount is fully paid once the ledger covers it."""
    return amount > 0 and total_paid >= amount


def should_promote(job: Job, new_total: Decimal) -> bool:
    """Only a Delivered job is promoted; payments taken before delivery are not."""
    return job.status == JobStatus.DELIVERED and new_total >= job.amount


def should_demote(job: Job, new_total: Decimal) -> bool:
    return job.status == JobStatus.PAID and new_total < job.amount


def apply_status_change(job: Job, change: StatusChange, now: datetime) -> Job:
    """Return ``job`` with ``change`` applied at ``now``."""
    return replace(job, **change.field_values(now))
