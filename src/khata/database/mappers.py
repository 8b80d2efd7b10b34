"""Mapper functions to convert SQLAlchemy rows into domain entities.

Reads are lenient: a stored status or currency outside the known set maps
to Pending or BDT instead of failing the whole collection.
"""

from decimal import Decimal

from khata.domain import entities as domain
from khata.domain.records import currency_or_default, status_or_default
from khata.database.models import (
    Client as ORMClient,
    Job as ORMJob,
    PaymentRecord as ORMPaymentRecord,
)


def client_to_domain(orm_client: ORMClient) -> domain.Client:
    """Convert SQLAlchemy Client model to domain Client entity."""
    return domain.Client(
        id=orm_client.id,
        client_name=orm_client.client_name,
        created_at=orm_client.created_at,
        institution=orm_client.institution or "",
        contact_number=orm_client.contact_number or "",
        email=orm_client.email or "",
        website=orm_client.website or "",
        address=orm_client.address or "",
        notes=orm_client.notes or "",
        active=bool(orm_client.active),
        user_id=orm_client.user_id,
    )


def job_to_domain(orm_job: ORMJob) -> domain.Job:
    """Convert SQLAlchemy Job model to domain Job entity.

    ``is_delivered`` is derived from the status rather than trusted from the
    stored column.
    """
    status = status_or_default(orm_job.status)
    return domain.Job(
        id=orm_job.id,
        client_id=orm_job.client_id,
        client_name=orm_job.client_name or "",
        work_description=orm_job.work_description or "",
        notes=orm_job.notes or "",
        amount=Decimal(orm_job.amount),
        currency=currency_or_default(orm_job.currency),
        status=status,
        is_delivered=status.is_delivered,
        timestamp=orm_job.timestamp,
        pending_at=orm_job.pending_at,
        ongoing_at=orm_job.ongoing_at,
        delivered_at=orm_job.delivered_at,
        paid_at=orm_job.paid_at,
        payment_recorded_at=orm_job.payment_recorded_at,
        user_id=orm_job.user_id,
    )


def payment_record_to_domain(orm_record: ORMPaymentRecord) -> domain.PaymentRecord:
    """Convert SQLAlchemy PaymentRecord model to domain PaymentRecord entity."""
    return domain.PaymentRecord(
        id=orm_record.id,
        job_id=orm_record.job_id,
        amount=Decimal(orm_record.amount),
        paid_at=orm_record.paid_at,
        note=orm_record.note or "",
        user_id=orm_record.user_id,
    )
