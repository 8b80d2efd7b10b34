"""Tests for ORM to domain mappers."""

from datetime import datetime
from decimal import Decimal

from khata.database.mappers import client_to_domain, job_to_domain, payment_record_to_domain
from khata.database.models import Client, Job, PaymentRecord
from khata.domain.entities import Currency, JobStatus

NOW = datetime(2024, 3, 10, 9, 30)


def orm_job(**overrides):
    values = dict(
        id="j1",
        client_id="c1",
        client_name="Rahim Traders",
        work_description="Logo design",
        notes=None,
        amount=Decimal("1000.00"),
        currency="USD",
        status="Delivered",
        is_delivered=True,
        timestamp=NOW,
        pending_at=NOW,
        delivered_at=NOW,
        user_id="user-1",
    )
    values.update(overrides)
    return Job(**values)


def test_job_to_domain():
    job = job_to_domain(orm_job())

    assert job.id == "j1"
    assert job.status is JobStatus.DELIVERED
    assert job.currency is Currency.USD
    assert job.amount == Decimal("1000.00")
    assert job.is_delivered is True
    assert job.notes == ""
    assert job.delivered_at == NOW
    assert job.ongoing_at is None
    assert job.user_id == "user-1"


def test_job_unknown_status_reads_as_pending():
    job = job_to_domain(orm_job(status="Archived"))
    assert job.status is JobStatus.PENDING
    assert job.is_delivered is False


def test_job_unknown_currency_reads_as_bdt():
    assert job_to_domain(orm_job(currency="GBP")).currency is Currency.BDT


def test_is_delivered_follows_status():
    assert job_to_domain(orm_job(status="Paid", is_delivered=False)).is_delivered is True


def test_client_to_domain():
    client = client_to_domain(
        Client(id="c1", client_name="Acme", email=None, active=False, created_at=NOW)
    )
    assert client.client_name == "Acme"
    assert client.email == ""
    assert client.active is False
    assert client.created_at == NOW


def test_payment_record_to_domain():
    record = payment_record_to_domain(
        PaymentRecord(id="r1", job_id="gone", amount=Decimal("12.50"), note=None, paid_at=NOW)
    )
    assert record.job_id == "gone"
    assert record.amount == Decimal("12.50")
    assert record.note == ""
    assert record.paid_at == NOW
