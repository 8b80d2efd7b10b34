"""Shared pytest fixtures for khata tests."""

import tempfile
import os
from decimal import Decimal
import pytest

from khata.database.factories import create_sqlite_database
from khata.domain.client import ClientService
from khata.domain.job import JobService
from khata.domain.ledger import LedgerService
from khata.domain.summary import SummaryService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def client_service(temp_db):
    """Create a ClientService with a temporary database."""
    return ClientService(temp_db)


@pytest.fixture
def job_service(temp_db):
    """Create a JobService with a temporary database."""
    return JobService(temp_db)


@pytest.fixture
def ledger_service(temp_db):
    """Create a LedgerService with a temporary database."""
    return LedgerService(temp_db)


@pytest.fixture
def summary_service(temp_db):
    """Create a SummaryService with a temporary database."""
    return SummaryService(temp_db)


@pytest.fixture
def sample_client(client_service):
    """Create a sample client for testing."""
    client_id = client_service.create_client("user-1", "Rahim Traders", email="rahim@example.com")
    return client_service.get_client(client_id)


@pytest.fixture
def sample_job(job_service, sample_client):
    """Create a 1000 BDT job for the sample client."""
    job_id = job_service.create_job(
        "user-1",
        {
            "client_id": sample_client.id,
            "amount": Decimal("1000"),
            "currency": "BDT",
            "work_description": "Logo design",
        },
    )
    return job_service.get_job(job_id)


@pytest.fixture
def delivered_job(job_service, sample_job):
    """The sample job moved to Delivered."""
    job_service.set_job_status(sample_job.id, "Delivered")
    return job_service.get_job(sample_job.id)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
