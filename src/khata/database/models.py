"""SQLAlchemy models for the khata database."""

import uuid

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Numeric,
    String,
    create_engine,
)
from sqlalchemy.orm import declarative_base, sessionmaker, Session

Base = declarative_base()


def new_id() -> str:
    """Opaque document identifier."""
    return uuid.uuid4().hex


class Client(Base):
    """Client directory model."""

    __tablename__ = "clients"

    id = Column(String(32), primary_key=True, default=new_id)
    client_name = Column(String, nullable=False)
    institution = Column(String, nullable=False, default="")
    contact_number = Column(String, nullable=False, default="")
    email = Column(String, nullable=False, default="")
    website = Column(String, nullable=False, default="")
    address = Column(String, nullable=False, default="")
    notes = Column(String, nullable=False, default="")
    active = Column(Boolean, nullable=False, default=True)
    user_id = Column(String, nullable=True)
    created_at = Column(DateTime, nullable=False)


class Job(Base):
    """Job model.

    ``client_name`` is a snapshot taken when the job is created or its client
    changes; renaming the client later does not update it.
    """

    __tablename__ = "jobs"

    id = Column(String(32), primary_key=True, default=new_id)
    client_id = Column(String(32), ForeignKey("clients.id"), nullable=False, index=True)
    client_name = Column(String, nullable=False, default="")
    work_description = Column(String, nullable=False, default="")
    notes = Column(String, nullable=False, default="")
    amount = Column(Numeric(12, 2), nullable=False)
    currency = Column(String(3), nullable=False, default="BDT")
    status = Column(String, nullable=False, default="Pending")
    is_delivered = Column(Boolean, nullable=False, default=False)
    timestamp = Column(DateTime, nullable=False, index=True)
    pending_at = Column(DateTime, nullable=True)
    ongoing_at = Column(DateTime, nullable=True)
    delivered_at = Column(DateTime, nullable=True)
    paid_at = Column(DateTime, nullable=True)
    payment_recorded_at = Column(DateTime, nullable=True)
    user_id = Column(String, nullable=True)


class PaymentRecord(Base):
    """Payment record model.

    ``job_id`` deliberately has no foreign key: deleting a job leaves its
    records behind.
    """

    __tablename__ = "payment_records"

    id = Column(String(32), primary_key=True, default=new_id)
    job_id = Column(String(32), nullable=False, index=True)
    amount = Column(Numeric(12, 2), nullable=False)
    note = Column(String, nullable=False, default="")
    paid_at = Column(DateTime, nullable=False)
    user_id = Column(String, nullable=True)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
