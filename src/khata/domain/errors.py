"""Shared domain error messages and error types."""

from decimal import Decimal


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for callers that only handle ValueError.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested job, payment record or client does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as an edit that would break ledger totals."""


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


class OverpaymentError(ValidationError):
    """Payment would push the ledger total past the job amount."""

    def __init__(self, message: str, max_amount: Decimal):
        super().__init__(message)
        self.max_amount = max_amount


def job_not_found(job_id: str) -> str:
    """Return message for missing job."""
    return f"Job {job_id} not found"


def client_not_found(client_id: str) -> str:
    """Return message for missing client."""
    return f"Client {client_id} not found"


def payment_record_not_found(record_id: str) -> str:
    """Return message for missing payment record."""
    return f"Payment record {record_id} not found"


def overpayment(amount: Decimal, max_amount: Decimal) -> str:
    """Return message when a payment exceeds the remaining balance."""
    return f"Payment of {amount} exceeds the remaining balance. Enter up to {max_amount}."


def amount_below_paid(amount: Decimal, total_paid: Decimal) -> str:
    """Return message when a job amount would drop under recorded payments."""
    return (
        f"Job amount {amount} is less than the {total_paid} already recorded. "
        "Remove payment records first."
    )


def client_delete_blocked(client_name: str, job_count: int) -> str:
    """Return message when a client still has jobs."""
    return (
        f"Cannot delete \"{client_name}\": they have {job_count} "
        f"job{'s' if job_count != 1 else ''}. Delete or reassign jobs first."
    )
