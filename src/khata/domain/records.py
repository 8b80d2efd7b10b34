"""Validation and normalization of job and payment record payloads.

Everything here runs before any store mutation, so a payload that fails
validation is never partially applied.
"""

from decimal import Decimal
from typing import Any, Optional

from khata.domain.entities import Currency, DEFAULT_CURRENCY, JobStatus
from khata.domain.errors import ValidationError
from khata.utils.amount_parser import coerce_amount

EDITABLE_JOB_FIELDS = frozenset(
    {"amount", "currency", "work_description", "notes", "client_id"}
)


def parse_status(value: Any) -> JobStatus:
    """Return the JobStatus named by ``value``.

    Raises:
        ValidationError: If ``value`` is not one of the four statuses
    """
    if isinstance(value, JobStatus):
        return value
    try:
        return JobStatus(value)
    except ValueError:
        pass
    if isinstance(value, str):
        for status in JobStatus:
            if status.value.lower() == value.strip().lower():
                return status
    allowed = ", ".join(s.value for s in JobStatus)
    raise ValidationError(f"Unknown status {value!r}. Expected one of: {allowed}")


def status_or_default(value: Any) -> JobStatus:
    """Record-normalization fallback: unknown stored statuses read as Pending."""
    try:
        return parse_status(value)
    except ValidationError:
        return JobStatus.PENDING


def parse_currency(value: Any) -> Currency:
    """Return the Currency named by ``value``; missing values mean BDT.

    Raises:
        ValidationError: If ``value`` names an unsupported currency
    """
    if value is None or value == "":
        return DEFAULT_CURRENCY
    if isinstance(value, Currency):
        return value
    if isinstance(value, str):
        try:
            return Currency(value.strip().upper())
        except ValueError:
            pass
    allowed = ", ".join(c.value for c in Currency)
    raise ValidationError(f"Unknown currency {value!r}. Expected one of: {allowed}")


def currency_or_default(value: Any) -> Currency:
    """Stored records with a missing or unknown currency read as BDT."""
    try:
        return parse_currency(value)
    except ValidationError:
        return DEFAULT_CURRENCY


def parse_job_amount(value: Any) -> Decimal:
    try:
        amount = coerce_amount(value)
    except ValueError as e:
        raise ValidationError(f"Invalid job amount: {e}")
    if amount < 0:
        raise ValidationError(f"Job amount cannot be negative, got {amount}")
    return amount


def parse_payment_amount(value: Any) -> Decimal:
    try:
        amount = coerce_amount(value)
    except ValueError as e:
        raise ValidationError(f"Invalid payment amount: {e}")
    if amount <= 0:
        raise ValidationError(f"Payment amount must be greater than zero, got {amount}")
    return amount


def _text(value: Any) -> str:
    return "" if value is None else str(value).strip()


def normalize_job_fields(fields: dict[str, Any], partial: bool = False) -> dict[str, Any]:
    """Validate a job create/edit payload.

    Args:
        fields: Raw field values keyed by job attribute name
        partial: True for edits, where only the given fields are checked

    Returns:
        Dict of normalized values, containing only the keys that were given
        (plus defaults for a full create payload)

    Raises:
        ValidationError: On unknown or non-editable keys, a missing client,
            a non-numeric or negative amount, or an unknown currency
    """
    unknown = sorted(set(fields) - EDITABLE_JOB_FIELDS)
    if unknown:
        if "status" in unknown:
            raise ValidationError("Status cannot be edited directly; change it with a status transition")
        raise ValidationError(f"Unknown or read-only job fields: {', '.join(unknown)}")

    normalized: dict[str, Any] = {}

    if "client_id" in fields or not partial:
        client_id = _text(fields.get("client_id"))
        if not client_id:
            raise ValidationError("A job needs a client")
        normalized["client_id"] = client_id

    if "amount" in fields or not partial:
        if fields.get("amount") is None:
            raise ValidationError("A job needs an amount")
        normalized["amount"] = parse_job_amount(fields["amount"])

    if "currency" in fields or not partial:
        normalized["currency"] = parse_currency(fields.get("currency"))

    for key in ("work_description", "notes"):
        if key in fields or not partial:
            normalized[key] = _text(fields.get(key))

    return normalized


def normalize_payment_fields(
    job_id: Any, amount: Any, note: Optional[str] = None
) -> dict[str, Any]:
    """Validate a payment record payload.

    Raises:
        ValidationError: If the job id is empty or the amount is not positive
    """
    job_id = _text(job_id)
    if not job_id:
        raise ValidationError("A payment needs a job")
    return {
        "job_id": job_id,
        "amount": parse_payment_amount(amount),
        "note": _text(note),
    }
