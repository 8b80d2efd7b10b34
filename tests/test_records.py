"""Tests for job and payment payload normalization."""

from decimal import Decimal

import pytest

from khata.domain.entities import Currency, JobStatus
from khata.domain.errors import ValidationError
from khata.domain.records import (
    currency_or_default,
    normalize_job_fields,
    normalize_payment_fields,
    parse_currency,
    parse_status,
    status_or_default,
)


class TestStatusParsing:
    def test_exact_and_case_insensitive(self):
        assert parse_status("Ongoing") is JobStatus.ONGOING
        assert parse_status("delivered") is JobStatus.DELIVERED
        assert parse_status(JobStatus.PAID) is JobStatus.PAID

    def test_unknown_status_rejected(self):
        with pytest.raises(ValidationError, match="Unknown status"):
            parse_status("Cancelled")

    def test_fallback_reads_unknown_as_pending(self):
        assert status_or_default("Cancelled") is JobStatus.PENDING
        assert status_or_default(None) is JobStatus.PENDING
        assert status_or_default("Paid") is JobStatus.PAID


class TestCurrencyParsing:
    def test_missing_defaults_to_bdt(self):
        assert parse_currency(None) is Currency.BDT
        assert parse_currency("") is Currency.BDT

    def test_lowercase_accepted(self):
        assert parse_currency("usd") is Currency.USD

    def test_unknown_currency_rejected(self):
        with pytest.raises(ValidationError, match="Unknown currency"):
            parse_currency("GBP")

    def test_stored_unknown_reads_as_bdt(self):
        assert currency_or_default("GBP") is Currency.BDT


class TestNormalizeJobFields:
    def test_full_payload_gets_defaults(self):
        fields = normalize_job_fields({"client_id": "c1", "amount": "1,000"})
        assert fields == {
            "client_id": "c1",
            "amount": Decimal("1000.00"),
            "currency": Currency.BDT,
            "work_description": "",
            "notes": "",
        }

    def test_text_is_trimmed(self):
        fields = normalize_job_fields(
            {"client_id": " c1 ", "amount": 5, "notes": "  rush job  "}
        )
        assert fields["client_id"] == "c1"
        assert fields["notes"] == "rush job"

    def test_client_required(self):
        with pytest.raises(ValidationError, match="needs a client"):
            normalize_job_fields({"amount": 100})

    def test_amount_required(self):
        with pytest.raises(ValidationError, match="needs an amount"):
            normalize_job_fields({"client_id": "c1"})

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            normalize_job_fields({"client_id": "c1", "amount": -1})

    def test_non_numeric_amount_rejected(self):
        with pytest.raises(ValidationError, match="Invalid job amount"):
            normalize_job_fields({"client_id": "c1", "amount": "lots"})

    def test_zero_amount_allowed(self):
        assert normalize_job_fields({"client_id": "c1", "amount": 0})["amount"] == 0

    def test_partial_only_returns_given_fields(self):
        assert normalize_job_fields({"notes": "x"}, partial=True) == {"notes": "x"}

    def test_status_is_not_editable(self):
        with pytest.raises(ValidationError, match="status transition"):
            normalize_job_fields({"status": "Paid"}, partial=True)

    def test_read_only_fields_rejected(self):
        with pytest.raises(ValidationError, match="paid_at"):
            normalize_job_fields({"paid_at": None}, partial=True)


class TestNormalizePaymentFields:
    def test_valid_payment(self):
        assert normalize_payment_fields("job1", "250.5", "  cash ") == {
            "job_id": "job1",
            "amount": Decimal("250.50"),
            "note": "cash",
        }

    @pytest.mark.parametrize("amount", [0, -10, "0.00"])
    def test_amount_must_be_positive(self, amount):
        with pytest.raises(ValidationError, match="greater than zero"):
            normalize_payment_fields("job1", amount)

    def test_job_required(self):
        with pytest.raises(ValidationError, match="needs a job"):
            normalize_payment_fields("", 10)
