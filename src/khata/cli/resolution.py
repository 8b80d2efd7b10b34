"""CLI helpers for resolving clients, jobs and payment records."""

from __future__ import annotations

import click

from khata.domain.client import ClientService
from khata.domain.job import JobService
from khata.domain.ledger import LedgerService
from khata.utils.resolver import resolve_client, resolve_id_prefix


def resolve_client_or_exit(ctx: click.Context, client_service: ClientService, client: str) -> str:
    """Resolve client name or ID, or exit with a CLI error."""
    try:
        return resolve_client(client_service, client)
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)


def resolve_job_or_exit(ctx: click.Context, job_service: JobService, job: str) -> str:
    """Resolve a job ID or unique ID prefix, or exit with a CLI error."""
    try:
        return resolve_id_prefix((j.id for j in job_service.list_jobs()), job, "job")
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)


def resolve_record_or_exit(ctx: click.Context, ledger: LedgerService, record: str) -> str:
    """Resolve a payment record ID or unique ID prefix, or exit with a CLI error."""
    try:
        return resolve_id_prefix((r.id for r in ledger.list_records()), record, "payment record")
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)
