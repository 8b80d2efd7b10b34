"""Job management commands."""

import click
from khata.cli.error_handling import handle_domain_error
from khata.cli.resolution import resolve_client_or_exit, resolve_job_or_exit
from khata.domain.client import ClientService
from khata.domain.entities import Currency, JobStatus
from khata.domain.job import JobService
from khata.domain.ledger import LedgerService
from khata.utils.currency import format_amount
from khata.utils.date_parser import format_timestamp

STATUS_CHOICES = [s.value for s in JobStatus]
CURRENCY_CHOICES = [c.value for c in Currency]


@click.group()
def job_group():
    """Manage jobs and their status."""
    pass


@job_group.command("add")
@click.option("--client", required=True, help="Client name or ID")
@click.option("--amount", required=True, help="Job amount (e.g., 15000 or 1,500.50)")
@click.option(
    "--currency",
    type=click.Choice(CURRENCY_CHOICES, case_sensitive=False),
    default="BDT",
    show_default=True,
)
@click.option("--work", "work_description", default="", help="Work description")
@click.option("--notes", default="", help="Notes")
@click.pass_context
def add_job(ctx, client: str, amount: str, currency: str, work_description: str, notes: str):
    """Add a job for a client. New jobs start as Pending.

    Examples:
        khata job add --client "Rahim Traders" --amount 15000 --work "Logo design"
        khata job add --client Acme --amount 800 --currency USD
    """
    db = ctx.obj["db"]
    service = JobService(db)
    client_id = resolve_client_or_exit(ctx, ClientService(db), client)

    try:
        job_id = service.create_job(
            ctx.obj.get("user_id"),
            {
                "client_id": client_id,
                "amount": amount,
                "currency": currency,
                "work_description": work_description,
                "notes": notes,
            },
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    job = service.require_job(job_id)
    click.echo(f"Created job {job_id}")
    click.echo(f"  Client: {job.client_name}")
    click.echo(f"  Amount: {format_amount(job.amount, job.currency.value)}")
    if job.work_description:
        click.echo(f"  Work: {job.work_description}")
    click.echo(f"  Status: {job.status.value}")


@job_group.command("list")
@click.option("--client", help="Client name or ID")
@click.option("--status", type=click.Choice(STATUS_CHOICES, case_sensitive=False))
@click.pass_context
def list_jobs(ctx, client: str | None, status: str | None):
    """List jobs, newest first."""
    db = ctx.obj["db"]
    service = JobService(db)
    ledger = LedgerService(db)
    client_id = resolve_client_or_exit(ctx, ClientService(db), client) if client else None

    jobs = service.list_jobs(client_id=client_id, status=status)
    if not jobs:
        click.echo("No jobs found.")
        return

    for job in jobs:
        currency = job.currency.value
        paid = ledger.total_paid(job.id)
        line = (
            f"{job.id} | {job.status.value:9s} | {job.client_name:20.20s} | "
            f"{job.work_description:25.25s} | {format_amount(job.amount, currency)}"
        )
        if paid > 0 and job.status != JobStatus.PAID:
            line += f" (paid {format_amount(paid, currency)})"
        click.echo(line)


@job_group.command("show")
@click.argument("job", metavar="JOB")
@click.pass_context
def show_job(ctx, job: str):
    """Show a job with its status history and payments.

    JOB is a job ID or a unique leading part of one.
    """
    db = ctx.obj["db"]
    service = JobService(db)
    ledger = LedgerService(db)
    job_id = resolve_job_or_exit(ctx, service, job)
    j = service.require_job(job_id)
    currency = j.currency.value

    click.echo(f"Job {j.id}")
    click.echo(f"  Client: {j.client_name}")
    if j.work_description:
        click.echo(f"  Work: {j.work_description}")
    if j.notes:
        click.echo(f"  Notes: {j.notes}")
    click.echo(f"  Amount: {format_amount(j.amount, currency)}")
    click.echo(f"  Status: {j.status.value}")
    click.echo(f"  Created: {format_timestamp(j.timestamp)}")
    for status in JobStatus:
        ts = j.status_timestamp(status)
        if ts is not None:
            click.echo(f"  {status.value}: {format_timestamp(ts)}")

    records = ledger.list_records(job_id=j.id)
    total = ledger.total_paid(j.id)
    click.echo(
        f"  Paid: {format_amount(total, currency)} · "
        f"Remaining: {format_amount(ledger.remaining(j), currency)}"
    )
    for r in records:
        note = f" - {r.note}" if r.note else ""
        click.echo(f"    {r.id} {format_timestamp(r.paid_at)} {format_amount(r.amount, currency)}{note}")


@job_group.command("edit")
@click.argument("job", metavar="JOB")
@click.option("--client", help="Client name or ID")
@click.option("--amount", help="Job amount")
@click.option("--currency", type=click.Choice(CURRENCY_CHOICES, case_sensitive=False))
@click.option("--work", "work_description", help="Work description")
@click.option("--notes", help="Notes")
@click.pass_context
def edit_job(
    ctx,
    job: str,
    client: str | None,
    amount: str | None,
    currency: str | None,
    work_description: str | None,
    notes: str | None,
) -> None:
    """Edit job details. Status and status dates are not changed.

    Examples:
        khata job edit 3f9a --amount 18000
        khata job edit 3f9a --client "Acme" --notes "Second revision"
    """
    db = ctx.obj["db"]
    service = JobService(db)
    job_id = resolve_job_or_exit(ctx, service, job)

    fields = {
        "amount": amount,
        "currency": currency,
        "work_description": work_description,
        "notes": notes,
    }
    if client is not None:
        fields["client_id"] = resolve_client_or_exit(ctx, ClientService(db), client)
    fields = {k: v for k, v in fields.items() if v is not None}
    if not fields:
        click.echo("Nothing to update.")
        return

    try:
        service.edit_job(job_id, fields)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated job {job_id}")


@job_group.command("status")
@click.argument("job", metavar="JOB")
@click.argument("status", type=click.Choice(STATUS_CHOICES, case_sensitive=False))
@click.option(
    "--auto-pay/--no-auto-pay",
    default=True,
    show_default=True,
    help="When delivering a job that is already paid in full, mark it Paid",
)
@click.pass_context
def set_status(ctx, job: str, status: str, auto_pay: bool):
    """Move a job to another status.

    Moving backward clears the dates of the later statuses.

    Examples:
        khata job status 3f9a Ongoing
        khata job status 3f9a Delivered
    """
    service = JobService(ctx.obj["db"])
    job_id = resolve_job_or_exit(ctx, service, job)
    try:
        result = service.set_job_status(job_id, status, auto_pay_if_fully_paid=auto_pay)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Job {job_id} is now {result.value}")
    if result.value.lower() != status.lower():
        click.echo("Payments already cover the full amount.")


@job_group.command("delete")
@click.argument("job", metavar="JOB")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_job(ctx, job: str, yes: bool):
    """Delete a job. Its payment records are kept."""
    service = JobService(ctx.obj["db"])
    job_id = resolve_job_or_exit(ctx, service, job)
    j = service.require_job(job_id)
    if not yes:
        click.confirm(f"Delete job '{j.work_description or j.id}' for {j.client_name}?", abort=True)
    try:
        service.delete_job(job_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted job {job_id}")


def register_commands(cli):
    """Register job commands with main CLI."""
    cli.add_command(job_group, name="job")
