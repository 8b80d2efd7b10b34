"""Payment ledger commands."""

import click
from khata.cli.error_handling import handle_domain_error
from khata.cli.resolution import resolve_job_or_exit, resolve_record_or_exit
from khata.domain.job import JobService
from khata.domain.ledger import LedgerService
from khata.utils.currency import format_amount
from khata.utils.date_parser import format_timestamp


@click.group()
def payment_group():
    """Record and remove payments."""
    pass


@payment_group.command("add")
@click.argument("job", metavar="JOB")
@click.argument("amount")
@click.option("--note", help="Note for this payment")
@click.pass_context
def add_payment(ctx, job: str, amount: str, note: str | None):
    """Record a payment against a job.

    A Delivered job that becomes paid in full is marked Paid.

    Examples:
        khata payment add 3f9a 5000
        khata payment add 3f9a 10000 --note "Final installment"
    """
    db = ctx.obj["db"]
    jobs = JobService(db)
    ledger = LedgerService(db)
    job_id = resolve_job_or_exit(ctx, jobs, job)
    currency = jobs.require_job(job_id).currency.value

    try:
        record_id = ledger.add_payment(job_id, amount, note=note, recorder_id=ctx.obj.get("user_id"))
    except ValueError as e:
        handle_domain_error(ctx, e, currency=currency)

    j = jobs.require_job(job_id)
    click.echo(f"Recorded payment {record_id}")
    click.echo(
        f"  Paid {format_amount(ledger.total_paid(job_id), currency)} of "
        f"{format_amount(j.amount, currency)} · Status: {j.status.value}"
    )


@payment_group.command("list")
@click.option("--job", help="Only payments for this job")
@click.pass_context
def list_payments(ctx, job: str | None):
    """List payments, newest first."""
    db = ctx.obj["db"]
    jobs = JobService(db)
    ledger = LedgerService(db)
    job_id = resolve_job_or_exit(ctx, jobs, job) if job else None

    records = ledger.list_records(job_id=job_id)
    if not records:
        click.echo("No payments found.")
        return

    for r in records:
        j = jobs.get_job(r.job_id)
        # Records can outlive their job
        label = f"{j.client_name} - {j.work_description}" if j else "(deleted job)"
        currency = j.currency.value if j else "BDT"
        note = f" | {r.note}" if r.note else ""
        click.echo(
            f"{r.id} | {format_timestamp(r.paid_at)} | {format_amount(r.amount, currency):>12s} | {label}{note}"
        )


@payment_group.command("remove")
@click.argument("record", metavar="RECORD")
@click.pass_context
def remove_payment(ctx, record: str):
    """Remove a payment record.

    A Paid job that is no longer paid in full goes back to Delivered.
    """
    ledger = LedgerService(ctx.obj["db"])
    record_id = resolve_record_or_exit(ctx, ledger, record)
    try:
        ledger.remove_payment(record_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Removed payment {record_id}")


def register_commands(cli):
    """Register payment commands with main CLI."""
    cli.add_command(payment_group, name="payment")
