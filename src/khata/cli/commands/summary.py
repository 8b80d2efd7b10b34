"""Summary command."""

import click
from khata.cli.date_filters import resolve_cli_date_range
from khata.domain.entities import JobStatus
from khata.domain.summary import SummaryService
from khata.utils.currency import format_amount
from khata.utils.date_parser import format_timestamp


@click.command("summary")
@click.option("--start-date", help="First creation day (YYYY-MM-DD or relative like 'this month')")
@click.option("--end-date", help="Last creation day (YYYY-MM-DD or relative like 'today')")
@click.option("--last-7-days", is_flag=True, help="Jobs created in the last 7 days")
@click.option("--last-30-days", is_flag=True, help="Jobs created in the last 30 days")
@click.option("--last-90-days", is_flag=True, help="Jobs created in the last 90 days")
@click.option("--this-month", is_flag=True, help="Jobs created this month")
@click.option("--all-time", is_flag=True, help="All jobs (default)")
@click.pass_context
def summary(
    ctx,
    start_date: str | None,
    end_date: str | None,
    last_7_days: bool,
    last_30_days: bool,
    last_90_days: bool,
    this_month: bool,
    all_time: bool,
):
    """Show billed, paid and outstanding totals per currency."""
    date_range = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        preset_flags={
            "7d": last_7_days,
            "30d": last_30_days,
            "90d": last_90_days,
            "this-month": this_month,
            "all": all_time,
        },
    )

    stats = SummaryService(ctx.obj["db"]).get_dashboard(date_range)
    if stats.total_jobs == 0:
        click.echo("No jobs found.")
        return

    if date_range is not None:
        start, end = date_range
        click.echo(f"Jobs created {format_timestamp(start, short=True)} - {format_timestamp(end, short=True)}")

    for currency in stats.currencies:
        totals = stats.by_currency[currency]
        code = currency.value
        click.echo(f"\n{code}")
        click.echo("-" * 40)
        rows = [
            ("Total", totals.total_amount, None),
            ("Paid", totals.paid_amount, totals.paid_count),
            ("Pending", totals.pending_amount, totals.pending_count),
            ("Ongoing", totals.ongoing_amount, totals.ongoing_count),
            ("Outstanding", totals.outstanding_amount, totals.outstanding_count),
        ]
        for label, amount, count in rows:
            suffix = f"  ({count} job{'s' if count != 1 else ''})" if count is not None else ""
            click.echo(f"{label:<12} {format_amount(amount, code):>16}{suffix}")

    click.echo("")
    counts = ", ".join(f"{s.value} {stats.status_counts.get(s, 0)}" for s in JobStatus)
    click.echo(f"Jobs: {stats.total_jobs} ({counts})")
    click.echo(f"Delivered: {stats.delivered_count}")
    if stats.outstanding_count:
        click.echo(f"To collect: {stats.outstanding_count}")


def register_commands(cli):
    """Register summary command with main CLI."""
    cli.add_command(summary)
