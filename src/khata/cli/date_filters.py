"""CLI helpers for date range resolution."""

from datetime import datetime

import click

from khata.utils.date_parser import EPOCH, end_of_day, get_range_bounds, parse_date, utcnow


def resolve_cli_date_range(
    ctx,
    *,
    start_date: str | None,
    end_date: str | None,
    preset_flags: dict[str, bool],
) -> tuple[datetime, datetime] | None:
    """Resolve a creation-time range from preset flags or explicit days.

    Returns None when no range was requested.
    """
    preset_count = sum(1 for is_set in preset_flags.values() if is_set)

    if preset_count > 1:
        click.echo(
            "Error: Only one range option (--last-7-days, --last-30-days, --last-90-days, --this-month, --all-time) can be specified at a time.",
            err=True,
        )
        ctx.exit(1)

    if preset_count > 0 and (start_date or end_date):
        click.echo(
            "Error: Range options (--last-7-days, --this-month, etc.) cannot be combined with --start-date or --end-date.",
            err=True,
        )
        ctx.exit(1)

    if preset_count == 1:
        for preset, is_set in preset_flags.items():
            if is_set:
                return get_range_bounds(preset)

    if not start_date and not end_date:
        return None

    try:
        start = parse_date(start_date) if start_date else None
        end = parse_date(end_date) if end_date else None
    except ValueError as e:
        click.echo(f"Error: Invalid date: {e}", err=True)
        ctx.exit(1)

    if start is None:
        return (EPOCH, end_of_day(end))
    return get_range_bounds("custom", start, end or utcnow().date())
