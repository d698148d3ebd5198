"""CLI helpers for date range resolution."""

from datetime import date

import click

from ledgerbook.utils.date_parser import PERIODS, get_date_range, parse_date

PERIOD_FLAGS = ", ".join(f"--{period}" for period in PERIODS)


def period_options(command):
    """Attach the --this-month/--last-year/... flags to a command."""
    for period in reversed(PERIODS):
        human = period.replace("-", " ")
        command = click.option(
            f"--{period}", is_flag=True, help=f"Limit to {human}"
        )(command)
    return command


def collect_period_flags(kwargs: dict) -> dict[str, bool]:
    """Pop period flag values from a command's keyword arguments."""
    return {period: bool(kwargs.pop(period.replace("-", "_"), False)) for period in PERIODS}


def parse_cli_date(ctx, value: str | None, label: str) -> date | None:
    """Parse an optional date option, exiting with an error if invalid."""
    if not value:
        return None
    try:
        return parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


def resolve_cli_date_range(
    ctx,
    *,
    start_date: str | None,
    end_date: str | None,
    period_flags: dict[str, bool],
) -> tuple[date | None, date | None]:
    """Resolve CLI date range from period flags or explicit dates."""
    selected = [period for period, is_set in period_flags.items() if is_set]

    if len(selected) > 1:
        click.echo(
            f"Error: Only one period option ({PERIOD_FLAGS}) can be specified at a time.",
            err=True,
        )
        ctx.exit(1)

    if selected and (start_date or end_date):
        click.echo(
            "Error: Period options (--this-month, --this-year, etc.) cannot be combined with --start-date or --end-date.",
            err=True,
        )
        ctx.exit(1)

    if selected:
        return get_date_range(selected[0])

    start = parse_cli_date(ctx, start_date, "start date")
    end = parse_cli_date(ctx, end_date, "end date")
    return start, end
