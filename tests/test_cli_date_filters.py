"""Tests for CLI date filter helpers."""

from datetime import date

import click
import pytest
from click.testing import CliRunner

from ledgerbook.cli.date_filters import (
    collect_period_flags,
    parse_cli_date,
    period_options,
    resolve_cli_date_range,
)
from ledgerbook.utils.date_parser import PERIODS, get_date_range


def _ctx() -> click.Context:
    return click.Context(click.Command("test"))


def test_period_options_round_trip_through_click():
    seen = {}

    @click.command()
    @period_options
    def command(**kwargs):
        seen.update(collect_period_flags(kwargs))
        seen["leftover"] = kwargs

    result = CliRunner().invoke(command, ["--last-month"])

    assert result.exit_code == 0
    assert seen.pop("leftover") == {}
    assert seen == {period: period == "last-month" for period in PERIODS}


def test_rejects_multiple_periods(capsys):
    with pytest.raises(click.exceptions.Exit) as excinfo:
        resolve_cli_date_range(
            _ctx(),
            start_date=None,
            end_date=None,
            period_flags={"this-month": True, "last-month": True},
        )

    assert excinfo.value.exit_code == 1
    assert "Only one period option" in capsys.readouterr().err


def test_rejects_period_with_explicit_date(capsys):
    with pytest.raises(click.exceptions.Exit) as excinfo:
        resolve_cli_date_range(
            _ctx(),
            start_date=None,
            end_date="2024-01-31",
            period_flags={"this-year": True},
        )

    assert excinfo.value.exit_code == 1
    assert "cannot be combined" in capsys.readouterr().err


def test_period_flag_selects_range():
    start, end = resolve_cli_date_range(
        _ctx(),
        start_date=None,
        end_date=None,
        period_flags={"this-month": False, "last-year": True},
    )

    assert (start, end) == get_date_range("last-year")


def test_explicit_dates_are_parsed():
    start, end = resolve_cli_date_range(
        _ctx(),
        start_date="2024-01-02",
        end_date="January 5, 2024",
        period_flags={},
    )

    assert (start, end) == (date(2024, 1, 2), date(2024, 1, 5))


def test_missing_dates_stay_open():
    assert resolve_cli_date_range(_ctx(), start_date=None, end_date=None, period_flags={}) == (None, None)


def test_invalid_start_date(capsys):
    with pytest.raises(click.exceptions.Exit) as excinfo:
        resolve_cli_date_range(
            _ctx(),
            start_date="not-a-date",
            end_date=None,
            period_flags={},
        )

    assert excinfo.value.exit_code == 1
    assert "Invalid start date" in capsys.readouterr().err


def test_parse_cli_date_blank_is_none():
    assert parse_cli_date(_ctx(), "", "as-of date") is None
