"""Financial report commands."""

import click
from ledgerbook.cli.date_filters import (
    collect_period_flags,
    parse_cli_date,
    period_options,
    resolve_cli_date_range,
)
from ledgerbook.cli.error_handling import handle_domain_error
from ledgerbook.domain.entities import (
    AccountType,
    BalanceSheet,
    IncomeStatement,
    JournalReport,
    ReportKind,
)
from ledgerbook.domain.errors import DomainError
from ledgerbook.domain.report import ReportService


def _money(amount) -> str:
    return f"{amount:,.2f}"


def _render_journal(report: JournalReport) -> None:
    if not report.rows:
        click.echo("No journal entries found.")
        return

    click.echo("\nJournal")
    click.echo("=" * 88)
    current = None
    for row in report.rows:
        if row.transaction_id != current:
            current = row.transaction_id
            click.echo(f"\n{row.date}  #{row.transaction_id}  {row.description}")
        debit = _money(row.debit_amount) if row.debit_amount else ""
        credit = _money(row.credit_amount) if row.credit_amount else ""
        click.echo(f"    {row.account_name:36s} {debit:>16s} {credit:>16s}")


def _render_balance_sheet(report: BalanceSheet) -> None:
    click.echo(f"\nBalance Sheet as of {report.as_of}")
    click.echo("=" * 60)
    totals = {
        AccountType.ASSET: ("Assets", report.total_assets),
        AccountType.LIABILITY: ("Liabilities", report.total_liabilities),
        AccountType.EQUITY: ("Equity", report.total_equity),
    }
    for account_type, (title, total) in totals.items():
        click.echo(f"\n{title}")
        for row in report.section(account_type):
            click.echo(f"  {row.account_name:40s} {_money(row.display_balance):>16s}")
        click.echo(f"  {'Total ' + title:40s} {_money(total):>16s}")

    if report.net_income_to_date:
        click.echo(f"\n  {'Net income not yet closed':40s} {_money(report.net_income_to_date):>16s}")
    status = "balanced" if report.is_balanced else "NOT balanced"
    click.echo(f"\nAssets = Liabilities + Equity: {status}")


def _render_income_statement(report: IncomeStatement) -> None:
    start = report.date_range.start or "beginning"
    click.echo(f"\nIncome Statement {start} to {report.date_range.end}")
    click.echo("=" * 60)
    sections = (
        (AccountType.REVENUE, "Revenue", report.total_revenue),
        (AccountType.EXPENSE, "Expenses", report.total_expenses),
    )
    for account_type, title, total in sections:
        click.echo(f"\n{title}")
        for row in report.section(account_type):
            click.echo(f"  {row.account_name:40s} {_money(row.display_amount):>16s}")
        click.echo(f"  {'Total ' + title:40s} {_money(total):>16s}")
    click.echo(f"\n{'Net Income':42s} {_money(report.net_income):>16s}")


_RENDERERS = {
    ReportKind.JOURNAL: _render_journal,
    ReportKind.BALANCE_SHEET: _render_balance_sheet,
    ReportKind.INCOME_STATEMENT: _render_income_statement,
}


def _run(ctx, kind: ReportKind, start, end) -> None:
    service = ReportService(ctx.obj["db"])
    try:
        result = service.run_report(kind, start=start, end=end)
    except DomainError as e:
        handle_domain_error(ctx, e)
    _RENDERERS[kind](result)


@click.group()
def report_group():
    """Produce financial reports."""
    pass


@report_group.command("journal")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@period_options
@click.pass_context
def journal(ctx, start_date: str | None, end_date: str | None, **kwargs) -> None:
    """List every posting, newest transaction first."""
    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period_flags=collect_period_flags(kwargs)
    )
    _run(ctx, ReportKind.JOURNAL, start, end)


@report_group.command("balance-sheet")
@click.option("--as-of", help="Balance date (defaults to today)")
@click.pass_context
def balance_sheet(ctx, as_of: str | None) -> None:
    """Show Asset, Liability and Equity balances."""
    _run(ctx, ReportKind.BALANCE_SHEET, None, parse_cli_date(ctx, as_of, "as-of date"))


@report_group.command("income-statement")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'this year')")
@click.option("--end-date", help="End date (defaults to today)")
@period_options
@click.pass_context
def income_statement(ctx, start_date: str | None, end_date: str | None, **kwargs) -> None:
    """Show revenue, expenses and net income for a period."""
    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period_flags=collect_period_flags(kwargs)
    )
    _run(ctx, ReportKind.INCOME_STATEMENT, start, end)


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(report_group, name="report")
