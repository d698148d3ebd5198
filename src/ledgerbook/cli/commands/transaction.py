"""Transaction management commands."""

import click
from ledgerbook.cli.account_resolution import resolve_account_or_exit
from ledgerbook.cli.date_filters import parse_cli_date
from ledgerbook.cli.error_handling import handle_domain_error
from ledgerbook.domain.account import AccountService
from ledgerbook.domain.entities import LineInput, Transaction
from ledgerbook.domain.errors import DomainError
from ledgerbook.domain.transaction import DEFAULT_PAGE_SIZE, TransactionService
from ledgerbook.utils.amount_parser import parse_posting

POSTING_HELP = "ACCOUNT=AMOUNT, where ACCOUNT is a name or ID (repeatable)"


def _build_lines(ctx, account_service: AccountService, debits, credits) -> list[LineInput]:
    """Turn --debit/--credit options into line inputs, debits first."""
    lines = []
    for side, postings in (("debit", debits), ("credit", credits)):
        for posting in postings:
            try:
                account_ref, amount = parse_posting(posting)
            except ValueError as e:
                click.echo(f"Error: Invalid --{side}: {e}", err=True)
                ctx.exit(1)
            account_id = resolve_account_or_exit(ctx, account_service, account_ref)
            if side == "debit":
                lines.append(LineInput(account_id=account_id, debit_amount=amount))
            else:
                lines.append(LineInput(account_id=account_id, credit_amount=amount))
    return lines


def _echo_transaction(txn: Transaction) -> None:
    click.echo(f"\nTransaction {txn.id} | {txn.date} | {txn.description}")
    click.echo("-" * 72)
    for line in txn.lines:
        debit = f"{line.debit_amount:,.2f}" if line.debit_amount else ""
        credit = f"{line.credit_amount:,.2f}" if line.credit_amount else ""
        click.echo(f"  {line.account_name:30s} {debit:>16s} {credit:>16s}")
    click.echo(f"  {'Total':30s} {txn.total_debit:>16,.2f} {txn.total_credit:>16,.2f}")


@click.group()
def transaction_group():
    """Record and manage transactions."""
    pass


@transaction_group.command("add")
@click.option("--date", "date_str", required=True, help="Transaction date (YYYY-MM-DD or relative like 'today')")
@click.option("--description", default="", help="Transaction description")
@click.option("--debit", "debits", multiple=True, help=POSTING_HELP)
@click.option("--credit", "credits", multiple=True, help=POSTING_HELP)
@click.pass_context
def add_transaction(ctx, date_str: str, description: str, debits: tuple, credits: tuple) -> None:
    """Record a balanced transaction.

    Debits must equal credits.

    Examples:
        ledgerbook transaction add --date 2024-01-01 --description "Sale" \\
            --debit Cash=100 --credit Sales=100
        ledgerbook transaction add --date today --debit Rent=1200 \\
            --credit Cash=1000 --credit "Credit Card=200"
    """
    db = ctx.obj["db"]
    service = TransactionService(db)
    txn_date = parse_cli_date(ctx, date_str, "date")
    lines = _build_lines(ctx, AccountService(db), debits, credits)

    try:
        transaction_id = service.create_transaction(date=txn_date, description=description, lines=lines)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created transaction {transaction_id}")


@transaction_group.command("update")
@click.argument("transaction_id", type=int)
@click.option("--date", "date_str", help="New transaction date")
@click.option("--description", help="New description")
@click.option("--debit", "debits", multiple=True, help=POSTING_HELP)
@click.option("--credit", "credits", multiple=True, help=POSTING_HELP)
@click.pass_context
def update_transaction(
    ctx, transaction_id: int, date_str: str | None, description: str | None, debits: tuple, credits: tuple
) -> None:
    """Replace a transaction's lines and optionally its date and description.

    The full set of lines must be given again; the old lines are discarded.

    Examples:
        ledgerbook transaction update 7 --debit Cash=150 --credit Sales=150
        ledgerbook transaction update 7 --date 2024-02-01 --description "Refund" \\
            --debit Sales=20 --credit Cash=20
    """
    db = ctx.obj["db"]
    service = TransactionService(db)

    current = service.get_transaction(transaction_id)
    if current is None:
        click.echo(f"Error: Transaction {transaction_id} not found", err=True)
        ctx.exit(1)

    txn_date = parse_cli_date(ctx, date_str, "date") or current.date
    lines = _build_lines(ctx, AccountService(db), debits, credits)

    try:
        updated = service.update_transaction(
            transaction_id=transaction_id,
            date=txn_date,
            description=description if description is not None else current.description,
            lines=lines,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated transaction {updated.id}")


@transaction_group.command("show")
@click.argument("transaction_id", type=int)
@click.pass_context
def show_transaction(ctx, transaction_id: int) -> None:
    """Show one transaction with its lines."""
    service = TransactionService(ctx.obj["db"])
    try:
        txn = service.get_transaction(transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    if txn is None:
        click.echo(f"Error: Transaction {transaction_id} not found", err=True)
        ctx.exit(1)
    _echo_transaction(txn)


@transaction_group.command("delete")
@click.argument("transaction_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_transaction(ctx, transaction_id: int, yes: bool) -> None:
    """Delete a transaction and all of its lines."""
    service = TransactionService(ctx.obj["db"])

    if not yes and not click.confirm(f"Are you sure you want to delete transaction {transaction_id}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_transaction(transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted transaction {transaction_id}")


@transaction_group.command("list")
@click.option("--page", type=int, default=1, show_default=True, help="Page number")
@click.option("--page-size", type=int, default=DEFAULT_PAGE_SIZE, show_default=True, help="Transactions per page")
@click.option("--search", help="Match description (case-insensitive)")
@click.pass_context
def list_transactions(ctx, page: int, page_size: int, search: str | None) -> None:
    """List transactions, newest first."""
    service = TransactionService(ctx.obj["db"])

    try:
        result = service.list_transactions(page=page, page_size=page_size, search=search)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not result.items:
        click.echo("No transactions found.")
        return

    for txn in result.items:
        _echo_transaction(txn)
    click.echo(f"\nPage {result.page} of {result.total_pages} ({result.total} transactions)")


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
