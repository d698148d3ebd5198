"""Account management commands."""

import click
from ledgerbook.cli.account_resolution import resolve_account_or_exit
from ledgerbook.cli.error_handling import handle_domain_error
from ledgerbook.domain.account import AccountService
from ledgerbook.domain.entities import AccountType
from ledgerbook.domain.errors import DomainError

ACCOUNT_TYPES = [t.value for t in AccountType]


@click.group()
def account_group():
    """Manage the chart of accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option(
    "--type", "account_type", required=True,
    type=click.Choice(ACCOUNT_TYPES, case_sensitive=False),
    help="Account type",
)
@click.option("--description", help="Optional description")
@click.pass_context
def create_account(ctx, name: str, account_type: str, description: str | None):
    """Create a new account.

    Examples:
        ledgerbook account create "Cash" --type Asset
        ledgerbook account create "Sales" --type Revenue --description "Product sales"
    """
    service = AccountService(ctx.obj["db"])

    try:
        account = service.create_account(name=name, account_type=account_type, description=description)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created {account.account_type.value} account '{account.name}' (ID: {account.id})")


@account_group.command("list")
@click.option("--search", help="Match name or description (case-insensitive)")
@click.option(
    "--type", "account_type",
    type=click.Choice(ACCOUNT_TYPES, case_sensitive=False),
    help="Only show accounts of this type",
)
@click.pass_context
def list_accounts(ctx, search: str | None, account_type: str | None):
    """List accounts, grouped by type."""
    service = AccountService(ctx.obj["db"])

    try:
        accounts = service.list_accounts(search=search, account_type=account_type)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 72)
    for acc in accounts:
        line = f"ID: {acc.id:3d} | {acc.account_type.value:9s} | {acc.name:24s}"
        if acc.description:
            line += f" | {acc.description}"
        click.echo(line)


@account_group.command("update")
@click.argument("account", metavar="ACCOUNT")
@click.option("--name", help="New account name")
@click.option(
    "--type", "account_type",
    type=click.Choice(ACCOUNT_TYPES, case_sensitive=False),
    help="New account type",
)
@click.option("--description", help="New description (empty string clears it)")
@click.pass_context
def update_account(
    ctx, account: str, name: str | None, account_type: str | None, description: str | None
) -> None:
    """Rename, reclassify or re-describe an account.

    ACCOUNT can be an account name or ID. Options that are not given keep
    their current value.

    Examples:
        ledgerbook account update "Cash" --name "Petty Cash"
        ledgerbook account update 3 --type Liability --description ""
    """
    service = AccountService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, service, account)
    current = service.get_account(account_id)

    try:
        updated = service.update_account(
            account_id=account_id,
            name=name if name is not None else current.name,
            account_type=account_type if account_type is not None else current.account_type,
            description=description if description is not None else current.description,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated account '{updated.name}' ({updated.account_type.value})")


@account_group.command("delete")
@click.argument("account", metavar="ACCOUNT")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_account(ctx, account: str, yes: bool) -> None:
    """Delete an account.

    ACCOUNT can be an account name or ID.

    The account can only be deleted if no transaction line posts to it.

    Examples:
        ledgerbook account delete "Old Savings"
        ledgerbook account delete 4 --yes
    """
    service = AccountService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, service, account)
    account_obj = service.get_account(account_id)

    # Confirm deletion
    if not yes and not click.confirm(
        f"Are you sure you want to delete account '{account_obj.name}' (ID: {account_id})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_account(account_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted account '{account_obj.name}'")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
