"""Utility for resolving account names to IDs."""

from ledgerbook.domain.account import AccountService
from ledgerbook.domain.errors import NotFoundError


def resolve_account(account_service: AccountService, account: str | int) -> int:
    """Resolve account name or ID to account ID.

    An exact name match wins over an ID, so an account named "100" can still
    be addressed by name.

    Args:
        account_service: AccountService instance
        account: Account name, or ID (int or string representation of int)

    Returns:
        Account ID

    Raises:
        NotFoundError: If account is not found
    """
    if isinstance(account, int):
        if account_service.get_account(account) is None:
            raise NotFoundError(f"Account ID {account} not found")
        return account

    by_name = account_service.get_account_by_name(account)
    if by_name is not None:
        return by_name.id

    try:
        account_id = int(account)
    except ValueError:
        raise NotFoundError(f"Account '{account}' not found")

    if account_service.get_account(account_id) is None:
        raise NotFoundError(f"Account ID {account_id} not found")
    return account_id
