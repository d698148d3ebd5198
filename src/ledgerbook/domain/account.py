"""Account domain service."""

import logging
from typing import Optional, Union

from ledgerbook.database.base import Database
from ledgerbook.domain.entities import Account as AccountEntity, AccountFilter, AccountType
from ledgerbook.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    account_delete_blocked,
    account_not_found,
    duplicate_account_name,
    invalid_account_type,
)

logger = logging.getLogger(__name__)


def _clean_name(name: Optional[str]) -> str:
    if name is None or not str(name).strip():
        raise ValidationError("Account name is required")
    return str(name).strip()


def _clean_description(description: Optional[str]) -> Optional[str]:
    if description is None:
        return None
    description = description.strip()
    return description or None


def parse_account_type(value: Union[str, AccountType, None]) -> AccountType:
    """Validate an account type against the closed set.

    Raises:
        ValidationError: If value is missing or not a known account type
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError("Account type is required")
    try:
        return AccountType.parse(value)
    except ValueError:
        raise ValidationError(invalid_account_type(value))


class AccountService:
    """Service for managing the chart of accounts."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def list_accounts(
        self,
        search: Optional[str] = None,
        account_type: Union[str, AccountType, None] = None,
        account_filter: Optional[AccountFilter] = None,
    ) -> list[AccountEntity]:
        """List accounts sorted by type, then name.

        Args:
            search: Optional case-insensitive substring matched against name
                or description
            account_type: Optional account type to restrict to
            account_filter: Prebuilt filter; overrides search and account_type

        Returns:
            List of account entities
        """
        if account_filter is None:
            account_filter = AccountFilter(
                search=search,
                account_type=parse_account_type(account_type) if account_type else None,
            )
        return self.db.list_accounts(account_filter)

    def get_account(self, account_id: int) -> Optional[AccountEntity]:
        """Get account by ID.

        Args:
            account_id: Account ID

        Returns:
            Account entity or None if not found
        """
        return self.db.get_account(account_id)

    def get_account_by_name(self, name: str) -> Optional[AccountEntity]:
        """Get account by exact name."""
        return self.db.get_account_by_name(name.strip())

    def create_account(
        self,
        name: str,
        account_type: Union[str, AccountType],
        description: Optional[str] = None,
    ) -> AccountEntity:
        """Create a new account.

        Args:
            name: Account name
            account_type: One of Asset, Liability, Equity, Revenue, Expense
            description: Optional free-text description

        Returns:
            The created account

        Raises:
            ValidationError: If name or type is missing or type is unknown
            ConflictError: If account name already exists
        """
        name = _clean_name(name)
        parsed_type = parse_account_type(account_type)

        if self.db.get_account_by_name(name) is not None:
            raise ConflictError(duplicate_account_name(name))

        account_id = self.db.create_account(
            name=name, account_type=parsed_type, description=_clean_description(description)
        )
        logger.info(
            "Created account %s", name,
            extra={"account_id": account_id, "account_type": parsed_type.value},
        )
        return self.db.get_account(account_id)

    def update_account(
        self,
        account_id: int,
        name: str,
        account_type: Union[str, AccountType],
        description: Optional[str] = None,
    ) -> AccountEntity:
        """Rename, reclassify or re-describe an account.

        The type is validated against the closed set here as well as on
        create.

        Args:
            account_id: Account ID to update
            name: New account name
            account_type: New account type
            description: New description (None clears it)

        Returns:
            The updated account

        Raises:
            NotFoundError: If account not found
            ValidationError: If name or type is missing or type is unknown
            ConflictError: If another account already has the name
        """
        account = self.db.get_account(account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))

        name = _clean_name(name)
        parsed_type = parse_account_type(account_type)

        existing = self.db.get_account_by_name(name)
        if existing is not None and existing.id != account_id:
            raise ConflictError(duplicate_account_name(name))

        self.db.update_account(
            account_id=account_id,
            name=name,
            account_type=parsed_type,
            description=_clean_description(description),
        )
        logger.info("Updated account %s", name, extra={"account_id": account_id})
        return self.db.get_account(account_id)

    def delete_account(self, account_id: int) -> None:
        """Delete an account.

        Args:
            account_id: Account ID to delete

        Raises:
            NotFoundError: If account not found
            ConflictError: If any transaction line references the account
        """
        account = self.db.get_account(account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))

        line_count = self.db.get_account_line_count(account_id)
        if line_count > 0:
            raise ConflictError(account_delete_blocked(account_id, line_count))

        self.db.delete_account(account_id)
        logger.info("Deleted account %s", account.name, extra={"account_id": account_id})
