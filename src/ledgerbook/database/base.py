"""Abstract database interface."""

from abc import ABC, abstractmethod
from datetime import date
from typing import Optional, Sequence

# Import entities directly to avoid circular import through domain/__init__.py
from ledgerbook.domain.entities import (
    Account,
    AccountFilter,
    AccountTotals,
    AccountType,
    DateRange,
    JournalRow,
    PostingLine,
    Transaction,
    TransactionFilter,
)


class Database(ABC):
    """Abstract store interface for ledgerbook.

    Every method is its own unit of work. Methods that write several rows
    commit them together or not at all, and store failures surface as
    ``StoreError``.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Account operations
    @abstractmethod
    def create_account(
        self, name: str, account_type: AccountType, description: Optional[str] = None
    ) -> int:
        """Create a new account. Returns account ID."""
        pass

    @abstractmethod
    def get_account(self, account_id: int) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def get_account_by_name(self, name: str) -> Optional[Account]:
        """Get account by exact name."""
        pass

    @abstractmethod
    def list_accounts(self, account_filter: Optional[AccountFilter] = None) -> list[Account]:
        """List accounts ordered by type, then name."""
        pass

    @abstractmethod
    def existing_account_ids(self, account_ids: Sequence[int]) -> set[int]:
        """Return the subset of ``account_ids`` that exist."""
        pass

    @abstractmethod
    def update_account(
        self,
        account_id: int,
        name: str,
        account_type: AccountType,
        description: Optional[str] = None,
    ) -> None:
        """Update all editable account fields."""
        pass

    @abstractmethod
    def delete_account(self, account_id: int) -> None:
        """Delete an account."""
        pass

    @abstractmethod
    def get_account_line_count(self, account_id: int) -> int:
        """Count transaction lines that reference an account."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self, date: date, description: str, lines: Sequence[PostingLine]
    ) -> int:
        """Insert a transaction header and its lines atomically. Returns transaction ID."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID, with its lines."""
        pass

    @abstractmethod
    def replace_transaction(
        self,
        transaction_id: int,
        date: date,
        description: str,
        lines: Sequence[PostingLine],
    ) -> None:
        """Update the header and swap the whole line set atomically."""
        pass

    @abstractmethod
    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction and its lines."""
        pass

    @abstractmethod
    def count_transactions(self, transaction_filter: Optional[TransactionFilter] = None) -> int:
        """Count transactions matching a filter."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        transaction_filter: Optional[TransactionFilter] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> list[Transaction]:
        """List transactions (with lines), newest date first, ties by ID descending."""
        pass

    # Report queries
    @abstractmethod
    def get_journal_rows(self, date_range: DateRange) -> list[JournalRow]:
        """Get postings in a date range, joined with account and transaction data.

        Ordered by transaction date descending, transaction ID descending,
        then line insertion order.
        """
        pass

    @abstractmethod
    def get_account_totals(
        self, account_types: Sequence[AccountType], date_range: DateRange
    ) -> list[AccountTotals]:
        """Sum debits and credits per account for the given account types.

        Only accounts with at least one posting in the range are returned.
        """
        pass
