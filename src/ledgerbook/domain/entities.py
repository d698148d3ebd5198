"""Domain model entities for ledgerbook.

These are pure data classes representing ledger concepts, independent of the
database schema. Services and the store exchange these objects only; ORM rows
never leave the database layer.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional, Union


class AccountType(str, Enum):
    """Closed set of account classifications."""

    ASSET = "Asset"
    LIABILITY = "Liability"
    EQUITY = "Equity"
    REVENUE = "Revenue"
    EXPENSE = "Expense"

    @classmethod
    def parse(cls, value: Union[str, "AccountType", None]) -> "AccountType":
        """Return the member matching ``value`` (case-insensitive).

        Raises:
            ValueError: If value does not name an account type
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            wanted = value.strip().lower()
            for member in cls:
                if member.value.lower() == wanted:
                    return member
        raise ValueError(f"'{value}' is not a valid account type")


BALANCE_SHEET_TYPES = (AccountType.ASSET, AccountType.LIABILITY, AccountType.EQUITY)
INCOME_STATEMENT_TYPES = (AccountType.REVENUE, AccountType.EXPENSE)


class ReportKind(str, Enum):
    """Reports the engine can build."""

    JOURNAL = "journal"
    BALANCE_SHEET = "balance-sheet"
    INCOME_STATEMENT = "income-statement"


@dataclass(frozen=True)
class Account:
    """Chart-of-accounts entry."""

    id: int
    name: str
    account_type: AccountType
    description: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class LineInput:
    """A posting as submitted by a caller, before normalization."""

    account_id: Optional[int]
    debit_amount: Union[Decimal, int, float, str, None] = None
    credit_amount: Union[Decimal, int, float, str, None] = None


@dataclass(frozen=True)
class PostingLine:
    """A validated posting, ready to be written."""

    account_id: int
    debit_amount: Decimal
    credit_amount: Decimal


@dataclass(frozen=True)
class TransactionLine:
    """A committed posting against one account."""

    id: int
    transaction_id: int
    account_id: int
    account_name: str
    debit_amount: Decimal
    credit_amount: Decimal


@dataclass(frozen=True)
class Transaction:
    """A balanced transaction with its postings."""

    id: int
    date: date
    description: str
    created_at: datetime
    updated_at: datetime
    lines: tuple[TransactionLine, ...] = ()

    @property
    def total_debit(self) -> Decimal:
        return sum((line.debit_amount for line in self.lines), Decimal("0.00"))

    @property
    def total_credit(self) -> Decimal:
        return sum((line.credit_amount for line in self.lines), Decimal("0.00"))


@dataclass(frozen=True)
class TransactionPage:
    """One page of transactions plus paging totals."""

    items: tuple[Transaction, ...]
    page: int
    page_size: int
    total: int
    total_pages: int


@dataclass(frozen=True)
class AccountFilter:
    """Typed filter for account listings."""

    search: Optional[str] = None
    account_type: Optional[AccountType] = None


@dataclass(frozen=True)
class DateRange:
    """Inclusive date range; a missing bound is open."""

    start: Optional[date] = None
    end: Optional[date] = None


@dataclass(frozen=True)
class TransactionFilter:
    """Typed filter for transaction listings."""

    search: Optional[str] = None
    date_range: DateRange = field(default_factory=DateRange)


@dataclass(frozen=True)
class AccountTotals:
    """Debit and credit sums for one account over a date range."""

    account_id: int
    account_name: str
    account_type: AccountType
    total_debit: Decimal
    total_credit: Decimal


@dataclass(frozen=True)
class JournalRow:
    """One posting in the journal report."""

    transaction_id: int
    line_id: int
    date: date
    description: str
    account_id: int
    account_name: str
    debit_amount: Decimal
    credit_amount: Decimal


@dataclass(frozen=True)
class JournalReport:
    """Journal rows for a date range."""

    date_range: DateRange
    rows: tuple[JournalRow, ...]

    def transaction_ids(self) -> list[int]:
        """Transaction ids in report order, without repeats."""
        seen: list[int] = []
        for row in self.rows:
            if not seen or seen[-1] != row.transaction_id:
                seen.append(row.transaction_id)
        return seen


@dataclass(frozen=True)
class BalanceSheetRow:
    """Balance of one Asset, Liability or Equity account.

    ``balance`` is debit minus credit, so liabilities and equity normally
    come out negative. ``display_balance`` applies the natural sign.
    """

    account_id: int
    account_name: str
    account_type: AccountType
    balance: Decimal

    @property
    def display_balance(self) -> Decimal:
        if self.account_type == AccountType.ASSET:
            return self.balance
        return -self.balance


@dataclass(frozen=True)
class BalanceSheet:
    """Point-in-time balances with section totals."""

    as_of: date
    rows: tuple[BalanceSheetRow, ...]
    total_assets: Decimal
    total_liabilities: Decimal
    total_equity: Decimal
    net_income_to_date: Decimal

    def section(self, account_type: AccountType) -> tuple[BalanceSheetRow, ...]:
        return tuple(row for row in self.rows if row.account_type == account_type)

    @property
    def is_balanced(self) -> bool:
        """Assets equal liabilities plus equity plus unclosed earnings."""
        from ledgerbook.domain.balance import within_tolerance

        return within_tolerance(
            self.total_assets,
            self.total_liabilities + self.total_equity + self.net_income_to_date,
        )


@dataclass(frozen=True)
class IncomeStatementRow:
    """Net activity of one Revenue or Expense account.

    ``amount`` is credit minus debit, so expenses normally come out
    negative. ``display_amount`` applies the natural sign.
    """

    account_id: int
    account_name: str
    account_type: AccountType
    amount: Decimal

    @property
    def display_amount(self) -> Decimal:
        if self.account_type == AccountType.REVENUE:
            return self.amount
        return -self.amount


@dataclass(frozen=True)
class IncomeStatement:
    """Revenue and expense activity for a period."""

    date_range: DateRange
    rows: tuple[IncomeStatementRow, ...]
    total_revenue: Decimal
    total_expenses: Decimal
    net_income: Decimal

    def section(self, account_type: AccountType) -> tuple[IncomeStatementRow, ...]:
        return tuple(row for row in self.rows if row.account_type == account_type)


Report = Union[JournalReport, BalanceSheet, IncomeStatement]
