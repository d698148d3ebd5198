"""Financial report domain service.

Reports are pure reads over committed postings. Nothing here re-validates
the balance rule; totals are aggregated as stored.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Callable, Optional

from ledgerbook.database.base import Database
from ledgerbook.domain.balance import ZERO, is_negligible
from ledgerbook.domain.entities import (
    BALANCE_SHEET_TYPES,
    INCOME_STATEMENT_TYPES,
    AccountType,
    BalanceSheet,
    BalanceSheetRow,
    DateRange,
    IncomeStatement,
    IncomeStatementRow,
    JournalReport,
    Report,
    ReportKind,
)
from ledgerbook.domain.errors import ValidationError

logger = logging.getLogger(__name__)

# Income statements list revenue before expenses
_INCOME_STATEMENT_ORDER = {AccountType.REVENUE: 0, AccountType.EXPENSE: 1}


def resolve_date_range(
    start: Optional[date], end: Optional[date], default_end: Optional[date] = None
) -> DateRange:
    """Build a DateRange, filling a missing end bound.

    Raises:
        ValidationError: If start is after end
    """
    if end is None:
        end = default_end
    if start is not None and end is not None and start > end:
        raise ValidationError(f"Start date {start} is after end date {end}")
    return DateRange(start=start, end=end)


class ReportService:
    """Service for building journal, balance sheet and income statement reports."""

    def __init__(self, db: Database, today: Optional[Callable[[], date]] = None):
        """Initialize report service.

        Args:
            db: Database instance
            today: Callable returning the current date (defaults to date.today)
        """
        self.db = db
        self.today = today or date.today

    def journal_report(
        self, start: Optional[date] = None, end: Optional[date] = None
    ) -> JournalReport:
        """Every posting of transactions dated within [start, end].

        Both bounds are open when omitted. Rows are ordered newest
        transaction first, with a transaction's lines kept together in
        insertion order.
        """
        date_range = resolve_date_range(start, end)
        return JournalReport(date_range=date_range, rows=tuple(self.db.get_journal_rows(date_range)))

    def balance_sheet(self, as_of: Optional[date] = None) -> BalanceSheet:
        """Cumulative Asset, Liability and Equity balances up to ``as_of``.

        Each balance is debit minus credit since inception. Accounts whose
        balance is within the tolerance of zero are left out.

        Args:
            as_of: Last date included (defaults to today)
        """
        as_of = as_of or self.today()
        date_range = DateRange(start=None, end=as_of)

        rows: list[BalanceSheetRow] = []
        for totals in self.db.get_account_totals(BALANCE_SHEET_TYPES, date_range):
            balance = totals.total_debit - totals.total_credit
            if is_negligible(balance):
                continue
            rows.append(
                BalanceSheetRow(
                    account_id=totals.account_id,
                    account_name=totals.account_name,
                    account_type=totals.account_type,
                    balance=balance,
                )
            )
        rows.sort(key=lambda row: (row.account_type.value, row.account_name))

        def section_total(account_type: AccountType) -> Decimal:
            return sum(
                (row.display_balance for row in rows if row.account_type == account_type),
                ZERO,
            )

        net_income_to_date = self._net_income(DateRange(start=None, end=as_of))
        sheet = BalanceSheet(
            as_of=as_of,
            rows=tuple(rows),
            total_assets=section_total(AccountType.ASSET),
            total_liabilities=section_total(AccountType.LIABILITY),
            total_equity=section_total(AccountType.EQUITY),
            net_income_to_date=net_income_to_date,
        )
        logger.debug(
            "Built balance sheet",
            extra={"as_of": as_of.isoformat(), "row_count": len(rows), "is_balanced": sheet.is_balanced},
        )
        return sheet

    def income_statement(
        self, start: Optional[date] = None, end: Optional[date] = None
    ) -> IncomeStatement:
        """Revenue and Expense activity for transactions dated within [start, end].

        Each amount is credit minus debit. Accounts with no net activity are
        left out, matching the balance sheet's treatment of zero balances.

        Args:
            start: First date included (defaults to the beginning of the ledger)
            end: Last date included (defaults to today)
        """
        date_range = resolve_date_range(start, end, default_end=self.today())
        rows = self._income_rows(date_range)

        total_revenue = sum(
            (row.display_amount for row in rows if row.account_type == AccountType.REVENUE), ZERO
        )
        total_expenses = sum(
            (row.display_amount for row in rows if row.account_type == AccountType.EXPENSE), ZERO
        )
        return IncomeStatement(
            date_range=date_range,
            rows=tuple(rows),
            total_revenue=total_revenue,
            total_expenses=total_expenses,
            net_income=total_revenue - total_expenses,
        )

    def run_report(
        self,
        kind: ReportKind,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Report:
        """Build a report by kind.

        For the balance sheet only ``end`` is used, as the as-of date.

        Raises:
            ValidationError: If kind is not a known report
        """
        builders: dict[ReportKind, Callable[[], Report]] = {
            ReportKind.JOURNAL: lambda: self.journal_report(start, end),
            ReportKind.BALANCE_SHEET: lambda: self.balance_sheet(end),
            ReportKind.INCOME_STATEMENT: lambda: self.income_statement(start, end),
        }
        try:
            kind = ReportKind(kind)
        except ValueError:
            raise ValidationError(f"Unknown report type '{kind}'")
        return builders[kind]()

    def _income_rows(self, date_range: DateRange) -> list[IncomeStatementRow]:
        rows: list[IncomeStatementRow] = []
        for totals in self.db.get_account_totals(INCOME_STATEMENT_TYPES, date_range):
            amount = totals.total_credit - totals.total_debit
            if is_negligible(amount):
                continue
            rows.append(
                IncomeStatementRow(
                    account_id=totals.account_id,
                    account_name=totals.account_name,
                    account_type=totals.account_type,
                    amount=amount,
                )
            )
        rows.sort(key=lambda row: (_INCOME_STATEMENT_ORDER[row.account_type], row.account_name))
        return rows

    def _net_income(self, date_range: DateRange) -> Decimal:
        # credit minus debit over revenue and expense accounts is revenue less expenses
        return sum((row.amount for row in self._income_rows(date_range)), ZERO)
