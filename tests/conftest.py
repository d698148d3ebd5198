"""Shared pytest fixtures for ledgerbook tests."""

import tempfile
import os
from datetime import date
from decimal import Decimal

import pytest

from ledgerbook.database.factories import create_sqlite_database
from ledgerbook.domain.account import AccountService
from ledgerbook.domain.entities import LineInput
from ledgerbook.domain.report import ReportService
from ledgerbook.domain.transaction import TransactionService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def report_service(temp_db):
    """Create a ReportService pinned to 2024-12-31 as 'today'."""
    return ReportService(temp_db, today=lambda: date(2024, 12, 31))


@pytest.fixture
def chart(account_service):
    """Create a small chart of accounts and return accounts by name."""
    specs = [
        ("Cash", "Asset", "Checking and petty cash"),
        ("Equipment", "Asset", None),
        ("Loan", "Liability", "Bank loan"),
        ("Owner Capital", "Equity", None),
        ("Sales", "Revenue", "Product sales"),
        ("Rent", "Expense", None),
    ]
    return {
        name: account_service.create_account(name=name, account_type=account_type, description=description)
        for name, account_type, description in specs
    }


def post(transaction_service, chart, txn_date, description, debits, credits):
    """Record a transaction from {account_name: amount} debit and credit maps."""
    lines = [
        LineInput(account_id=chart[name].id, debit_amount=Decimal(str(amount)))
        for name, amount in debits.items()
    ] + [
        LineInput(account_id=chart[name].id, credit_amount=Decimal(str(amount)))
        for name, amount in credits.items()
    ]
    return transaction_service.create_transaction(date=txn_date, description=description, lines=lines)


@pytest.fixture
def post_transaction(transaction_service, chart):
    """Return a helper that records a transaction against the sample chart."""

    def _post(txn_date, description, debits, credits):
        return post(transaction_service, chart, txn_date, description, debits, credits)

    return _post


@pytest.fixture
def sample_ledger(transaction_service, chart):
    """A year of activity touching every account type.

    Cash 10000 - 2500 - 1200 + 4000 + 3000 = 13300
    Equipment 2500, Loan 3000, Owner Capital 10000
    Sales 4000, Rent 1200
    """
    ids = [
        post(transaction_service, chart, date(2024, 1, 1), "Owner investment",
             {"Cash": 10000}, {"Owner Capital": 10000}),
        post(transaction_service, chart, date(2024, 1, 15), "Buy laptop",
             {"Equipment": 2500}, {"Cash": 2500}),
        post(transaction_service, chart, date(2024, 2, 1), "February rent",
             {"Rent": 1200}, {"Cash": 1200}),
        post(transaction_service, chart, date(2024, 2, 20), "Consulting sale",
             {"Cash": 4000}, {"Sales": 4000}),
        post(transaction_service, chart, date(2024, 3, 5), "Bank loan",
             {"Cash": 3000}, {"Loan": 3000}),
    ]
    return ids


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
