"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic so ORM rows never escape the
database package.
"""

from ledgerbook.domain import entities as domain
from ledgerbook.domain.balance import quantize
from ledgerbook.database.models import (
    Account as ORMAccount,
    Transaction as ORMTransaction,
    TransactionLine as ORMTransactionLine,
)


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        name=orm_account.name,
        account_type=domain.AccountType(orm_account.account_type),
        description=orm_account.description,
        created_at=orm_account.created_at,
    )


def transaction_line_to_domain(orm_line: ORMTransactionLine) -> domain.TransactionLine:
    """Convert SQLAlchemy TransactionLine model to domain TransactionLine entity."""
    return domain.TransactionLine(
        id=orm_line.id,
        transaction_id=orm_line.transaction_id,
        account_id=orm_line.account_id,
        account_name=orm_line.account.name,
        debit_amount=quantize(orm_line.debit_amount),
        credit_amount=quantize(orm_line.credit_amount),
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model (with lines) to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        date=orm_transaction.date,
        description=orm_transaction.description or "",
        created_at=orm_transaction.created_at,
        updated_at=orm_transaction.updated_at,
        lines=tuple(transaction_line_to_domain(line) for line in orm_transaction.lines),
    )


def journal_row_to_domain(
    orm_transaction: ORMTransaction, orm_line: ORMTransactionLine, account_name: str
) -> domain.JournalRow:
    """Build a journal row from a transaction header and one of its lines."""
    return domain.JournalRow(
        transaction_id=orm_transaction.id,
        line_id=orm_line.id,
        date=orm_transaction.date,
        description=orm_transaction.description or "",
        account_id=orm_line.account_id,
        account_name=account_name,
        debit_amount=quantize(orm_line.debit_amount),
        credit_amount=quantize(orm_line.credit_amount),
    )
