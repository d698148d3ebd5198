"""Transaction domain service."""

import logging
import math
from collections.abc import Mapping
from datetime import date, datetime
from typing import Iterable, Optional, Union

from ledgerbook.database.base import Database
from ledgerbook.domain.balance import normalize_lines
from ledgerbook.domain.entities import (
    LineInput,
    PostingLine,
    Transaction as TransactionEntity,
    TransactionFilter,
    TransactionPage,
)
from ledgerbook.domain.errors import (
    NotFoundError,
    ValidationError,
    account_not_found,
    transaction_not_found,
)

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 20

LinesArg = Iterable[Union[LineInput, Mapping]]


def _check_date(value: object) -> date:
    # datetime is a date subclass; only calendar dates are accepted
    if value is None:
        raise ValidationError("Transaction date is required")
    if isinstance(value, datetime) or not isinstance(value, date):
        raise ValidationError(f"Transaction date must be a calendar date, got {value!r}")
    return value


class TransactionService:
    """Service for recording balanced transactions."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db

    def _prepare(self, txn_date: object, description: Optional[str], lines: LinesArg) -> tuple[date, str, list[PostingLine]]:
        """Validate a full transaction before anything is written."""
        txn_date = _check_date(txn_date)
        postings = normalize_lines(lines)

        referenced = {line.account_id for line in postings}
        missing = sorted(referenced - self.db.existing_account_ids(sorted(referenced)))
        if missing:
            raise ValidationError(account_not_found(missing[0]))

        return txn_date, (description or "").strip(), postings

    def create_transaction(
        self,
        date: date,
        description: Optional[str],
        lines: LinesArg,
    ) -> int:
        """Record a new transaction.

        Args:
            date: Transaction date
            description: Free-text description
            lines: Postings (LineInput or mappings with account_id,
                debit_amount and credit_amount)

        Returns:
            Transaction ID

        Raises:
            ValidationError: If the date, a line, or an account reference is
                invalid, or fewer than two usable lines are given
            ImbalanceError: If debits and credits differ by more than 0.01
        """
        try:
            txn_date, description, postings = self._prepare(date, description, lines)
        except ValidationError as e:
            logger.info("Rejected new transaction: %s", e, extra={"operation": "create_transaction"})
            raise

        transaction_id = self.db.create_transaction(
            date=txn_date, description=description, lines=postings
        )
        logger.info(
            "Created transaction %s", transaction_id,
            extra={"transaction_id": transaction_id, "line_count": len(postings)},
        )
        return transaction_id

    def get_transaction(self, transaction_id: int) -> Optional[TransactionEntity]:
        """Get transaction by ID.

        Args:
            transaction_id: Transaction ID

        Returns:
            Transaction entity with its lines, or None if not found
        """
        return self.db.get_transaction(transaction_id)

    def update_transaction(
        self,
        transaction_id: int,
        date: date,
        description: Optional[str],
        lines: LinesArg,
    ) -> TransactionEntity:
        """Replace a transaction's header and its entire line set.

        Args:
            transaction_id: Transaction ID to update
            date: New transaction date
            description: New description
            lines: New postings; previous lines are discarded

        Returns:
            The updated transaction

        Raises:
            NotFoundError: If transaction doesn't exist
            ValidationError: Same rules as create_transaction
            ImbalanceError: If debits and credits differ by more than 0.01
        """
        # Verify transaction exists
        if self.db.get_transaction(transaction_id) is None:
            raise NotFoundError(transaction_not_found(transaction_id))

        try:
            txn_date, description, postings = self._prepare(date, description, lines)
        except ValidationError as e:
            logger.info(
                "Rejected update of transaction %s: %s", transaction_id, e,
                extra={"operation": "update_transaction", "transaction_id": transaction_id},
            )
            raise

        self.db.replace_transaction(
            transaction_id=transaction_id,
            date=txn_date,
            description=description,
            lines=postings,
        )
        logger.info(
            "Updated transaction %s", transaction_id,
            extra={"transaction_id": transaction_id, "line_count": len(postings)},
        )
        return self.db.get_transaction(transaction_id)

    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction and its lines.

        Args:
            transaction_id: Transaction ID to delete

        Raises:
            NotFoundError: If transaction doesn't exist
        """
        self.db.delete_transaction(transaction_id)
        logger.info("Deleted transaction %s", transaction_id, extra={"transaction_id": transaction_id})

    def list_transactions(
        self,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
        search: Optional[str] = None,
    ) -> TransactionPage:
        """List one page of transactions, newest first.

        Args:
            page: 1-based page number
            page_size: Transactions per page
            search: Optional case-insensitive description substring

        Returns:
            TransactionPage with items and paging totals

        Raises:
            ValidationError: If page or page_size is less than 1
        """
        if page < 1:
            raise ValidationError(f"Page must be at least 1, got {page}")
        if page_size < 1:
            raise ValidationError(f"Page size must be at least 1, got {page_size}")

        transaction_filter = TransactionFilter(search=search)
        total = self.db.count_transactions(transaction_filter)
        items = self.db.list_transactions(
            transaction_filter, limit=page_size, offset=(page - 1) * page_size
        )
        return TransactionPage(
            items=tuple(items),
            page=page,
            page_size=page_size,
            total=total,
            total_pages=math.ceil(total / page_size),
        )
