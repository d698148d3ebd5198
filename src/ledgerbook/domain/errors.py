"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class ImbalanceError(ValidationError):
    """Transaction debits and credits do not agree."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness or usage violations."""


class StoreError(DomainError):
    """The underlying store failed.

    The message names only the operation; the underlying exception is chained
    and logged where it is raised.
    """


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def duplicate_account_name(name: str) -> str:
    """Return message for an account name that is already taken."""
    return f"Account with name '{name}' already exists"


def invalid_account_type(value: object) -> str:
    """Return message for an account type outside the chart's closed set."""
    from ledgerbook.domain.entities import AccountType

    allowed = ", ".join(t.value for t in AccountType)
    return f"Invalid account type '{value}'. Expected one of: {allowed}"


def account_delete_blocked(account_id: int, line_count: int) -> str:
    """Return message when an account is referenced by transaction lines."""
    return (
        f"Cannot delete account {account_id}: it is used by "
        f"{line_count} transaction line{'s' if line_count != 1 else ''}. "
        "Delete or change those transactions first."
    )


def unbalanced_transaction(total_debit, total_credit) -> str:
    """Return message for a transaction whose sides differ."""
    return (
        f"Debits must equal credits (debits {total_debit}, "
        f"credits {total_credit})"
    )


def store_failure(operation: str) -> str:
    """Return the caller-facing message for a store failure."""
    return f"Ledger store failure during {operation}"
