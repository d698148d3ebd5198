"""Domain layer for ledgerbook."""

__all__ = [
    "AccountService",
    "TransactionService",
    "ReportService",
]


# Services import the database layer, which imports entities from this
# package, so they are resolved lazily.
def __getattr__(name):
    if name == "AccountService":
        from ledgerbook.domain.account import AccountService
        return AccountService
    if name == "TransactionService":
        from ledgerbook.domain.transaction import TransactionService
        return TransactionService
    if name == "ReportService":
        from ledgerbook.domain.report import ReportService
        return ReportService
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
