"""Public interface for the ``personal_ledger`` package.

Symbol re-exports only; the console entry point lives in
``personal_ledger.cli``.
"""

from .commands import (
    LedgerSummary,
    add_transaction,
    delete_transaction,
    list_transactions,
    next_transaction_id,
    show_summary,
    summarize,
)
from .interactive import InvalidInputError, parse_line, run_interactive
from .models import Transaction, TransactionType
from .storage import (
    StorageDecodeError,
    StorageError,
    StorageIOError,
    load_transactions,
    resolve_data_file,
    save_transactions,
)

__all__ = [
    # Commands
    "add_transaction",
    "delete_transaction",
    "list_transactions",
    "show_summary",
    "summarize",
    "next_transaction_id",
    "LedgerSummary",
    # Interactive
    "run_interactive",
    "parse_line",
    "InvalidInputError",
    # Storage
    "load_transactions",
    "save_transactions",
    "resolve_data_file",
    "StorageError",
    "StorageIOError",
    "StorageDecodeError",
    # Models
    "Transaction",
    "TransactionType",
]
