"""Ledger operations: add, delete, list and summarize.

Each operation is a complete ``load -> mutate-or-read -> (save) -> report``
cycle against the file at ``path``. Nothing is kept in memory between calls,
so separate processes always see the latest saved ledger. Storage errors
propagate to the caller unchanged.

Reports are printed to stdout; each function also returns its result so
callers and tests do not have to parse console output.
"""

from __future__ import annotations

import os
from collections.abc import Iterable
from dataclasses import dataclass, field
from os import PathLike

from .logging_setup import get_logger
from .models import Transaction, TransactionType, now_local
from .storage import load_transactions, save_transactions

LIST_HEADER = "ID\tType\tAmount\tCategory\tDate"
LIST_SEPARATOR = "-" * 44
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_logger = get_logger("personal_ledger.commands")


@dataclass(slots=True)
class LedgerSummary:
    """Aggregated totals over a ledger.

    ``income_by_category`` and ``expense_by_category`` map each category to
    its summed amount. Key order follows first appearance in the ledger but is
    not part of the contract.
    """

    total_income: float = 0.0
    total_expense: float = 0.0
    income_by_category: dict[str, float] = field(default_factory=dict)
    expense_by_category: dict[str, float] = field(default_factory=dict)

    @property
    def balance(self) -> float:
        return self.total_income - self.total_expense


def next_transaction_id(transactions: Iterable[Transaction]) -> int:
    """One past the highest id currently in the ledger (``1`` when empty)."""

    return max((t.id for t in transactions), default=0) + 1


def summarize(transactions: Iterable[Transaction]) -> LedgerSummary:
    summary = LedgerSummary()
    for t in transactions:
        if t.transaction_type is TransactionType.INCOME:
            by_cat = summary.income_by_category
            summary.total_income += t.amount
        else:
            by_cat = summary.expense_by_category
            summary.total_expense += t.amount
        by_cat[t.category] = by_cat.get(t.category, 0.0) + t.amount
    return summary


def format_transaction_row(t: Transaction) -> str:
    return "\t".join(
        (
            str(t.id),
            str(t.transaction_type),
            f"{t.amount:.2f}",
            t.category,
            t.date.strftime(DATE_FORMAT),
        )
    )


def add_transaction(
    path: str | PathLike[str],
    amount: float,
    category: str,
    is_income: bool,
) -> Transaction:
    """Append a new transaction stamped with the current local time."""

    transactions = load_transactions(path)
    transaction = Transaction(
        id=next_transaction_id(transactions),
        amount=amount,
        category=category,
        date=now_local(),
        transaction_type=TransactionType.from_flag(is_income),
    )
    transactions.append(transaction)
    save_transactions(path, transactions)

    _logger.debug(
        "ledger:add id=%d type=%s path=%s",
        transaction.id,
        transaction.transaction_type,
        os.fspath(path),
    )
    print(f"Transaction {transaction.id} added successfully!")
    return transaction


def delete_transaction(path: str | PathLike[str], transaction_id: int) -> bool:
    """Remove the transaction with ``transaction_id``.

    Returns ``True`` when something was removed. An unknown id is reported,
    not raised, and the file is left untouched (no save).
    """

    transactions = load_transactions(path)
    remaining = [t for t in transactions if t.id != transaction_id]

    if len(remaining) == len(transactions):
        print(f"No transaction found with ID {transaction_id}")
        return False

    save_transactions(path, remaining)
    _logger.debug("ledger:delete id=%d path=%s", transaction_id, os.fspath(path))
    print(f"Deleted transaction with ID {transaction_id}")
    return True


def list_transactions(path: str | PathLike[str]) -> list[Transaction]:
    transactions = load_transactions(path)

    print(LIST_HEADER)
    print(LIST_SEPARATOR)
    for t in transactions:
        print(format_transaction_row(t))
    return transactions


def show_summary(path: str | PathLike[str]) -> LedgerSummary:
    """Print totals, balance and per-category breakdowns for the ledger."""

    summary = summarize(load_transactions(path))

    print("=== Financial Summary ===")
    print(f"Total income: {summary.total_income:.2f}")
    print(f"Total expense: {summary.total_expense:.2f}")
    print(f"Balance: {summary.balance:.2f}")

    print("\nIncome by category:")
    for category, amount in summary.income_by_category.items():
        print(f"- {category}: {amount:.2f}")

    print("\nExpense by category:")
    for category, amount in summary.expense_by_category.items():
        print(f"- {category}: {amount:.2f}")

    return summary


__all__ = [
    "DATE_FORMAT",
    "LIST_HEADER",
    "LedgerSummary",
    "add_transaction",
    "delete_transaction",
    "format_transaction_row",
    "list_transactions",
    "next_transaction_id",
    "show_summary",
    "summarize",
]
