"""Pytest configuration for test isolation.

The CLI resolves the ledger path from ``--data-file``, then
``PERSONAL_LEDGER_DATA_FILE``, then ``./finance_data.json``, and loads a
``.env`` from the working directory. To keep tests hermetic every test runs in
its own temporary working directory with the ledger-related environment
variables cleared.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from personal_ledger.models import Transaction, TransactionType

_ENV_VARS = ("PERSONAL_LEDGER_DATA_FILE", "PERSONAL_LEDGER_LOG_LEVEL")

FIXED_TZ = timezone(timedelta(hours=2))


@pytest.fixture(autouse=True)
def _isolate_ledger_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    for name in _ENV_VARS:
        # setenv first so teardown also removes values a test loads from .env
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


@pytest.fixture
def ledger_path(tmp_path: Path) -> Path:
    return tmp_path / "ledger.json"


@pytest.fixture
def make_transaction() -> Callable[..., Transaction]:
    """Factory for transactions with a fixed, timezone-aware timestamp."""

    def _make(
        id: int,
        amount: float = 10.0,
        category: str = "misc",
        *,
        income: bool = False,
        date: datetime | None = None,
    ) -> Transaction:
        return Transaction(
            id=id,
            amount=amount,
            category=category,
            date=date or datetime(2026, 10, 19, 8, 30, 5, 123456, tzinfo=FIXED_TZ),
            transaction_type=TransactionType.INCOME if income else TransactionType.EXPENSE,
        )

    return _make
