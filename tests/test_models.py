from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from personal_ledger.models import Transaction, TransactionType, now_local


def test_transaction_type_renders_as_plain_name():
    assert str(TransactionType.INCOME) == "Income"
    assert str(TransactionType.EXPENSE) == "Expense"
    assert TransactionType.from_flag(True) is TransactionType.INCOME
    assert TransactionType.from_flag(False) is TransactionType.EXPENSE


def test_transaction_is_immutable(make_transaction):
    t = make_transaction(1)
    with pytest.raises(ValidationError):
        t.amount = 99.0  # type: ignore[misc]


def test_negative_amount_is_accepted(make_transaction):
    # Amounts are stored as given; the sign is not validated.
    assert make_transaction(1, amount=-12.5).amount == -12.5


@pytest.mark.parametrize("amount", [float("nan"), float("inf"), float("-inf")])
def test_non_finite_amount_is_rejected(amount):
    with pytest.raises(ValidationError):
        Transaction(
            id=1,
            amount=amount,
            category="food",
            date=now_local(),
            transaction_type=TransactionType.EXPENSE,
        )


def test_naive_timestamp_is_rejected():
    with pytest.raises(ValidationError):
        Transaction(
            id=1,
            amount=1.0,
            category="food",
            date=datetime(2026, 1, 1, 12, 0, 0),
            transaction_type=TransactionType.EXPENSE,
        )


def test_nanosecond_timestamp_is_truncated_to_microseconds():
    raw = json.dumps(
        {
            "id": 4,
            "amount": 15.99,
            "category": "food",
            "date": "2024-03-01T09:15:30.123456789+08:00",
            "transaction_type": "Expense",
        }
    )
    t = Transaction.model_validate_json(raw)
    assert t.date == datetime(2024, 3, 1, 9, 15, 30, 123456, tzinfo=timezone(timedelta(hours=8)))


def test_json_shape_uses_variant_names(make_transaction):
    data = json.loads(make_transaction(2, 5000, "salary", income=True).model_dump_json())
    assert data == {
        "id": 2,
        "amount": 5000.0,
        "category": "salary",
        "date": "2026-10-19T08:30:05.123456+02:00",
        "transaction_type": "Income",
    }


def test_now_local_is_timezone_aware():
    assert now_local().utcoffset() is not None
