"""Data models for ``personal_ledger``.

A ledger is an ordered list of :class:`Transaction` records (insertion order,
not date order). Records are immutable once created: the ledger only ever
grows by appending or shrinks by removing whole records.

On disk each record is a JSON object::

    {
      "id": 3,
      "amount": 15.99,
      "category": "food",
      "date": "2026-10-19T08:30:00.123456+02:00",
      "transaction_type": "Expense"
    }
"""

from __future__ import annotations

import re
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, TypeAdapter, field_validator

# Fractional seconds beyond microsecond precision (e.g. nanosecond stamps).
_EXTRA_FRACTION_RE = re.compile(r"(\.\d{6})\d+")


class TransactionType(str, Enum):
    """Direction of a ledger entry.

    The value doubles as the external JSON tag and as the display string.
    """

    INCOME = "Income"
    EXPENSE = "Expense"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_flag(cls, is_income: bool) -> TransactionType:
        return cls.INCOME if is_income else cls.EXPENSE


class Transaction(BaseModel):
    """One recorded income or expense event.

    Attributes
    ----------
    id:
        Ledger-unique, non-negative identifier. New ids are one past the
        current maximum, so an id freed by deleting the highest entry is
        handed out again.
    amount:
        Amount of money. The sign is not validated; only finite values are
        accepted because NaN/infinity have no JSON representation.
    category:
        Free-text label, stored verbatim (case-sensitive, no trimming).
    date:
        Timezone-aware creation timestamp.
    transaction_type:
        ``Income`` or ``Expense``.
    """

    model_config = ConfigDict(frozen=True, strict=True)

    id: int = Field(ge=0)
    amount: float = Field(allow_inf_nan=False)
    category: str
    date: AwareDatetime
    transaction_type: TransactionType

    @field_validator("date", mode="before")
    @classmethod
    def _truncate_sub_microseconds(cls, v: Any) -> Any:
        if isinstance(v, str):
            return _EXTRA_FRACTION_RE.sub(r"\1", v, count=1)
        return v

    @property
    def is_income(self) -> bool:
        return self.transaction_type is TransactionType.INCOME


def now_local() -> datetime:
    """Current wall-clock time in the local timezone, with its UTC offset."""

    return datetime.now().astimezone()


# Adapter for the top-level JSON array persisted by ``storage``.
LEDGER_ADAPTER: TypeAdapter[list[Transaction]] = TypeAdapter(list[Transaction])


__all__ = [
    "LEDGER_ADAPTER",
    "Transaction",
    "TransactionType",
    "now_local",
]
