"""Flat-file persistence for the ledger.

The ledger lives in a single JSON file holding a top-level array of
transactions. Every command reloads and rewrites the whole file; there is no
incremental write path and nothing is cached between calls.

Atomicity: the full payload is serialized in memory, written to a sibling
``.tmp`` file and then moved into place with ``os.replace``. A failed save
leaves the previous ledger untouched.

There is no locking. Two processes saving the same path race and the last
writer wins.
"""

from __future__ import annotations

import contextlib
import os
from collections.abc import Sequence
from os import PathLike
from pathlib import Path

from pydantic import ValidationError

from .logging_setup import get_logger
from .models import LEDGER_ADAPTER, Transaction

DEFAULT_DATA_FILE = "finance_data.json"
DATA_FILE_ENV = "PERSONAL_LEDGER_DATA_FILE"

_logger = get_logger("personal_ledger.storage")


class StorageError(RuntimeError):
    """Base class for ledger file failures; carries the offending path."""

    def __init__(self, message: str, *, path: str | PathLike[str]) -> None:
        super().__init__(message)
        self.path = Path(path)


class StorageIOError(StorageError):
    """The ledger file exists but could not be opened, read or written."""


class StorageDecodeError(StorageError):
    """The ledger file is not valid JSON or does not match the ledger shape."""


def resolve_data_file(override: str | PathLike[str] | None = None) -> Path:
    """Return the ledger path to use.

    Precedence: explicit ``override``, then the ``PERSONAL_LEDGER_DATA_FILE``
    environment variable, then ``finance_data.json`` in the current working
    directory.
    """

    if override is not None and os.fspath(override).strip():
        return Path(override).expanduser()
    env_val = os.getenv(DATA_FILE_ENV)
    if env_val and env_val.strip():
        return Path(env_val.strip()).expanduser()
    return Path.cwd() / DEFAULT_DATA_FILE


def load_transactions(path: str | PathLike[str]) -> list[Transaction]:
    """Load the full ledger from ``path``.

    A missing file is an empty ledger, not an error. Both pretty-printed and
    compact JSON are accepted.

    Raises
    ------
    StorageIOError
        The file exists but cannot be read.
    StorageDecodeError
        The content is not a JSON array of transactions.
    """

    p = Path(path)
    try:
        raw = p.read_bytes()
    except FileNotFoundError:
        _logger.debug("ledger:load missing file; empty ledger path=%s", os.fspath(p))
        return []
    except OSError as e:
        raise StorageIOError(f"cannot read ledger file '{p}': {e}", path=p) from e

    try:
        transactions = LEDGER_ADAPTER.validate_json(raw)
    except ValidationError as e:
        raise StorageDecodeError(
            f"ledger file '{p}' is not a valid transaction list: "
            f"{e.error_count()} error(s), first: {_first_error(e)}",
            path=p,
        ) from e

    _logger.debug("ledger:load path=%s count=%d", os.fspath(p), len(transactions))
    return transactions


def save_transactions(path: str | PathLike[str], transactions: Sequence[Transaction]) -> None:
    """Replace the ledger at ``path`` with ``transactions`` (pretty-printed).

    The file is created if missing. Serialization happens before the
    destination is touched.

    Raises
    ------
    StorageIOError
        The temporary file could not be written or moved into place.
    """

    p = Path(path)
    payload = LEDGER_ADAPTER.dump_json(list(transactions), indent=2)
    tmp = p.with_name(p.name + ".tmp")

    try:
        tmp.write_bytes(payload)
        os.replace(tmp, p)
    except OSError as e:
        with contextlib.suppress(OSError):
            tmp.unlink()
        raise StorageIOError(f"cannot write ledger file '{p}': {e}", path=p) from e

    _logger.debug(
        "ledger:save path=%s count=%d bytes=%d",
        os.fspath(p),
        len(transactions),
        len(payload),
    )


def _first_error(err: ValidationError) -> str:
    first = err.errors()[0]
    loc = ".".join(str(part) for part in first.get("loc", ())) or "<root>"
    return f"{loc}: {first.get('msg', 'invalid value')}"


__all__ = [
    "DATA_FILE_ENV",
    "DEFAULT_DATA_FILE",
    "StorageDecodeError",
    "StorageError",
    "StorageIOError",
    "load_transactions",
    "resolve_data_file",
    "save_transactions",
]
