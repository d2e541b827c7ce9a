"""Interactive command loop (prompt_toolkit-based).

Reads one line at a time at the ``>> `` prompt, splits it on whitespace and
dispatches to :mod:`personal_ledger.commands`:

- ``add <amount> <category>``: record an expense
- ``add income <amount> <category>``: record an income
- ``delete <id>``
- ``list``
- ``summary``
- ``exit`` (or end of input / Ctrl-C): leave the loop

Bad numbers are reported and the loop continues without touching the ledger.
Storage errors are not caught here and end the session.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass
from os import PathLike
from typing import Literal, TypeAlias

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter

from . import commands
from .logging_setup import get_logger

PROMPT = ">> "
COMMAND_NAMES: tuple[str, ...] = ("add", "delete", "list", "summary", "exit")

AMOUNT_ERROR = "Amount must be a number"
ID_ERROR = "ID must be a number"
UNKNOWN_COMMAND = "Unknown command. Available commands: " + ", ".join(COMMAND_NAMES)

BANNER = "\n".join(
    (
        "Personal Ledger - interactive mode",
        "Available commands: " + ", ".join(COMMAND_NAMES),
        "Add an expense:  add 15.99 food",
        "Add an income:   add income 5000 salary",
        "Delete an entry: delete 3",
    )
)

_logger = get_logger("personal_ledger.interactive")

CommandName: TypeAlias = Literal["add", "delete", "list", "summary", "exit", "unknown"]


class InvalidInputError(ValueError):
    """A numeric argument typed at the prompt could not be parsed."""


@dataclass(frozen=True, slots=True)
class ParsedCommand:
    """A recognized prompt line, ready for dispatch.

    Only the fields relevant to ``name`` are populated.
    """

    name: CommandName
    amount: float | None = None
    category: str | None = None
    is_income: bool = False
    transaction_id: int | None = None


def parse_amount(text: str) -> float:
    try:
        value = float(text)
    except ValueError:
        raise InvalidInputError(AMOUNT_ERROR) from None
    if not math.isfinite(value):
        raise InvalidInputError(AMOUNT_ERROR)
    return value


def parse_transaction_id(text: str) -> int:
    # Plain ASCII digits only; signs, underscores and exotic digits are rejected.
    if not (text.isascii() and text.isdigit()):
        raise InvalidInputError(ID_ERROR)
    return int(text)


def parse_line(line: str) -> ParsedCommand:
    """Match a prompt line against the recognized command shapes.

    Raises
    ------
    InvalidInputError
        When the shape matches but the amount or id is not a number.
    """

    match line.split():
        case ["add", "income", amount, category]:
            return ParsedCommand(
                "add", amount=parse_amount(amount), category=category, is_income=True
            )
        case ["add", amount, category]:
            return ParsedCommand("add", amount=parse_amount(amount), category=category)
        case ["delete", tx_id]:
            return ParsedCommand("delete", transaction_id=parse_transaction_id(tx_id))
        case ["list"]:
            return ParsedCommand("list")
        case ["summary"]:
            return ParsedCommand("summary")
        case ["exit"]:
            return ParsedCommand("exit")
        case _:
            return ParsedCommand("unknown")


def dispatch(path: str | PathLike[str], cmd: ParsedCommand) -> None:
    """Run the ledger operation for a parsed, non-exit command."""

    match cmd.name:
        case "add" if cmd.amount is not None and cmd.category is not None:
            commands.add_transaction(path, cmd.amount, cmd.category, cmd.is_income)
        case "delete" if cmd.transaction_id is not None:
            commands.delete_transaction(path, cmd.transaction_id)
        case "list":
            commands.list_transactions(path)
        case "summary":
            commands.show_summary(path)
        case _:
            print(UNKNOWN_COMMAND)


def _session_reader(session: PromptSession | None) -> Callable[[str], str]:
    completer = WordCompleter(list(COMMAND_NAMES), sentence=True)
    sess: PromptSession = session if session is not None else PromptSession()

    def _read(message: str) -> str:
        return sess.prompt(message, completer=completer)

    return _read


def run_interactive(
    path: str | PathLike[str],
    *,
    session: PromptSession | None = None,
    read_line: Callable[[str], str] | None = None,
) -> None:
    """Run the read-eval-print loop against the ledger at ``path``.

    Parameters
    ----------
    path:
        Ledger file; reloaded by every command.
    session:
        Optional prompt_toolkit session (e.g. bound to pipe input in tests).
    read_line:
        Optional plain ``prompt -> line`` callable used instead of
        prompt_toolkit. It signals end of input by raising ``EOFError``.
    """

    reader = read_line if read_line is not None else _session_reader(session)
    print(BANNER)

    while True:
        try:
            line = reader(PROMPT)
        except (EOFError, KeyboardInterrupt):
            break

        try:
            cmd = parse_line(line)
        except InvalidInputError as e:
            print(e)
            continue

        if cmd.name == "exit":
            break
        _logger.debug("interactive:dispatch command=%s", cmd.name)
        dispatch(path, cmd)


__all__ = [
    "AMOUNT_ERROR",
    "COMMAND_NAMES",
    "ID_ERROR",
    "PROMPT",
    "UNKNOWN_COMMAND",
    "InvalidInputError",
    "ParsedCommand",
    "dispatch",
    "parse_amount",
    "parse_line",
    "parse_transaction_id",
    "run_interactive",
]
