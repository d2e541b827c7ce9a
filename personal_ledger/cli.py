"""CLI for the ``personal_ledger`` package.

The console interface is Typer-based. Plain ``cmd_*`` handlers hold the
error handling and return a process exit code; the Typer commands below only
parse arguments and forward to them. Environment variables are loaded from a
local ``.env`` (without overriding the existing environment) before any
command runs.

Usage
-----
``personal-ledger [--data-file FILE] add AMOUNT CATEGORY [--income]``
``personal-ledger [--data-file FILE] delete ID``
``personal-ledger [--data-file FILE] list``
``personal-ledger [--data-file FILE] summary``
``personal-ledger [--data-file FILE] [interactive]``
"""

from __future__ import annotations

import math
import sys
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from typer.models import OptionInfo

from . import commands
from .interactive import run_interactive
from .logging_setup import configure_logging, get_logger
from .storage import DATA_FILE_ENV, StorageError, resolve_data_file

_logger = get_logger("personal_ledger.cli")


def _report_storage_error(e: StorageError) -> int:
    _logger.debug("cli:storage_error path=%s", e.path, exc_info=True)
    print(f"Error: {e}", file=sys.stderr)
    return 1


# ---- Command handlers ---------------------------------------------------------


def cmd_add(data_file: Path, amount: float, category: str, *, is_income: bool) -> int:
    """Add one transaction. Returns ``0`` on success, ``1`` on storage errors."""

    try:
        commands.add_transaction(data_file, amount, category, is_income)
    except StorageError as e:
        return _report_storage_error(e)
    return 0


def cmd_delete(data_file: Path, transaction_id: int) -> int:
    """Delete by id. An unknown id is reported on stdout and still exits ``0``."""

    try:
        commands.delete_transaction(data_file, transaction_id)
    except StorageError as e:
        return _report_storage_error(e)
    return 0


def cmd_list(data_file: Path) -> int:
    try:
        commands.list_transactions(data_file)
    except StorageError as e:
        return _report_storage_error(e)
    return 0


def cmd_summary(data_file: Path) -> int:
    try:
        commands.show_summary(data_file)
    except StorageError as e:
        return _report_storage_error(e)
    return 0


def cmd_interactive(data_file: Path) -> int:
    """Run the interactive loop; a storage error ends the session with ``1``."""

    try:
        run_interactive(data_file)
    except StorageError as e:
        return _report_storage_error(e)
    return 0


# ---- Typer-based console interface --------------------------------------------


app = typer.Typer(
    add_completion=False,
    help=(
        "Personal finance ledger: record income and expenses in a JSON file and "
        "report totals. Runs in interactive mode when no command is given."
    ),
)


def _package_version() -> str:
    try:
        return version("personal-ledger")
    except PackageNotFoundError:
        return "unknown"


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"personal-ledger {_package_version()}")
        raise typer.Exit()


def _finite_amount(value: float) -> float:
    if not math.isfinite(value):
        raise typer.BadParameter("amount must be a finite number")
    return value


# Module-level option objects keep calls out of parameter defaults (ruff B008).
DATA_FILE_OPTION: OptionInfo = typer.Option(
    "--data-file",
    "-d",
    metavar="FILE",
    help=f"Ledger JSON file (default: ${DATA_FILE_ENV} or ./finance_data.json).",
    dir_okay=False,
    file_okay=True,
)

VERSION_OPTION: OptionInfo = typer.Option(
    "--version",
    callback=_version_callback,
    is_eager=True,
    help="Show the version and exit.",
)


def _data_file(ctx: typer.Context) -> Path:
    # Resolved once by _root and inherited by every subcommand context.
    return ctx.obj


@app.command("add")
def add_cmd(
    ctx: typer.Context,
    amount: Annotated[float, typer.Argument(callback=_finite_amount, help="Amount of money.")],
    category: Annotated[str, typer.Argument(help="Free-text category label.")],
    income: Annotated[
        bool, typer.Option("--income", "-i", help="Record an income instead of an expense.")
    ] = False,
) -> None:
    """Add a new transaction."""

    raise typer.Exit(cmd_add(_data_file(ctx), amount, category, is_income=income))


@app.command("delete")
def delete_cmd(
    ctx: typer.Context,
    transaction_id: Annotated[int, typer.Argument(min=0, metavar="ID", help="Transaction id.")],
) -> None:
    """Delete the transaction with the given id."""

    raise typer.Exit(cmd_delete(_data_file(ctx), transaction_id))


@app.command("list")
def list_cmd(ctx: typer.Context) -> None:
    """List all transactions."""

    raise typer.Exit(cmd_list(_data_file(ctx)))


@app.command("summary")
def summary_cmd(ctx: typer.Context) -> None:
    """Show totals, balance and per-category breakdowns."""

    raise typer.Exit(cmd_summary(_data_file(ctx)))


@app.command("interactive")
def interactive_cmd(ctx: typer.Context) -> None:
    """Enter interactive mode."""

    raise typer.Exit(cmd_interactive(_data_file(ctx)))


@app.callback(invoke_without_command=True)
def _root(
    ctx: typer.Context,
    data_file: Annotated[Path | None, DATA_FILE_OPTION] = None,
    show_version: Annotated[bool, VERSION_OPTION] = False,
) -> None:
    """Root command.

    Loads ``.env`` from the current working directory, configures logging,
    resolves the ledger path for subcommands and falls back to interactive
    mode when no subcommand is given.
    """

    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    configure_logging()

    ctx.obj = resolve_data_file(data_file)
    _logger.debug("cli:start data_file=%s command=%s", ctx.obj, ctx.invoked_subcommand)

    if ctx.invoked_subcommand is None:
        raise typer.Exit(cmd_interactive(ctx.obj))


if __name__ == "__main__":  # pragma: no cover
    app()
