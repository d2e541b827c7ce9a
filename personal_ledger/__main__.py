"""``python -m personal_ledger``."""

from .cli import app

app(prog_name="personal-ledger")
