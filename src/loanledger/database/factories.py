"""Build the loan ledger's system of record.

The CLI and the tests both go through create_sqlite_database so the
database location is resolved in one place.
"""

import os
from pathlib import Path
from typing import Optional

from loanledger.database.sqlalchemy_db import SQLAlchemyDatabase

DB_PATH_ENV = "LOANLEDGER_DB_PATH"


def default_database_path() -> Path:
    """Return the per-user ledger file, ~/.loanledger/loanledger.db."""
    return Path.home() / ".loanledger" / "loanledger.db"


def resolve_database_path(database_path: Optional[str] = None) -> Path:
    """Pick the ledger file: explicit path, then LOANLEDGER_DB_PATH, then the default."""
    if database_path is None:
        database_path = os.environ.get(DB_PATH_ENV) or None
    if database_path is None:
        return default_database_path()
    return Path(database_path).expanduser()


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create the SQLite-backed ledger database.

    The parent directory is created on demand. Call connect() and
    initialize_schema() on the result before use.
    """
    path = resolve_database_path(database_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    return SQLAlchemyDatabase(f"sqlite:///{path}")
