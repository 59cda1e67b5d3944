"""Database layer for loanledger application."""

from loanledger.database.base import Database
from loanledger.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
