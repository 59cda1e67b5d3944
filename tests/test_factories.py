"""Tests for database factory functions."""

from pathlib import Path

from loanledger.database.factories import (
    create_sqlite_database,
    default_database_path,
    resolve_database_path,
)


def test_explicit_path_wins(monkeypatch, tmp_path):
    monkeypatch.setenv("LOANLEDGER_DB_PATH", str(tmp_path / "env.db"))
    assert resolve_database_path(str(tmp_path / "cli.db")) == tmp_path / "cli.db"


def test_environment_variable(monkeypatch, tmp_path):
    monkeypatch.setenv("LOANLEDGER_DB_PATH", str(tmp_path / "env.db"))
    assert resolve_database_path() == tmp_path / "env.db"


def test_default_path(monkeypatch, tmp_path):
    monkeypatch.delenv("LOANLEDGER_DB_PATH", raising=False)
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))
    assert resolve_database_path() == tmp_path / ".loanledger" / "loanledger.db"
    assert default_database_path() == tmp_path / ".loanledger" / "loanledger.db"


def test_creates_parent_directory(tmp_path):
    path = tmp_path / "nested" / "ledger.db"
    db = create_sqlite_database(str(path))
    db.connect()
    db.initialize_schema()
    try:
        assert path.parent.is_dir()
        assert db.list_loan_transactions() == []
    finally:
        db.disconnect()
