"""Store factory functions for creating state store instances."""

import os
from pathlib import Path
from typing import Optional

from flockledger.database.sqlalchemy_db import SQLAlchemyStateStore

DB_PATH_ENV = "FLOCKLEDGER_DB_PATH"


def create_sqlite_store(database_path: Optional[str] = None) -> SQLAlchemyStateStore:
    """Create a SQLite-backed state store.

    Args:
        database_path: Path to SQLite database file. If None, checks FLOCKLEDGER_DB_PATH
            environment variable, then defaults to ~/.flockledger/flockledger.db

    Returns:
        SQLAlchemyStateStore instance configured for SQLite
    """
    if database_path is None:
        database_path = os.environ.get(DB_PATH_ENV)

    if database_path is None:
        db_dir = Path.home() / ".flockledger"
        db_dir.mkdir(exist_ok=True)
        database_path = str(db_dir / "flockledger.db")

    return SQLAlchemyStateStore(f"sqlite:///{database_path}")
