"""Persistence layer for flockledger."""

from flockledger.database.base import StateStore
from flockledger.database.factories import create_sqlite_store

__all__ = ["StateStore", "create_sqlite_store"]
