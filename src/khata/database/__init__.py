"""Database layer for khata application."""

from khata.database.base import Database
from khata.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
