"""Database layer for churchregister application."""

from churchregister.database.base import Database
from churchregister.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
