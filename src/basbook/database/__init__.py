"""Database layer for basbook application."""

from basbook.database.base import Database
from basbook.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
