"""
Storage adapters for FireGuard.

This module contains the SQLite-backed durable stores for
fire events and user accounts.
"""

from .sqlite_events import SQLiteFireEventStore
from .sqlite_users import SQLiteUserStore

__all__ = ["SQLiteFireEventStore", "SQLiteUserStore"]
