"""Database module for the URL shortener application."""
from app.db.base import engine, get_engine, get_session, create_db_and_tables
from app.db.session import get_db, db_transaction

__all__ = [
    "engine",
    "get_engine",
    "get_session",
    "create_db_and_tables",
    "get_db",
    "db_transaction",
]
