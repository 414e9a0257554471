"""
Database module - SQLAlchemy engine and transaction-scoped sessions.
"""
from academico.db.session import engine, get_db_session, test_database_connection

__all__ = [
    "engine",
    "get_db_session",
    "test_database_connection",
]
