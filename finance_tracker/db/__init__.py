"""
Record store: models, sessions and repositories.
"""

from finance_tracker.db.database import engine, SessionLocal, get_db, init_db
from finance_tracker.db.models import Base

__all__ = ["engine", "SessionLocal", "get_db", "init_db", "Base"]
