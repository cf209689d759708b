"""
Database package
"""
from app.db.base import Base, TimestampMixin
from app.db.session import build_engine, build_session_factory, get_db

__all__ = [
    "Base",
    "TimestampMixin",
    "build_engine",
    "build_session_factory",
    "get_db",
]
