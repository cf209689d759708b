"""
Database session management

The engine and session factory are built once by the application factory
and kept on app.state; nothing here holds a module-level connection.
"""
from typing import Generator

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from app.core.config import Settings, is_sqlite


def build_engine(settings: Settings) -> Engine:
    """Create the engine for the configured database"""
    connect_args = {}
    engine_options = {}
    if is_sqlite(settings.database_url):
        connect_args["check_same_thread"] = False
        if is_in_memory(settings.database_url):
            # One shared connection, otherwise every thread sees an empty database
            engine_options["poolclass"] = StaticPool

    engine = create_engine(
        settings.database_url,
        **engine_options,
        pool_pre_ping=True,  # Verify connections before using
        echo=settings.debug,  # Log SQL queries in debug mode
        connect_args=connect_args,
    )
    if is_sqlite(settings.database_url):
        enable_sqlite_foreign_keys(engine)
    return engine


def is_in_memory(database_url: str) -> bool:
    return database_url == "sqlite://" or ":memory:" in database_url


def enable_sqlite_foreign_keys(engine: Engine) -> None:
    """SQLite ignores FOREIGN KEY constraints unless asked per connection"""

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        bind=engine
    )


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    Dependency for getting a database session scoped to one request

    Usage:
        @app.get("/items")
        def get_items(db: Session = Depends(get_db)):
            return db.query(Item).all()
    """
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
