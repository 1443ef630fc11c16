"""Database configuration and session management.

This module initializes the SQLAlchemy engine, session factory,
and declarative base, and provides a database session dependency
for FastAPI routes.
"""

from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, declarative_base

from .core import get_settings


settings = get_settings()


def _connect_args(url: str) -> dict:
    # sessions are handed to FastAPI's worker threads
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


def _unicode_lower(value):
    return value.lower() if isinstance(value, str) else value


def register_unicode_lower(bind) -> None:
    """
    Replace SQLite's ASCII-only ``lower()`` with Python's ``str.lower``.

    Case-insensitive email and name lookups compile to ``lower(...)``;
    other backends already lowercase non-ASCII letters and are left alone.

    Args:
        bind (Engine): Engine whose new connections get the function.
    """
    if bind.dialect.name != "sqlite":
        return

    @event.listens_for(bind, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.create_function("lower", 1, _unicode_lower, deterministic=True)


engine = create_engine(
    settings.DATABASE_URL,
    connect_args=_connect_args(settings.DATABASE_URL),
    future=True,
)
"""SQLAlchemy engine bound to the configured database URL."""

register_unicode_lower(engine)


SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    autocommit=False,
    future=True,
)
"""Factory for database sessions."""


Base = declarative_base()
"""Declarative base class for SQLAlchemy models."""


def get_db():
    """
    Provide a SQLAlchemy database session.

    This function is used as a FastAPI dependency.
    It yields a database session and ensures it is
    properly closed after the request is completed.
    """

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
