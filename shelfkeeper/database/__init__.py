"""SQLAlchemy database layer for shelfkeeper.

Provides the shared engine, session factory, and declarative base
used by the catalog repository, the progress ledger, and maintenance.
"""

from .base import Base
from .engine import create_schema, dispose_engine, get_db_session, get_engine

__all__ = ["Base", "get_engine", "get_db_session", "dispose_engine", "create_schema"]
