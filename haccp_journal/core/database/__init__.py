"""
Centralized database layer for HACCP Journal.

Structure:
- entities/: SQLModel table models organized by business domain
- repositories/: Data access layer for queries shared across routes
- session.py: Global engine and session factory management
- utils.py: Engine, session factory and schema creation helpers

The global engine lives in ``session.py`` and is imported explicitly by the
server so that importing entities never requires configuration.
"""

from .base import Base, TimestampMixin, utc_now
from .utils import (
    create_all,
    create_engine,
    create_sessionmaker,
)

__all__ = [
    "Base",
    "TimestampMixin",
    "create_all",
    "create_engine",
    "create_sessionmaker",
    "utc_now",
]
