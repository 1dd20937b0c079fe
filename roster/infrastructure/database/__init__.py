"""Database infrastructure helpers (engine, sessions, schema probing)."""

from .base import Base
from .schema import SchemaCapabilityDetector
from .session import build_engine, build_session_factory, init_db, session_scope

__all__ = [
    "Base",
    "SchemaCapabilityDetector",
    "build_engine",
    "build_session_factory",
    "init_db",
    "session_scope",
]
