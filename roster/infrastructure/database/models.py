"""SQLAlchemy ORM models."""
from sqlalchemy import Boolean, Column, DateTime, Integer, String, false
from sqlalchemy.sql import func

from .base import Base


class Account(Base):
    """Latest ``accounts`` layout.

    ``federated_subject_id`` and ``avatar_url`` are added by later migrations
    and may be missing from older databases, so queries never select them
    unless the schema probe found them.
    """

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    display_name = Column(String(100), nullable=False)
    email = Column(String(200), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False, server_default="")
    tutorial_seen = Column(Boolean, nullable=False, default=False, server_default=false())
    federated_subject_id = Column(String(255), unique=True)
    avatar_url = Column(String(1024))
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())


accounts_table = Account.__table__
