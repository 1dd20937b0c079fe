"""Declarative base shared by the ORM models and alembic."""

from sqlalchemy.orm import declarative_base

Base = declarative_base()
