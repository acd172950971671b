"""
Shared declarative base and factories.
Importing the models here registers every table on Base.metadata.
"""
from todo_app.db.session import Base, build_engine, build_session_factory
from todo_app.models import user, todo  # noqa: F401

__all__ = ["Base", "build_engine", "build_session_factory"]
