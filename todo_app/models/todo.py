# todo_app/models/todo.py
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, String, Text, text

from todo_app.db.session import Base
from todo_app.models.user import _utcnow, _uuid


class Todo(Base):
    __tablename__ = "todos"

    id = Column(String(36), primary_key=True, default=_uuid)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    is_completed = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    archived_at = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        Index(
            "ux_todos_user_name_active",
            "user_id",
            "name",
            unique=True,
            postgresql_where=text("archived_at IS NULL"),
            sqlite_where=text("archived_at IS NULL"),
        ),
    )
