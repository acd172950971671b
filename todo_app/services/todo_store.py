# todo_app/services/todo_store.py
# todos persistence. Every statement is scoped by user_id and ignores archived rows.
from datetime import datetime, timezone
from typing import List

from sqlalchemy import func, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from todo_app.errors import Conflict
from todo_app.models.todo import Todo


def _active(user_id: str):
    return (Todo.user_id == user_id, Todo.archived_at.is_(None))


def is_todo_exists(db: Session, name: str, user_id: str) -> bool:
    # trim-only comparison: "Groceries" and "groceries" are different todos
    return (
        db.query(Todo.id)
        .filter(Todo.name == name.strip(), *_active(user_id))
        .first()
        is not None
    )


def create_todo(db: Session, name: str, description: str, user_id: str) -> Todo:
    todo = Todo(name=name.strip(), description=description.strip(), user_id=user_id)
    db.add(todo)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise Conflict("todo already exists") from e
    db.refresh(todo)
    return todo


def _list(db: Session, user_id: str, *criteria) -> List[Todo]:
    return (
        db.query(Todo)
        .filter(*_active(user_id), *criteria)
        .order_by(Todo.created_at, Todo.id)
        .all()
    )


def search_todos(db: Session, name: str, user_id: str) -> List[Todo]:
    # case-insensitive substring; % and _ in the search text are literal
    return _list(db, user_id, func.lower(Todo.name).contains(name.lower(), autoescape=True))


def get_all_todos(db: Session, user_id: str) -> List[Todo]:
    return _list(db, user_id)


def get_incomplete_todos(db: Session, user_id: str) -> List[Todo]:
    return _list(db, user_id, Todo.is_completed.is_(False))


def get_completed_todos(db: Session, user_id: str) -> List[Todo]:
    return _list(db, user_id, Todo.is_completed.is_(True))


def mark_completed(db: Session, todo_id: str, user_id: str) -> int:
    result = db.execute(
        update(Todo)
        .where(Todo.id == todo_id, *_active(user_id), Todo.is_completed.is_(False))
        .values(is_completed=True)
    )
    db.commit()
    return result.rowcount


def delete_todo(db: Session, todo_id: str, user_id: str) -> int:
    result = db.execute(
        update(Todo)
        .where(Todo.id == todo_id, *_active(user_id))
        .values(archived_at=datetime.now(timezone.utc))
    )
    db.commit()
    return result.rowcount


def delete_all_todos(db: Session, user_id: str) -> int:
    result = db.execute(
        update(Todo)
        .where(*_active(user_id))
        .values(archived_at=datetime.now(timezone.utc))
    )
    db.commit()
    return result.rowcount
