# todo_app/routers/todos.py
import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from todo_app.deps import get_current_user, get_db
from todo_app.errors import Conflict, NotFound
from todo_app.schemas.todo import DeleteAllOut, TodoCreateIn, TodoIdIn, TodoOut
from todo_app.schemas.user import CurrentUser, MessageOut
from todo_app.services import todo_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/todos", tags=["todos"])


def _found(todos: list) -> list:
    # an empty list is reported as 404, not as an empty 200
    if not todos:
        raise NotFound("no todo found")
    return todos


@router.post("/create", response_model=MessageOut, status_code=201)
def create_todo(
    body: TodoCreateIn,
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    if todo_store.is_todo_exists(db, body.name, current.user_id):
        raise Conflict("todo already exists")

    todo = todo_store.create_todo(db, body.name, body.description, current.user_id)
    logger.debug("[TODO] user %s created %s", current.user_id, todo.id)
    return MessageOut(message="todo created successfully")


@router.get("/search", response_model=List[TodoOut])
def search_todos(
    name: str = "",
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return _found(todo_store.search_todos(db, name, current.user_id))


@router.get("/all-todos", response_model=List[TodoOut])
def all_todos(
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return _found(todo_store.get_all_todos(db, current.user_id))


@router.get("/incomplete", response_model=List[TodoOut])
def incomplete_todos(
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return _found(todo_store.get_incomplete_todos(db, current.user_id))


@router.get("/completed", response_model=List[TodoOut])
def completed_todos(
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return _found(todo_store.get_completed_todos(db, current.user_id))


# mark-completed / delete: a foreign, archived or already-completed id is a silent no-op
@router.put("/mark-completed", response_model=MessageOut)
def mark_completed(
    body: TodoIdIn,
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    todo_store.mark_completed(db, body.id, current.user_id)
    return MessageOut(message="todo marked completed successfully")


@router.delete("/delete", response_model=MessageOut)
def delete_todo(
    body: TodoIdIn,
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    todo_store.delete_todo(db, body.id, current.user_id)
    return MessageOut(message="todo deleted successfully")


@router.delete("/delete-all", response_model=DeleteAllOut)
def delete_all_todos(
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    count = todo_store.delete_all_todos(db, current.user_id)
    if count == 0:
        raise NotFound("no todo found")
    return DeleteAllOut(message="all todos deleted successfully", count=count)
