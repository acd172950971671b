# todo_app/schemas/todo.py
from pydantic import BaseModel, ConfigDict, Field, field_validator


# -- Request --

class TodoCreateIn(BaseModel):
    name: str = Field(..., max_length=255)
    description: str

    @field_validator("name", "description")
    @classmethod
    def not_blank(cls, v: str, info) -> str:
        v = v.strip()
        if not v:
            raise ValueError(f"{info.field_name} is required")
        return v


class TodoIdIn(BaseModel):
    id: str = Field("", validate_default=True)

    @field_validator("id")
    @classmethod
    def id_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("todo id is required")
        return v


# -- Response --

class TodoOut(BaseModel):
    # camelCase keys on the wire: userId, isCompleted
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)
    id: str
    user_id: str = Field(..., serialization_alias="userId")
    name: str
    description: str
    is_completed: bool = Field(..., serialization_alias="isCompleted")


class DeleteAllOut(BaseModel):
    message: str
    count: int
