# =============================================================================
# core/models/todo.py - Todo Schemas
# =============================================================================

from pydantic import BaseModel, Field, field_validator


class TodoRequest(BaseModel):
    """
    Schema for creating or replacing a todo.

    Example:
        {"title": "Todo 4", "description": "Write tests", "completed": false}
    """

    title: str = Field(..., min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    completed: bool = Field(default=False)

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("title must not be blank")
        return v.strip()


class TodoResponse(BaseModel):
    """A todo item."""

    id: int
    title: str
    description: str | None = None
    completed: bool = False
