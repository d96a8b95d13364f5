# =============================================================================
# app/routers/todos.py - Todo CRUD Endpoints
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from core.models.todo import TodoRequest, TodoResponse
from core.services.todo_service import TodoService, get_todo_service

router = APIRouter()

TodoId = Annotated[int, Path(description="Todo id")]


@router.get("", response_model=list[TodoResponse])
def get_all_todos(service: TodoService = Depends(get_todo_service)):
    return service.list_todos()


@router.get("/{todo_id}", response_model=TodoResponse)
def get_todo_by_id(todo_id: TodoId, service: TodoService = Depends(get_todo_service)):
    return service.get_todo(todo_id)


@router.post("", response_model=TodoResponse, status_code=status.HTTP_201_CREATED)
def create_todo(request: TodoRequest, service: TodoService = Depends(get_todo_service)):
    return service.create_todo(request)


@router.put("/{todo_id}", response_model=TodoResponse)
def update_todo(
    todo_id: TodoId,
    request: TodoRequest,
    service: TodoService = Depends(get_todo_service),
):
    return service.update_todo(todo_id, request)


@router.patch("/{todo_id}/toggle", response_model=TodoResponse)
def toggle_todo(todo_id: TodoId, service: TodoService = Depends(get_todo_service)):
    """Flip a todo between completed and not completed."""
    return service.toggle_todo(todo_id)


@router.delete("/{todo_id}", response_model=TodoResponse)
def delete_todo(todo_id: TodoId, service: TodoService = Depends(get_todo_service)):
    """Delete a todo and return what was removed."""
    return service.delete_todo(todo_id)
