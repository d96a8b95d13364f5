# =============================================================================
# core/services/todo_service.py - In-Memory Todo List
# =============================================================================

import logging
import threading

from app.exceptions import ResourceNotFoundError
from core.models.todo import TodoRequest, TodoResponse

logger = logging.getLogger(__name__)

SEED_TODOS = [
    TodoRequest(title="Todo 1", description="Create a todo REST API"),
    TodoRequest(title="Todo 2", description="Create a todo model"),
    TodoRequest(title="Todo 3", description="Create a todo controller"),
]


class TodoService:
    """Service for the in-memory todo list."""

    def __init__(self, seed: bool = True):
        self._lock = threading.Lock()
        self._todos: list[TodoResponse] = []
        self._last_id = 0
        if seed:
            for todo in SEED_TODOS:
                self.create_todo(todo)

    def _find(self, todo_id: int) -> TodoResponse:
        for todo in self._todos:
            if todo.id == todo_id:
                return todo
        raise ResourceNotFoundError("Todo", "id", todo_id)

    def _replace(self, existing: TodoResponse, updated: TodoResponse) -> TodoResponse:
        self._todos[self._todos.index(existing)] = updated
        return updated

    def list_todos(self) -> list[TodoResponse]:
        with self._lock:
            return list(self._todos)

    def get_todo(self, todo_id: int) -> TodoResponse:
        with self._lock:
            return self._find(todo_id)

    def create_todo(self, data: TodoRequest) -> TodoResponse:
        with self._lock:
            self._last_id += 1
            todo = TodoResponse(id=self._last_id, **data.model_dump())
            self._todos.append(todo)
        logger.info(f"Created todo {todo.id}")
        return todo

    def update_todo(self, todo_id: int, data: TodoRequest) -> TodoResponse:
        with self._lock:
            existing = self._find(todo_id)
            return self._replace(existing, existing.model_copy(update=data.model_dump()))

    def toggle_todo(self, todo_id: int) -> TodoResponse:
        """Flip the completed flag."""
        with self._lock:
            existing = self._find(todo_id)
            return self._replace(existing, existing.model_copy(update={"completed": not existing.completed}))

    def delete_todo(self, todo_id: int) -> TodoResponse:
        """
        Remove a todo and return it.

        Raises:
            ResourceNotFoundError: If no todo has this id
        """
        with self._lock:
            todo = self._find(todo_id)
            self._todos.remove(todo)
        logger.info(f"Deleted todo {todo_id}")
        return todo


# Global singleton instance
todo_service = TodoService()


def get_todo_service() -> TodoService:
    """Dependency returning the shared todo list."""
    return todo_service
