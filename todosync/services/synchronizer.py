"""Keeps the local todo list in step with the remote collection.

Every mutator except ``toggle_complete`` is confirm-then-reflect: the store
changes only after the service acknowledges the request. ``toggle_complete``
is optimistic: it flips the flag locally before the request is sent and does
not roll back if the request fails.
"""

import logging
from functools import lru_cache

from todosync.exceptions import EditSessionError, IntegrationError
from todosync.models.todos import EditSession, Todo, TodoBoard
from todosync.services import todos_api
from todosync.services.store import TodoStore

logger = logging.getLogger(__name__)


class TodoSynchronizer:
    def __init__(self, store: TodoStore | None = None):
        self.store = store if store is not None else TodoStore()
        self.draft_title = ""
        self.editing: EditSession | None = None

    def board(self) -> TodoBoard:
        return TodoBoard(
            todos=list(self.store.todos),
            draft_title=self.draft_title,
            editing=self.editing,
        )

    # --- Remote-backed operations ---

    async def load(self) -> bool:
        try:
            todos = await todos_api.fetch_todos()
        except IntegrationError as e:
            logger.error("Error fetching todos: %s", e)
            return False
        self.store.replace_all(todos)
        logger.info("Loaded %d todos", len(todos))
        return True

    async def create(self, title: str | None = None) -> bool:
        """Create a todo from ``title``, or from the draft title when omitted."""
        if title is None:
            title = self.draft_title
        try:
            todo = await todos_api.create_todo(title)
        except IntegrationError as e:
            logger.error("Error adding todo: %s", e)
            return False
        self.store.append(todo)
        self.draft_title = ""
        logger.info("Added todo %s", todo.id)
        return True

    async def delete(self, todo_id: int) -> bool:
        try:
            await todos_api.delete_todo(todo_id)
        except IntegrationError as e:
            logger.error("Error deleting todo %s: %s", todo_id, e)
            return False
        self.store.remove(todo_id)
        logger.info("Deleted todo %s", todo_id)
        return True

    async def commit_edit(self) -> bool:
        session = self.editing
        if session is None:
            logger.warning("Commit requested with no todo being edited")
            return False
        updated = session.todo.model_copy(update={"title": session.staged_title})
        try:
            await todos_api.update_todo(updated)
        except IntegrationError as e:
            logger.error("Error updating todo %s: %s", updated.id, e)
            return False
        self.store.put(updated)
        # a newer session may have started while the request was in flight
        if self.editing is session:
            self.editing = None
        logger.info("Updated todo %s", updated.id)
        return True

    async def toggle_complete(self, todo_id: int) -> bool:
        # Optimistic: the flag flips now and stays flipped if the request fails.
        toggled = self.store.toggled(todo_id)
        if toggled is None:
            logger.warning("Toggle requested for unknown todo %s", todo_id)
            return False
        try:
            await todos_api.update_todo(toggled)
        except IntegrationError as e:
            logger.error("Error toggling todo %s completion: %s", todo_id, e)
            return False
        logger.info("Toggled todo %s to completed=%s", todo_id, toggled.completed)
        return True

    # --- Local-only operations ---

    def set_draft(self, title: str) -> None:
        self.draft_title = title

    def begin_edit(self, todo: Todo) -> None:
        self.editing = EditSession(todo=todo, staged_title=todo.title)

    def stage_title(self, title: str) -> None:
        if self.editing is None:
            raise EditSessionError("No todo is being edited.")
        self.editing = self.editing.model_copy(update={"staged_title": title})

    def cancel_edit(self) -> None:
        self.editing = None


@lru_cache
def get_synchronizer() -> TodoSynchronizer:
    return TodoSynchronizer()
