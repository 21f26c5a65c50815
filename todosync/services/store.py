from collections.abc import Iterable, Iterator

from todosync.models.todos import Todo


class TodoStore:
    """Owned, ordered collection of todos.

    The contents are an immutable tuple. Every mutation builds a new tuple and
    swaps it in, so a reader holding ``todos`` never sees a half-applied change.
    """

    def __init__(self, todos: Iterable[Todo] = ()):
        self._todos: tuple[Todo, ...] = tuple(todos)

    @property
    def todos(self) -> tuple[Todo, ...]:
        return self._todos

    def __len__(self) -> int:
        return len(self._todos)

    def __iter__(self) -> Iterator[Todo]:
        return iter(self._todos)

    def ids(self) -> list[int]:
        return [t.id for t in self._todos]

    def get(self, todo_id: int) -> Todo | None:
        for todo in self._todos:
            if todo.id == todo_id:
                return todo
        return None

    # --- Mutations ---

    def replace_all(self, todos: Iterable[Todo]) -> None:
        self._todos = tuple(todos)

    def append(self, todo: Todo) -> None:
        self._todos = (*self._todos, todo)

    def remove(self, todo_id: int) -> None:
        self._todos = tuple(t for t in self._todos if t.id != todo_id)

    def put(self, todo: Todo) -> None:
        """Replace the todo sharing ``todo.id`` in place; unknown ids are ignored."""
        self._todos = tuple(todo if t.id == todo.id else t for t in self._todos)

    def toggled(self, todo_id: int) -> Todo | None:
        """Flip ``completed`` on one todo and return the new version."""
        current = self.get(todo_id)
        if current is None:
            return None
        flipped = current.model_copy(update={"completed": not current.completed})
        self.put(flipped)
        return flipped
