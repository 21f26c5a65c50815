from pydantic import BaseModel, ConfigDict


class Todo(BaseModel):
    # fields beyond these (e.g. userId) are kept so a PUT sends the record back whole
    model_config = ConfigDict(frozen=True, extra="allow")

    id: int
    title: str
    completed: bool


class EditSession(BaseModel):
    model_config = ConfigDict(frozen=True)

    todo: Todo
    staged_title: str


class TodoBoard(BaseModel):
    """Everything the rendering surface needs to draw the list."""

    todos: list[Todo]
    draft_title: str
    editing: EditSession | None = None


class CreateTodoRequest(BaseModel):
    title: str | None = None  # falls back to the current draft title


class TitleRequest(BaseModel):
    title: str
