from fastapi import APIRouter, Depends

from todosync.exceptions import TodoNotFoundError
from todosync.models.todos import CreateTodoRequest, TitleRequest, TodoBoard
from todosync.services.synchronizer import TodoSynchronizer, get_synchronizer

router = APIRouter(prefix="/api/todos", tags=["todos"])


@router.get("")
async def get_board(sync: TodoSynchronizer = Depends(get_synchronizer)) -> TodoBoard:
    return sync.board()


@router.post("/load")
async def load_todos(sync: TodoSynchronizer = Depends(get_synchronizer)) -> TodoBoard:
    await sync.load()
    return sync.board()


@router.put("/draft")
async def set_draft(request: TitleRequest, sync: TodoSynchronizer = Depends(get_synchronizer)) -> TodoBoard:
    sync.set_draft(request.title)
    return sync.board()


@router.post("")
async def create_todo(
    request: CreateTodoRequest | None = None,
    sync: TodoSynchronizer = Depends(get_synchronizer),
) -> TodoBoard:
    await sync.create(request.title if request else None)
    return sync.board()


# --- Edit session ---
# Declared before the /{todo_id} routes so "edit" is never parsed as an id.


@router.put("/edit")
async def stage_title(request: TitleRequest, sync: TodoSynchronizer = Depends(get_synchronizer)) -> TodoBoard:
    sync.stage_title(request.title)
    return sync.board()


@router.post("/edit/commit")
async def commit_edit(sync: TodoSynchronizer = Depends(get_synchronizer)) -> TodoBoard:
    await sync.commit_edit()
    return sync.board()


@router.delete("/edit")
async def cancel_edit(sync: TodoSynchronizer = Depends(get_synchronizer)) -> TodoBoard:
    sync.cancel_edit()
    return sync.board()


# --- Single todo ---


@router.post("/{todo_id}/edit")
async def begin_edit(todo_id: int, sync: TodoSynchronizer = Depends(get_synchronizer)) -> TodoBoard:
    todo = sync.store.get(todo_id)
    if todo is None:
        raise TodoNotFoundError(f"Todo {todo_id} is not in the list.")
    sync.begin_edit(todo)
    return sync.board()


@router.post("/{todo_id}/toggle")
async def toggle_complete(todo_id: int, sync: TodoSynchronizer = Depends(get_synchronizer)) -> TodoBoard:
    await sync.toggle_complete(todo_id)
    return sync.board()


@router.delete("/{todo_id}")
async def delete_todo(todo_id: int, sync: TodoSynchronizer = Depends(get_synchronizer)) -> TodoBoard:
    await sync.delete(todo_id)
    return sync.board()
