from fastmcp import FastMCP

from todosync.exceptions import EditSessionError, TodoNotFoundError
from todosync.services.synchronizer import get_synchronizer

mcp = FastMCP("Todosync")


def _handle_mcp_error(e: Exception) -> dict:
    """Convert exceptions to agent-friendly error dicts."""
    if isinstance(e, TodoNotFoundError):
        return {"error": "not_found", "message": str(e), "action": "Call todo_board to see the current ids"}
    if isinstance(e, EditSessionError):
        return {"error": "edit_session", "message": str(e), "action": "Call todo_edit_begin first"}
    return {"error": "unknown_error", "message": str(e)}


def _board() -> dict:
    return get_synchronizer().board().model_dump()


@mcp.tool
async def todo_board() -> dict:
    """Show the current todo list, the new-todo draft title and the todo being edited, if any."""
    return _board()


@mcp.tool
async def todo_load() -> dict:
    """Reload the whole todo list from the remote collection.
    If the remote call fails the previous list is kept; 'ok' reports the outcome."""
    ok = await get_synchronizer().load()
    return {**_board(), "ok": ok}


@mcp.tool
async def todo_add(title: str | None = None) -> dict:
    """Add a todo. Without a title the current draft title is used.
    The todo only appears in the list once the remote collection has accepted it."""
    ok = await get_synchronizer().create(title)
    return {**_board(), "ok": ok}


@mcp.tool
async def todo_set_draft(title: str) -> dict:
    """Set the draft title used by todo_add when no title is given."""
    get_synchronizer().set_draft(title)
    return _board()


@mcp.tool
async def todo_delete(todo_id: int) -> dict:
    """Delete a todo by id. It is removed locally only after the remote delete succeeds."""
    ok = await get_synchronizer().delete(todo_id)
    return {**_board(), "ok": ok}


@mcp.tool
async def todo_toggle(todo_id: int) -> dict:
    """Flip a todo's completed flag. The local flag changes immediately and is kept even if the remote update fails."""
    ok = await get_synchronizer().toggle_complete(todo_id)
    return {**_board(), "ok": ok}


@mcp.tool
async def todo_edit_begin(todo_id: int) -> dict:
    """Start editing a todo's title. Replaces any edit already in progress."""
    sync = get_synchronizer()
    try:
        todo = sync.store.get(todo_id)
        if todo is None:
            raise TodoNotFoundError(f"Todo {todo_id} is not in the list.")
        sync.begin_edit(todo)
        return _board()
    except TodoNotFoundError as e:
        return _handle_mcp_error(e)


@mcp.tool
async def todo_edit_title(title: str) -> dict:
    """Stage a new title for the todo being edited. Nothing is sent until todo_edit_commit."""
    try:
        get_synchronizer().stage_title(title)
        return _board()
    except EditSessionError as e:
        return _handle_mcp_error(e)


@mcp.tool
async def todo_edit_commit() -> dict:
    """Send the staged title to the remote collection.
    On failure the edit stays open so it can be retried or cancelled."""
    ok = await get_synchronizer().commit_edit()
    return {**_board(), "ok": ok}


@mcp.tool
async def todo_edit_cancel() -> dict:
    """Abandon the edit in progress without changing anything."""
    get_synchronizer().cancel_edit()
    return _board()
