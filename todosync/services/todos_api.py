"""Async client for the remote todo collection (``/todos``)."""

import asyncio

import requests
from pydantic import TypeAdapter, ValidationError

from todosync.config import get_settings
from todosync.exceptions import MalformedResponseError, RemoteStatusError, TransportError
from todosync.http_client import get_session
from todosync.models.todos import Todo

_TODO_LIST = TypeAdapter(list[Todo])


def _url(path: str) -> str:
    return get_settings().todos_api_base.rstrip("/") + path


def _send(method: str, path: str, body: dict | None = None) -> requests.Response:
    try:
        return get_session().request(
            method,
            _url(path),
            json=body,
            timeout=get_settings().request_timeout,
        )
    except requests.RequestException as e:
        raise TransportError(f"Todos API unreachable ({method} {path}): {e}") from e


async def _request(method: str, path: str, body: dict | None = None) -> requests.Response:
    # requests blocks, so the call runs in a worker thread while the loop stays free
    return await asyncio.to_thread(_send, method, path, body)


def _check_status(resp: requests.Response) -> None:
    if not 200 <= resp.status_code < 300:
        raise RemoteStatusError(
            resp.status_code,
            f"Todos API error ({resp.status_code}): {resp.text[:200]}",
        )


def _handle_response(resp: requests.Response) -> dict | list:
    _check_status(resp)
    try:
        return resp.json()
    except ValueError as e:
        raise MalformedResponseError(f"Todos API returned a non-JSON body: {resp.text[:200]}") from e


def _parse_todo(data) -> Todo:
    try:
        return Todo.model_validate(data)
    except ValidationError as e:
        raise MalformedResponseError(f"Todos API returned an invalid todo record: {e}") from e


def _parse_todos(data) -> list[Todo]:
    try:
        return _TODO_LIST.validate_python(data)
    except ValidationError as e:
        raise MalformedResponseError(f"Todos API returned an invalid todo list: {e}") from e


async def fetch_todos() -> list[Todo]:
    """Fetch the whole collection, in the order the service returns it."""
    resp = await _request("GET", "/todos")
    return _parse_todos(_handle_response(resp))


async def create_todo(title: str) -> Todo:
    """Create a todo and return the record with its server-assigned id."""
    resp = await _request("POST", "/todos", {"title": title, "completed": False})
    return _parse_todo(_handle_response(resp))


async def update_todo(todo: Todo) -> None:
    """Replace the remote record with ``todo``. The response body is not used."""
    resp = await _request("PUT", f"/todos/{todo.id}", todo.model_dump())
    _check_status(resp)


async def delete_todo(todo_id: int) -> None:
    resp = await _request("DELETE", f"/todos/{todo_id}")
    _check_status(resp)
