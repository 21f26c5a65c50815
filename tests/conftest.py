import pytest
from unittest.mock import MagicMock

from fastapi.testclient import TestClient

from todosync.models.todos import Todo
from todosync.services.store import TodoStore
from todosync.services.synchronizer import TodoSynchronizer, get_synchronizer


# --- Canned API responses ---

TODO_API_RECORD = {"userId": 1, "id": 1, "title": "A", "completed": False}

TODO_API_LIST = [
    TODO_API_RECORD,
    {"userId": 1, "id": 2, "title": "B", "completed": True},
    {"userId": 2, "id": 3, "title": "C", "completed": False},
]

TODO_API_CREATED = {"id": 201, "title": "New", "completed": False}


def make_response(status_code: int = 200, json_data=None, text: str = "") -> MagicMock:
    """A stand-in for requests.Response."""
    resp = MagicMock()
    resp.status_code = status_code
    resp.text = text
    if json_data is None:
        resp.json.side_effect = ValueError("Expecting value")
    else:
        resp.json.return_value = json_data
    return resp


@pytest.fixture
def mock_session(mocker):
    """Shared requests.Session replaced by a MagicMock."""
    session = MagicMock()
    mocker.patch("todosync.services.todos_api.get_session", return_value=session)
    return session


@pytest.fixture
def mock_api(mocker):
    """Remote client as seen by the synchronizer, with every call awaitable."""
    api = mocker.patch("todosync.services.synchronizer.todos_api")
    api.fetch_todos = mocker.AsyncMock(return_value=[])
    api.create_todo = mocker.AsyncMock()
    api.update_todo = mocker.AsyncMock(return_value=None)
    api.delete_todo = mocker.AsyncMock(return_value=None)
    return api


@pytest.fixture
def todo_a():
    return Todo(id=1, title="A", completed=False)


@pytest.fixture
def sync(todo_a):
    """Synchronizer already holding one todo: [{id: 1, title: "A", completed: false}]."""
    return TodoSynchronizer(TodoStore([todo_a]))


@pytest.fixture
def api_client(sync):
    """FastAPI TestClient wired to the ``sync`` fixture."""
    from todosync.main import api
    api.dependency_overrides[get_synchronizer] = lambda: sync
    yield TestClient(api)
    api.dependency_overrides.clear()
