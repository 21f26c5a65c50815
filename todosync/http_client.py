"""Shared HTTP session for the remote todo collection."""

import requests

_session: requests.Session | None = None


def get_session() -> requests.Session:
    """Return a shared requests.Session.

    No retry adapter is mounted: a failed request is reported once and never
    replayed.
    """
    global _session
    if _session is None:
        _session = requests.Session()
        _session.headers.update({"Accept": "application/json"})
    return _session


def close_session() -> None:
    global _session
    if _session is not None:
        _session.close()
        _session = None
