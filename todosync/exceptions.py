class IntegrationError(Exception):
    """Raised when a call to the remote todo collection fails."""


class TransportError(IntegrationError):
    """Raised when the remote service could not be reached at all."""


class RemoteStatusError(IntegrationError):
    """Raised when the remote service answers with a non-success status."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        super().__init__(message)


class MalformedResponseError(IntegrationError):
    """Raised when a response body is not the expected todo record shape."""


class TodoNotFoundError(Exception):
    """Raised when an intent references a todo missing from the local collection."""


class EditSessionError(Exception):
    """Raised when an edit intent arrives while no todo is being edited."""
