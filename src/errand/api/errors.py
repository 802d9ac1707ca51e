class TodoApiError(Exception):
    """Base error for every failed call to the todo service."""


class TodoTransportError(TodoApiError):
    """The request never reached the server, or its answer never came back."""


class TodoServerError(TodoApiError):
    """The server answered with a non-success status."""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"HTTP {status_code}: {message}")
        self.status_code = status_code
        self.message = message


class TodoPayloadError(TodoApiError):
    """A success response whose body is not what the endpoint promises."""
