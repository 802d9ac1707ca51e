from functools import lru_cache

from errand.api.errors import (
    TodoApiError,
    TodoPayloadError,
    TodoServerError,
    TodoTransportError,
)
from errand.api.gateway import TodoGateway
from errand.api.models import Task, TaskStatus
from errand.utils.config import get_api_base_url, get_api_timeout


@lru_cache(maxsize=1)
def get_gateway() -> TodoGateway:
    """Shared gateway built from config, one connection pool per process."""
    return TodoGateway(get_api_base_url(), timeout=get_api_timeout())


__all__ = [
    "Task",
    "TaskStatus",
    "TodoApiError",
    "TodoGateway",
    "TodoPayloadError",
    "TodoServerError",
    "TodoTransportError",
    "get_gateway",
]
