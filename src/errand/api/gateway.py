import logging
from typing import List, Optional

import httpx
from pydantic import ValidationError

from errand.api.errors import (
    TodoPayloadError,
    TodoServerError,
    TodoTransportError,
)
from errand.api.models import Task, TaskCreate


def extract_error_message(response: httpx.Response) -> str:
    """Pull the human message out of an error body, `error` first then `message`."""
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict):
        for key in ("error", "message"):
            if payload.get(key):
                return str(payload[key])
    return f"{response.status_code} {response.reason_phrase}".strip()


class TodoGateway:
    """
    HTTP access to the `/todos` endpoints.

    Every method either returns parsed data or raises a TodoApiError subclass,
    callers decide which of those the user gets to see.
    """

    def __init__(self, base_url: str, timeout=None, transport: httpx.BaseTransport = None):
        self.logger = logging.getLogger(__name__)
        self.base_url = base_url
        self.client = httpx.Client(base_url=base_url, timeout=timeout, transport=transport)

    def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        self.logger.debug(f"[Gateway] {method} {path}")
        try:
            response = self.client.request(method, path, **kwargs)
        except httpx.TransportError as e:
            raise TodoTransportError(f"{method} {path} failed: {e}") from e
        if not response.is_success:
            raise TodoServerError(response.status_code, extract_error_message(response))
        return response

    @staticmethod
    def _parse_task(response: httpx.Response) -> Task:
        try:
            return Task.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise TodoPayloadError(f"Response is not a todo: {response.text!r}") from e

    def list_todos(self) -> List[Task]:
        """rows that do not fit the Task schema are logged and skipped, the rest keep server order"""
        response = self._request("GET", "/todos")
        try:
            rows = response.json()
        except ValueError as e:
            raise TodoPayloadError(f"Response is not a todo list: {response.text!r}") from e
        if not isinstance(rows, list):
            raise TodoPayloadError(f"Response is not a todo list: {response.text!r}")

        tasks = []
        for row in rows:
            try:
                tasks.append(Task.model_validate(row))
            except ValidationError as e:
                self.logger.warning(f"[Gateway] Skipping malformed todo {row!r}: {e.error_count()} error(s)")
        return tasks

    def create_todo(self, title: str) -> Task:
        body = TaskCreate(title=title).model_dump()
        return self._parse_task(self._request("POST", "/todos", json=body))

    def complete_todo(self, todo_id: int) -> Task:
        return self._parse_task(self._request("PUT", f"/todos/{todo_id}"))

    def delete_todo(self, todo_id: int) -> Optional[dict]:
        response = self._request("DELETE", f"/todos/{todo_id}")
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return None

    def close(self):
        self.client.close()
