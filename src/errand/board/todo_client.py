import logging
from typing import Optional

from errand.api.errors import (
    TodoApiError,
    TodoPayloadError,
    TodoServerError,
    TodoTransportError,
)
from errand.api.gateway import TodoGateway
from errand.board.guard import InFlightGuard
from errand.board.render import Alerter, TodoBoard

EMPTY_TITLE_WARNING = "Enter a todo!"


class TodoClient:
    """
    Keep a board in step with the todo service.

    Every operation is triggered by a user event and ends in one of three
    ways: the board is patched from the server response, the user gets an
    alert with the server's message, or (network trouble) the failure is
    only logged and the board is left as it was.
    """

    def __init__(
        self,
        gateway: TodoGateway,
        board: Optional[TodoBoard],
        alerter: Alerter,
        guard: Optional[InFlightGuard] = None,
        reload_after_mutation: bool = False,
    ):
        self.logger = logging.getLogger(__name__)
        self.gateway = gateway
        self.board = board
        self.alerter = alerter
        self.guard = guard or InFlightGuard()
        self.reload_after_mutation = reload_after_mutation

    def start(self) -> bool:
        """page ready: render the current list if there is somewhere to render it"""
        if self.board is None:
            self.logger.error("[TodoClient] No board to render into, nothing to do.")
            return False
        if not self.board.has_form:
            self.logger.info("[TodoClient] Board has no form, submit is not bound.")
        self.list_tasks()
        return True

    def list_tasks(self) -> bool:
        if self.board is None:
            self.logger.error("[TodoClient] No board to render into, skip listing.")
            return False
        try:
            tasks = self.gateway.list_todos()
        except TodoApiError as e:
            self.logger.error(f"[TodoClient] Error fetching todos: {e}")
            return False
        self.board.show(tasks)
        self.logger.debug(f"[TodoClient] Rendered {len(tasks)} todos.")
        return True

    def create_task(self, raw_title: Optional[str]) -> bool:
        if self.board is None or not self.board.has_form:
            self.logger.error("[TodoClient] No form on board, cannot submit a todo.")
            return False
        title = (raw_title or "").strip()
        if not title:
            self.alerter.alert(EMPTY_TITLE_WARNING)
            return False

        with self.guard.claim(("create", title)) as acquired:
            if not acquired:
                self.logger.debug(f"[TodoClient] Create '{title}' already in flight, ignored.")
                return False
            try:
                task = self.gateway.create_todo(title)
            except TodoPayloadError as e:
                self.logger.warning(f"[TodoClient] {e}, reloading list.")
                with self.board.batch():
                    self.board.clear_input()
                    return self.list_tasks()
            except TodoApiError as e:
                return self._handle_failure("create todo", e)

        # cleared input and the new entry show up together
        with self.board.batch():
            self.board.clear_input()
            if self.reload_after_mutation:
                return self.list_tasks()
            self.board.append(task)
        self.logger.info(f"[TodoClient] Created todo {task.id}.")
        return True

    def mark_complete(self, task_id: int) -> bool:
        if self.board is None:
            self.logger.error("[TodoClient] No board to render into, skip completing.")
            return False
        with self.guard.claim(("complete", task_id)) as acquired:
            if not acquired:
                self.logger.debug(f"[TodoClient] Complete {task_id} already in flight, ignored.")
                return False
            try:
                task = self.gateway.complete_todo(task_id)
            except TodoPayloadError as e:
                self.logger.warning(f"[TodoClient] {e}, reloading list.")
                return self.list_tasks()
            except TodoApiError as e:
                return self._handle_failure(f"complete todo {task_id}", e)

        if self.reload_after_mutation:
            return self.list_tasks()
        self.board.replace(task)
        self.logger.info(f"[TodoClient] Completed todo {task_id}.")
        return True

    def delete_task(self, task_id: int) -> bool:
        if self.board is None:
            self.logger.error("[TodoClient] No board to render into, skip deleting.")
            return False
        with self.guard.claim(("delete", task_id)) as acquired:
            if not acquired:
                self.logger.debug(f"[TodoClient] Delete {task_id} already in flight, ignored.")
                return False
            try:
                self.gateway.delete_todo(task_id)
            except TodoApiError as e:
                return self._handle_failure(f"delete todo {task_id}", e)

        if self.reload_after_mutation:
            return self.list_tasks()
        self.board.remove(task_id)
        self.logger.info(f"[TodoClient] Deleted todo {task_id}.")
        return True

    def _handle_failure(self, what: str, error: TodoApiError) -> bool:
        if isinstance(error, TodoServerError):
            self.logger.warning(f"[TodoClient] Server refused to {what}: {error}")
            self.alerter.alert(error.message)
        elif isinstance(error, TodoTransportError):
            self.logger.error(f"[TodoClient] Failed to {what}: {error}")
        else:
            self.logger.error(f"[TodoClient] Unexpected error when trying to {what}: {error}")
        return False
