from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Callable, List, Optional

from errand.api.models import Task
from errand.utils.format import entry_text


class TodoBoard(ABC):
    """
    Render target for the todo list: an ordered set of entries plus,
    when `has_form` is set, an input field for new titles.
    """

    has_form = True

    @abstractmethod
    def show(self, tasks: List[Task]):
        """Drop every entry and render `tasks` in the given order"""

    @abstractmethod
    def append(self, task: Task):
        pass

    @abstractmethod
    def replace(self, task: Task):
        """Re-render the entry with `task.id`, leaving the others alone"""

    @abstractmethod
    def remove(self, task_id: int):
        pass

    def clear_input(self):
        pass

    @contextmanager
    def batch(self):
        """group several changes into one visible update"""
        yield self


class Alerter(ABC):
    @abstractmethod
    def alert(self, message: str):
        """Show a blocking warning to the user"""


class CallbackAlerter(Alerter):
    def __init__(self, callback: Callable[[str], None]):
        self.callback = callback

    def alert(self, message: str):
        self.callback(message)


class MemoryBoard(TodoBoard):
    """
    Board kept in a plain list, used by the slash command, the flask
    endpoint and tests.
    """

    def __init__(self, tasks: Optional[List[Task]] = None, has_form: bool = True):
        self.tasks: List[Task] = list(tasks or [])
        self.has_form = has_form
        self.input_cleared = 0

    def show(self, tasks):
        self.tasks = list(tasks)

    def append(self, task):
        self.tasks.append(task)

    def replace(self, task):
        self.tasks = [task if t.id == task.id else t for t in self.tasks]

    def remove(self, task_id):
        self.tasks = [t for t in self.tasks if t.id != task_id]

    def clear_input(self):
        self.input_cleared += 1

    @property
    def entries(self) -> List[str]:
        return [entry_text(task) for task in self.tasks]

    def get(self, task_id: int) -> Optional[Task]:
        return next((t for t in self.tasks if t.id == task_id), None)
