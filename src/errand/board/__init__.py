from errand.board.guard import InFlightGuard
from errand.board.render import Alerter, CallbackAlerter, MemoryBoard, TodoBoard
from errand.board.todo_client import EMPTY_TITLE_WARNING, TodoClient

__all__ = [
    "Alerter",
    "CallbackAlerter",
    "EMPTY_TITLE_WARNING",
    "InFlightGuard",
    "MemoryBoard",
    "TodoBoard",
    "TodoClient",
]
