from contextlib import contextmanager
import threading


class InFlightGuard:
    """
    Tracks actions that are waiting on the server, so a double click on
    the same button does not send the same request twice.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._keys = set()

    @contextmanager
    def claim(self, key):
        """yield True if the caller now owns `key`, False if it is already in flight"""
        with self._lock:
            acquired = key not in self._keys
            if acquired:
                self._keys.add(key)
        try:
            yield acquired
        finally:
            if acquired:
                with self._lock:
                    self._keys.discard(key)

    def in_flight(self, key) -> bool:
        with self._lock:
            return key in self._keys
