from datetime import datetime, timedelta
import logging
import threading

from errand.api import get_gateway
from errand.board.guard import InFlightGuard
from errand.board.render import CallbackAlerter, MemoryBoard
from errand.board.todo_client import TodoClient
from errand.slack.home_board import HomeTabBoard, ModalAlerter
from errand.utils.config import get_reload_after_mutation, get_viewer_ttl_seconds


class Concierge:
    """
    Hand out TodoClients bound to Slack surfaces and remember who is
    looking at their home tab, keyed by user id with the last time they opened it.
    """

    def __init__(self, gateway=None):
        self.logger = logging.getLogger(__name__)
        self._gateway = gateway
        self.guard = InFlightGuard()
        self.viewers = {}
        self._viewers_lock = threading.Lock()

    @property
    def gateway(self):
        if self._gateway is None:
            self._gateway = get_gateway()
        return self._gateway

    @gateway.setter
    def gateway(self, value):
        self._gateway = value

    def client_for(self, board, alerter):
        return TodoClient(
            self.gateway,
            board,
            alerter,
            guard=self.guard,
            reload_after_mutation=get_reload_after_mutation(),
        )

    def client_for_action(self, client, body):
        """TodoClient for a block action on the home tab, its board is None outside of it"""
        user_id = body["user"]["id"]
        board = HomeTabBoard.from_view(client, user_id, body.get("view"))
        alerter = ModalAlerter(client, user_id, body.get("trigger_id"))
        return self.client_for(board, alerter)

    def open_home(self, client, user_id, view=None):
        """page ready for one user's home tab"""
        self.remember_viewer(user_id)
        board = HomeTabBoard.from_view(client, user_id, view)
        if board is None or not board.has_form:
            self.logger.info(f"[Concierge] Publishing fresh home tab for {user_id}.")
            board = HomeTabBoard(client, user_id)
            board.publish()
        return self.client_for(board, ModalAlerter(client, user_id)).start()

    def remember_viewer(self, user_id, seen_at=None):
        with self._viewers_lock:
            self.viewers[user_id] = seen_at or datetime.now()

    def forget_viewer(self, user_id):
        with self._viewers_lock:
            self.viewers.pop(user_id, None)

    def prune_viewers(self, now=None):
        """drop viewers whose home tab was not opened within the ttl, 0 keeps everyone"""
        ttl = get_viewer_ttl_seconds()
        if ttl <= 0:
            return []
        cutoff = (now or datetime.now()) - timedelta(seconds=ttl)
        with self._viewers_lock:
            stale = [user_id for user_id, seen_at in self.viewers.items() if seen_at < cutoff]
            for user_id in stale:
                del self.viewers[user_id]
        if stale:
            self.logger.info(f"[Concierge] Pruned {len(stale)} stale home tab viewer(s).")
        return stale

    def refresh_homes(self, client):
        """
        Fetch the list once and show it on every remembered home tab.
        Returns the number of tabs republished.
        """
        self.prune_viewers()
        viewers = self.current_viewers()
        if not viewers:
            return 0

        listing = MemoryBoard(has_form=False)
        if not self.client_for(listing, CallbackAlerter(self.logger.warning)).list_tasks():
            self.logger.warning("[Concierge] Home tab refresh skipped, list unavailable.")
            return 0

        refreshed = 0
        for user_id in viewers:
            try:
                HomeTabBoard(client, user_id).show(listing.tasks)
                refreshed += 1
            except Exception as e:
                # usually the user removed the app or left the workspace
                self.logger.warning(f"[Concierge] Dropping viewer {user_id}, publish failed: {e}")
                self.forget_viewer(user_id)
        return refreshed

    def current_viewers(self):
        with self._viewers_lock:
            return sorted(self.viewers)


concierge = Concierge()
