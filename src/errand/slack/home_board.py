from contextlib import contextmanager
import logging
import uuid

from errand.board.render import Alerter, TodoBoard
from errand.slack.block_builder import (
    EMPTY_BLOCK_ID,
    INPUT_BLOCK_PREFIX,
    TITLE_ACTION_ID,
    BlockBuilder,
    section_block_id,
    todo_id_of_block,
)

logger = logging.getLogger(__name__)


def title_from_view_state(view):
    """value typed into the todo input, read from a view's submitted state"""
    values = (view.get("state") or {}).get("values") or {}
    for block_id, actions in values.items():
        if block_id.startswith(INPUT_BLOCK_PREFIX) and TITLE_ACTION_ID in actions:
            return actions[TITLE_ACTION_ID].get("value")
    return None


class HomeTabBoard(TodoBoard):
    """
    A user's App Home tab used as the rendered list.
    Every mutation patches the block list and republishes the whole view.
    """

    def __init__(self, client, user_id, blocks=None):
        self.client = client
        self.user_id = user_id
        self.blocks = list(blocks) if blocks is not None else BlockBuilder.build_page_blocks([])
        self._batch_depth = 0
        self._dirty = False

    @classmethod
    def from_view(cls, client, user_id, view):
        """board for a home view from an event payload, None when there is no such view"""
        if not view or view.get("type") != "home":
            return None
        return cls(client, user_id, view.get("blocks") or [])

    @property
    def has_form(self):
        return self._input_index() is not None

    def _input_index(self):
        for i, block in enumerate(self.blocks):
            if (block.get("block_id") or "").startswith(INPUT_BLOCK_PREFIX):
                return i
        return None

    def _furniture(self):
        return [
            block
            for block in self.blocks
            if todo_id_of_block(block) is None and block.get("block_id") != EMPTY_BLOCK_ID
        ]

    def todo_ids(self):
        ids = []
        for block in self.blocks:
            todo_id = todo_id_of_block(block)
            if todo_id is not None and todo_id not in ids:
                ids.append(todo_id)
        return ids

    def show(self, tasks):
        blocks = self._furniture()
        for task in tasks:
            blocks.extend(BlockBuilder.build_single_todo_blocks(task))
        if not tasks:
            blocks.extend(BlockBuilder.build_empty_blocks())
        self.blocks = blocks
        self._changed()

    def append(self, task):
        self.blocks = [b for b in self.blocks if b.get("block_id") != EMPTY_BLOCK_ID]
        self.blocks.extend(BlockBuilder.build_single_todo_blocks(task))
        self._changed()

    def replace(self, task):
        # section block is the anchor, the rest of the entry is dropped and rebuilt
        new_blocks = []
        found = False
        for block in self.blocks:
            if block.get("block_id") == section_block_id(task.id):
                new_blocks.extend(BlockBuilder.build_single_todo_blocks(task))
                found = True
            elif todo_id_of_block(block) == task.id:
                continue
            else:
                new_blocks.append(block)
        if not found:
            logger.warning(f"[HomeTabBoard] Todo {task.id} is not rendered, nothing to replace.")
            return
        self.blocks = new_blocks
        self._changed()

    def remove(self, task_id):
        self.blocks = [b for b in self.blocks if todo_id_of_block(b) != task_id]
        if not self.todo_ids() and not any(
            b.get("block_id") == EMPTY_BLOCK_ID for b in self.blocks
        ):
            self.blocks.extend(BlockBuilder.build_empty_blocks())
        self._changed()

    def clear_input(self):
        # Slack keeps typed text per block_id, a fresh id gives an empty input
        index = self._input_index()
        if index is None:
            return
        block = dict(self.blocks[index])
        block["block_id"] = f"{INPUT_BLOCK_PREFIX}_{uuid.uuid4().hex[:8]}"
        self.blocks[index] = block
        self._changed()

    @contextmanager
    def batch(self):
        """changes made inside go out as a single views_publish"""
        self._batch_depth += 1
        try:
            yield self
        finally:
            self._batch_depth -= 1
            if self._batch_depth == 0 and self._dirty:
                self.publish()

    def _changed(self):
        if self._batch_depth:
            self._dirty = True
        else:
            self.publish()

    def publish(self):
        self._dirty = False
        self.client.views_publish(
            user_id=self.user_id,
            view={"type": "home", "blocks": self.blocks},
        )


class ModalAlerter(Alerter):
    """
    Blocking warning as a modal, falls back to a direct message when the
    event carries no trigger_id.
    """

    def __init__(self, client, user_id, trigger_id=None):
        self.client = client
        self.user_id = user_id
        self.trigger_id = trigger_id

    def alert(self, message):
        if self.trigger_id:
            self.client.views_open(
                trigger_id=self.trigger_id,
                view=BlockBuilder.build_alert_view(message),
            )
        else:
            self.client.chat_postMessage(channel=self.user_id, text=f"⚠️ {message}")
