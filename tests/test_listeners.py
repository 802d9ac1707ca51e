from unittest.mock import MagicMock, Mock

import pytest

from conftest import connect_error
from errand.api.models import Task
from errand.slack.app import app
from errand.slack.block_builder import BlockBuilder
from errand.slack.concierge import concierge
from errand.slack.listeners import action, command, home


@pytest.fixture(autouse=True)
def use_fake_gateway(reset_slack_state, gateway):
    concierge.gateway = gateway


def _action_body(action_id, value=None, blocks=None, state=None, view=True):
    body = {
        "user": {"id": "U1"},
        "trigger_id": "T1",
        "actions": [{"action_id": action_id, "value": value}],
    }
    if view:
        body["view"] = {
            "id": "V1",
            "type": "home",
            "blocks": blocks if blocks is not None else BlockBuilder.build_page_blocks([]),
            "state": {"values": state or {}},
        }
    return body


def _entry_texts(client):
    blocks = client.views_publish.call_args.kwargs["view"]["blocks"]
    return [
        b["text"]["text"]
        for b in blocks
        if (b.get("block_id") or "").startswith("todo_section_")
    ]


def test_listeners_are_registered():
    assert app.listeners[("event", "app_home_opened")] is home.update_home_tab
    assert app.listeners[("action", "complete_todo")] is action.handle_complete_todo
    assert app.listeners[("action", "delete_todo")] is action.handle_delete_todo
    assert app.listeners[("action", "add_todo")] is action.handle_add_todo
    assert app.listeners[("command", "/todo")] is command.handle_todo_command


def test_home_opened_publishes_list(todo_server):
    todo_server.add("Buy milk")
    client = MagicMock()

    home.update_home_tab(client=client, event={"user": "U1", "tab": "home"}, logger=Mock())

    assert _entry_texts(client) == ["Buy milk - incomplete"]
    assert concierge.current_viewers() == ["U1"]


def test_home_opened_messages_tab_is_ignored(todo_server):
    client = MagicMock()
    home.update_home_tab(client=client, event={"user": "U1", "tab": "messages"}, logger=Mock())
    client.views_publish.assert_not_called()
    assert todo_server.requests == []


def test_add_button_reads_state_and_appends(todo_server):
    client = MagicMock()
    ack = Mock()
    body = _action_body(
        "add_todo",
        state={"todo_input": {"todo_title": {"value": " Buy milk "}}},
    )

    action.handle_add_todo(ack=ack, body=body, client=client, logger=Mock())

    ack.assert_called_once()
    assert todo_server.todos[1]["Title"] == "Buy milk"
    assert _entry_texts(client) == ["Buy milk - incomplete"]
    # cleared input and new entry go out in one publish
    client.views_publish.assert_called_once()
    blocks = client.views_publish.call_args.kwargs["view"]["blocks"]
    assert any(b.get("block_id", "").startswith("todo_input_") for b in blocks)


def test_add_empty_title_opens_warning(todo_server):
    client = MagicMock()
    body = _action_body("todo_title", value="   ")

    action.handle_title_entered(ack=Mock(), body=body, client=client, logger=Mock())

    assert todo_server.requests == []
    assert "Enter a todo!" in str(client.views_open.call_args.kwargs["view"])
    client.views_publish.assert_not_called()


def test_complete_button_patches_entry(todo_server):
    todo_server.add("Buy milk")
    todo_server.add("Walk dog")
    blocks = BlockBuilder.build_page_blocks(
        [Task(id=1, title="Buy milk"), Task(id=2, title="Walk dog")]
    )
    client = MagicMock()

    action.handle_complete_todo(
        ack=Mock(), body=_action_body("complete_todo", "1", blocks), client=client, logger=Mock()
    )

    assert _entry_texts(client) == ["Buy milk - complete", "Walk dog - incomplete"]


def test_delete_button_removes_entry(todo_server):
    todo_server.add("Buy milk")
    todo_server.add("Walk dog")
    blocks = BlockBuilder.build_page_blocks(
        [Task(id=1, title="Buy milk"), Task(id=2, title="Walk dog")]
    )
    client = MagicMock()

    action.handle_delete_todo(
        ack=Mock(), body=_action_body("delete_todo", "1", blocks), client=client, logger=Mock()
    )

    assert _entry_texts(client) == ["Walk dog - incomplete"]


def test_delete_server_error_alerts_message(todo_server):
    client = MagicMock()
    action.handle_delete_todo(
        ack=Mock(), body=_action_body("delete_todo", "8"), client=client, logger=Mock()
    )
    assert "Todo not found" in str(client.views_open.call_args.kwargs["view"])
    client.views_publish.assert_not_called()


def test_action_outside_home_tab_does_nothing(todo_server):
    client = MagicMock()
    action.handle_complete_todo(
        ack=Mock(), body=_action_body("complete_todo", "1", view=False), client=client, logger=Mock()
    )
    assert todo_server.requests == []
    client.views_publish.assert_not_called()
    client.views_open.assert_not_called()


def test_bad_todo_id_is_reported():
    client = MagicMock()
    logger = Mock()
    action.handle_complete_todo(
        ack=Mock(), body=_action_body("complete_todo", "abc"), client=client, logger=logger
    )
    logger.exception.assert_called_once()
    assert "Complete failed" in client.chat_postMessage.call_args.kwargs["text"]


def _run_command(text):
    client = MagicMock()
    body = {"user_id": "U1", "channel_id": "C1", "text": text}
    command.handle_todo_command(ack=Mock(), body=body, client=client, logger=Mock(), say=Mock())
    return [c.kwargs["text"] for c in client.chat_postEphemeral.call_args_list]


def test_command_list(todo_server):
    todo_server.add("Buy milk")
    replies = _run_command("list")
    assert replies == ["*TODOs:*\n- [ID: 1] Buy milk - incomplete"]


def test_command_list_unreachable(todo_server):
    todo_server.override = connect_error
    replies = _run_command("list")
    assert "Could not reach" in replies[0]


def test_command_add_done_rm(todo_server):
    assert _run_command("add Buy milk") == ["✅ Added *Buy milk*."]
    assert todo_server.todos[1]["Title"] == "Buy milk"

    assert _run_command("done 1") == ["✅ Todo #1 is complete."]
    assert todo_server.todos[1]["Status"] == "complete"

    assert _run_command("rm 1") == ["🗑️ Todo #1 deleted."]
    assert todo_server.todos == {}


def test_command_add_blank_title_warns(todo_server):
    replies = _run_command("add '   '")
    assert replies == ["⚠️ Enter a todo!"]
    assert todo_server.requests == []


def test_command_server_error_is_shown(todo_server):
    replies = _run_command("done 42")
    assert replies == ["⚠️ Todo not found"]


def test_command_help_and_empty():
    assert "/todo add" in _run_command("help")[0]
    assert "/todo add" in _run_command("")[0]


def test_command_bad_id_reports_error(todo_server):
    replies = _run_command("done abc")
    assert replies and replies[0].startswith("❌")
    assert todo_server.requests == []
