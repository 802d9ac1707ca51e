from errand.slack.app import app
from errand.slack.block_builder import (
    ADD_ACTION_ID,
    COMPLETE_ACTION_ID,
    DELETE_ACTION_ID,
    TITLE_ACTION_ID,
)
from errand.slack.concierge import concierge
from errand.slack.home_board import title_from_view_state


def _notify_failure(client, body, text):
    client.chat_postMessage(channel=body["user"]["id"], text=text)


@app.action(ADD_ACTION_ID)
def handle_add_todo(ack, body, client, logger):
    """
    Handle the form's Add button, the title is read from the view state.
    """
    ack()
    user_id = body["user"]["id"]
    title = title_from_view_state(body.get("view") or {})
    logger.info(f"User {user_id} clicked 'add_todo' with title {title!r}")

    try:
        concierge.client_for_action(client, body).create_task(title)
    except Exception as e:
        logger.exception(f"Failed to add todo via button: {e}")
        _notify_failure(client, body, f"❌ *Add failed*:\n`{e}`")


@app.action(TITLE_ACTION_ID)
def handle_title_entered(ack, body, client, logger):
    """
    Enter pressed in the todo input, same as clicking Add.
    """
    ack()
    user_id = body["user"]["id"]
    title = body["actions"][0].get("value")
    logger.info(f"User {user_id} submitted todo title {title!r}")

    try:
        concierge.client_for_action(client, body).create_task(title)
    except Exception as e:
        logger.exception(f"Failed to add todo via input: {e}")
        _notify_failure(client, body, f"❌ *Add failed*:\n`{e}`")


@app.action(COMPLETE_ACTION_ID)
def handle_complete_todo(ack, body, client, logger):
    """
    Handle action_id "complete_todo".
    If the user clicks the button, mark the todo as completed
    """
    ack()
    todo_id_str = body["actions"][0]["value"]
    user_id = body["user"]["id"]
    logger.info(f"User {user_id} clicked 'complete_todo' for todo_id {todo_id_str}")

    try:
        todo_id = int(todo_id_str)
        concierge.client_for_action(client, body).mark_complete(todo_id)
    except Exception as e:
        logger.exception(f"Failed to complete todo via button: {e}")
        _notify_failure(client, body, f"❌ *Complete failed*:\n`{e}`")


@app.action(DELETE_ACTION_ID)
def handle_delete_todo(ack, body, client, logger):
    """
    Handle action_id "delete_todo", the entry disappears from the home tab.
    """
    ack()
    todo_id_str = body["actions"][0]["value"]
    user_id = body["user"]["id"]
    logger.info(f"User {user_id} clicked 'delete_todo' for todo_id {todo_id_str}")

    try:
        todo_id = int(todo_id_str)
        concierge.client_for_action(client, body).delete_task(todo_id)
    except Exception as e:
        logger.exception(f"Failed to delete todo via button: {e}")
        _notify_failure(client, body, f"❌ *Delete failed*:\n`{e}`")
