from typing import List
import shlex

import typer

from errand.board.render import CallbackAlerter, MemoryBoard
from errand.slack.app import app
from errand.slack.concierge import concierge
from errand.utils.format import format_tasks, help_string


@app.command("/todo")
def handle_todo_command(ack, body, client, logger, say):
    """
    Handle /todo command
    Use client.chat_postEphemeral() to send messages visible only to the user
    """
    # Immediately ACK (within 3 seconds)
    ack()

    user_id = body["user_id"]
    channel_id = body["channel_id"]
    # text is no /todo prefix
    text = body.get("text", "").strip()
    logger.info(f"User {user_id} triggered /todo with: {text}")

    def say_ephemeral(message: str = None, *, blocks=None):
        """Send ephemeral message visible only to the command user"""
        assert not (
            message is None and blocks is None
        ), "Either message or blocks must be provided"
        client.chat_postEphemeral(
            channel=channel_id, user=user_id, text=message, blocks=blocks
        )

    try:
        args_list = shlex.split(text) or ["help"]
        logger.debug(f"Parsed args: {args_list}")

        class AppState:
            def __init__(self, logger, say_ephemeral):
                self.logger = logger
                self.say_ephemeral = say_ephemeral

        todo_cli_app(args_list, obj=AppState(logger, say_ephemeral), standalone_mode=False)
    except typer.BadParameter as e:
        logger.exception(f"Typer parameter error: {e}")
        say_ephemeral(f"❌ *Parameter Error*:\n`{e}`")
    except SystemExit as e:
        # Typer exits on --help or errors
        if e.code == 0:
            logger.info("--- Typer help info (captured) ---")
        else:
            logger.info("--- Typer parameter error (captured) ---")
            say_ephemeral(
                "❌ *Parameter Error*:\n`Please check your command format or use /todo help for help`"
            )
    except Exception as e:
        logger.exception(f"Unknown error: {e}")
        say_ephemeral(f"❌ *Error occurred*:\n`{e}`")


todo_cli_app = typer.Typer(
    help=help_string(),
    add_completion=False,  # slack bot can't use shell completion
)


def _client(ctx: typer.Context, board: MemoryBoard):
    return concierge.client_for(board, CallbackAlerter(lambda msg: ctx.obj.say_ephemeral(f"⚠️ {msg}")))


@todo_cli_app.command("list", help="• /todo list")
def list_todos(ctx: typer.Context):
    """
    List todos as the server has them.
    """
    logger = ctx.obj.logger
    board = MemoryBoard()
    if not _client(ctx, board).list_tasks():
        ctx.obj.say_ephemeral("❌ Could not reach the todo service, try again later.")
        return
    todo_list = format_tasks(board.tasks)
    logger.debug(f"Listing todos: {todo_list}")
    ctx.obj.say_ephemeral(f"*TODOs:*\n{todo_list}")


@todo_cli_app.command("add", help="• /todo add <title>")
def add_todo(
    ctx: typer.Context,
    title: List[str] = typer.Argument(..., help="Todo title (e.g., 'Buy milk')"),
):
    """
    Create a todo.
    """
    text = " ".join(title)
    if _client(ctx, MemoryBoard()).create_task(text):
        ctx.obj.logger.info(f"Added todo {text!r}")
        ctx.obj.say_ephemeral(f"✅ Added *{text.strip()}*.")


@todo_cli_app.command("done", help="• /todo done <id>")
def complete_todo(
    ctx: typer.Context,
    todo_id: int = typer.Argument(..., help="ID of the todo to complete"),
):
    """
    Mark a todo as complete.
    """
    if _client(ctx, MemoryBoard()).mark_complete(todo_id):
        ctx.obj.say_ephemeral(f"✅ Todo #{todo_id} is complete.")


@todo_cli_app.command("rm", help="• /todo rm <id>")
def delete_todo(
    ctx: typer.Context,
    todo_id: int = typer.Argument(..., help="ID of the todo to delete"),
):
    """
    Delete a todo.
    """
    if _client(ctx, MemoryBoard()).delete_task(todo_id):
        ctx.obj.say_ephemeral(f"🗑️ Todo #{todo_id} deleted.")


@todo_cli_app.command("help", help="Show help information")
def show_help(ctx: typer.Context):
    """
    Show help information.
    """
    ctx.obj.logger.info("Showing help information...")
    ctx.obj.say_ephemeral(help_string())
