from flask import Flask, make_response

from errand.board.render import CallbackAlerter, MemoryBoard
from errand.slack.concierge import concierge
from errand.utils.format import format_tasks

flask_app = Flask(__name__)


@flask_app.route("/", methods=["GET"])
def index():
    return make_response("Errand is at work!", 200)


# helpful extra api endpoint for checking or debugging
@flask_app.route("/todos", methods=["GET"])
def list_todos():
    board = MemoryBoard(has_form=False)
    alerter = CallbackAlerter(flask_app.logger.warning)
    if not concierge.client_for(board, alerter).list_tasks():
        return make_response("Todo service unavailable.", 502)
    return make_response(f"*Your TODOs:* \n{format_tasks(board.tasks)}", 200)
