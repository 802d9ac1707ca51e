# local development, should disable in production
from flask import request
from slack_bolt.adapter.flask import SlackRequestHandler

from .flask_app import flask_app
from ..slack.app import app

slack_request_handler = SlackRequestHandler(app)


# Register routes to Flask app
@flask_app.route("/slack/events", methods=["POST"])
def slack_events():
    # handler runs App's dispatch method
    return slack_request_handler.handle(request)
