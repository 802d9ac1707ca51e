import logging
import os
from slack_bolt import App
from slack_bolt.adapter.socket_mode import SocketModeHandler

# Bolt needs both tokens at import time, listeners register on this app
assert os.environ.get(
    "SLACK_BOT_TOKEN"
), "SLACK_BOT_TOKEN environment variable is required."
app = App(
    name="errand",
    token=os.environ["SLACK_BOT_TOKEN"],
    logger=logging.getLogger("errand.bolt"),
)

# app-level token with connections:write scope, home tab events arrive over the socket
assert os.environ.get(
    "SLACK_APP_TOKEN"
), "SLACK_APP_TOKEN environment variable is required."
socket_mode_handler = SocketModeHandler(app, os.environ["SLACK_APP_TOKEN"])
