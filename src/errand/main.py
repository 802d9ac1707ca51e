from errand.utils.config import (
    get_block_style,
    get_refresh_seconds,
    load_config,
    setup_global_logger,
)

from errand.slack.block_builder import BlockBuilder
from errand.slack.refresh_launcher import launch_refresh_scheduler
from errand.slack.app import socket_mode_handler
from errand.slack import listeners
_ = listeners  # to avoid unused import warning

# register
from errand.extra.flask_app import flask_app

# for dev, bind slack events to flask app
from errand.extra import dev

_ = dev  # to avoid unused import warning


def errand_in():
    config = load_config()
    logging_config = config.get("logging", {})
    console_level = logging_config.get("console_level", "INFO").upper()
    file_level = logging_config.get("file_level", "DEBUG").upper()
    log_file = config.get("log_file", "errand.log")
    setup_global_logger(console_level=console_level, file_level=file_level, log_file_name=log_file)

    BlockBuilder.set_style(get_block_style())
    launch_refresh_scheduler(get_refresh_seconds())

    socket_mode_handler.connect()  # Keep the Socket Mode client running but non-blocking
    flask_app.run(port=10443)


if __name__ == "__main__":
    errand_in()
