from errand.slack.app import app
from errand.slack.concierge import concierge


@app.event("app_home_opened")
def update_home_tab(client, event, logger):
    """Home tab opened is the page-ready signal: render the current todo list"""
    if event.get("tab", "home") != "home":
        return
    user_id = event["user"]
    logger.info(f"User {user_id} opened the home tab")

    try:
        concierge.open_home(client, user_id, event.get("view"))
    except Exception as e:
        logger.exception(f"Error publishing home tab: {e}")
