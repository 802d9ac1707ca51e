from errand.slack.listeners import action, command, home

__all__ = ["action", "command", "home"]
