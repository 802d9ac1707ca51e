"""Errand: a Slack home-tab client for a remote todo service."""
