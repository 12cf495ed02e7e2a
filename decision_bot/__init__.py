"""Slack decision log bot backed by a Notion database."""
