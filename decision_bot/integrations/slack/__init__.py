# Slack integration module
from decision_bot.integrations.slack.client import SlackClient
from decision_bot.integrations.slack.parser import (
    parse_mention_event,
    build_thread_url,
    fallback_channel_name,
)
from decision_bot.integrations.slack.verification import SlackRequestVerifier

__all__ = [
    "SlackClient",
    "SlackRequestVerifier",
    "parse_mention_event",
    "build_thread_url",
    "fallback_channel_name",
]
