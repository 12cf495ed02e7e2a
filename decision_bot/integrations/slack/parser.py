"""
Slack Event and Link Helpers

- Parse app_mention events from Events API payloads
- Build thread permalinks from channel id and thread timestamp
- Derive channel display names when the API cannot resolve them
"""

import logging
from typing import Any, Dict, Optional

from decision_bot.models.thread import MentionEvent

logger = logging.getLogger(__name__)


def parse_mention_event(payload: Dict[str, Any]) -> Optional[MentionEvent]:
    """
    Extract an app_mention event from an Events API payload.

    Returns:
        MentionEvent, or None for any other payload, bot messages, or events
        missing channel/ts
    """
    if payload.get("type") != "event_callback":
        return None

    event = payload.get("event") or {}
    if event.get("type") != "app_mention":
        return None

    if event.get("bot_id") or event.get("subtype") == "bot_message":
        logger.debug("Ignoring mention from a bot")
        return None

    channel = event.get("channel")
    ts = event.get("ts")
    if not channel or not ts:
        logger.warning("app_mention event without channel or ts, ignoring")
        return None

    return MentionEvent(
        channel=channel,
        ts=ts,
        text=event.get("text", ""),
        thread_ts=event.get("thread_ts"),
        user=event.get("user"),
    )


def build_thread_url(workspace_url: str, channel_id: str, thread_ts: str) -> str:
    """
    Build a Slack thread permalink.

    Examples:
        ("https://acme.slack.com", "C123ABC456", "1234567890.123456")
        -> https://acme.slack.com/archives/C123ABC456/p1234567890123456
    """
    return f"{workspace_url.rstrip('/')}/archives/{channel_id}/p{thread_ts.replace('.', '')}"


def fallback_channel_name(channel_id: str) -> str:
    """
    Derive a display name from a channel id when Slack cannot resolve it.

    Ids starting with C are public channels, G private channels, D direct
    messages.
    """
    if channel_id.startswith("C"):
        return f"#channel-{channel_id[1:9]}"
    if channel_id.startswith("G"):
        return f"Private Channel {channel_id[1:9]}"
    if channel_id.startswith("D"):
        return f"DM {channel_id[1:9]}"
    return channel_id
