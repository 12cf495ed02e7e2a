"""
Thread Models

Inbound Slack mention events and the reconstructed thread context handed to
the action router.
"""

from pydantic import BaseModel
from typing import Optional, Tuple


class MentionEvent(BaseModel):
    """An app_mention event as delivered by the Slack Events API."""

    channel: str
    ts: str
    text: str = ""
    thread_ts: Optional[str] = None
    user: Optional[str] = None

    @property
    def thread_locator(self) -> str:
        """Root of the thread the mention belongs to."""
        return self.thread_ts or self.ts


class ThreadContext(BaseModel):
    """Everything a workflow needs to know about the conversation."""

    channel_id: str
    thread_ts: str
    channel_name: str
    thread_url: str
    thread_text: str
    message_text: str = ""  # Mention text with the bot mention stripped

    @property
    def key(self) -> Tuple[str, str]:
        return (self.channel_id, self.thread_ts)
