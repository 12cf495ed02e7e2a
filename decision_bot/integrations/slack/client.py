"""
Slack API Client

Responsibilities:
- conversations.replies: Reconstruct the thread text for a mention
- conversations.info / conversations.list: Resolve a channel display name
- chat.postMessage: Post workflow responses into the thread
"""

from slack_sdk import WebClient
from slack_sdk.errors import SlackApiError
from decision_bot.config import get_settings
from decision_bot.integrations.slack.parser import build_thread_url, fallback_channel_name
from typing import Optional
import asyncio
import logging

logger = logging.getLogger(__name__)


class SlackClient:
    """Slack API client for the decision bot."""

    def __init__(self, client: Optional[WebClient] = None, user_client: Optional[WebClient] = None):
        settings = get_settings()
        self.settings = settings
        self.client = client or WebClient(token=settings.slack_bot_token)
        # conversations.replies may need a user token for channels the bot has not joined
        if user_client is not None:
            self.user_client = user_client
        elif settings.slack_user_token:
            self.user_client = WebClient(token=settings.slack_user_token)
        else:
            self.user_client = self.client

    async def post_message(self, channel_id: str, thread_ts: str, text: str) -> None:
        """
        Post a message into a thread.

        Raises:
            SlackApiError: If Slack rejects the message
        """
        try:
            await asyncio.to_thread(
                self.client.chat_postMessage,
                channel=channel_id,
                thread_ts=thread_ts,
                text=text,
            )
            logger.debug(f"Posted message to {channel_id}/{thread_ts}")
        except SlackApiError as e:
            logger.error(f"Slack API error posting message: {e.response['error']}")
            raise

    async def fetch_thread_text(self, channel_id: str, thread_ts: str, fallback_text: str = "") -> str:
        """
        Fetch all messages of a thread and join their text with newlines.

        Falls back to `fallback_text` (the mention itself) when the thread
        cannot be read.
        """
        try:
            result = await asyncio.to_thread(
                self.user_client.conversations_replies,
                channel=channel_id,
                ts=thread_ts,
            )
            messages = result.get("messages", [])
            text = "\n".join(m.get("text", "") for m in messages)
            logger.debug(f"Fetched {len(messages)} messages from thread {thread_ts}")
            return text or fallback_text
        except SlackApiError as e:
            logger.warning(
                f"Failed to fetch thread {thread_ts} ({e.response['error']}), using mention text only"
            )
            return fallback_text
        except Exception as e:
            logger.warning(f"Failed to fetch thread {thread_ts}: {e}, using mention text only")
            return fallback_text

    async def get_channel_name(self, channel_id: str) -> str:
        """
        Resolve a channel display name.

        Tries conversations.info, then conversations.list, then derives a
        name from the channel id prefix.
        """
        try:
            result = await asyncio.to_thread(self.client.conversations_info, channel=channel_id)
            channel = result.get("channel") or {}
            if channel:
                return channel.get("name") or channel.get("id") or channel_id
        except SlackApiError as e:
            logger.warning(
                f"conversations.info failed ({e.response['error']}), trying conversations.list"
            )
        except Exception as e:
            logger.warning(f"conversations.info failed ({e}), trying conversations.list")

        try:
            result = await asyncio.to_thread(
                self.client.conversations_list,
                types="public_channel,private_channel",
                limit=1000,
            )
            for channel in result.get("channels", []):
                if channel.get("id") == channel_id:
                    return channel.get("name") or channel_id
        except SlackApiError as e:
            logger.warning(f"conversations.list also failed: {e.response['error']}")
        except Exception as e:
            logger.warning(f"conversations.list also failed: {e}")

        return fallback_channel_name(channel_id)

    def build_thread_url(self, channel_id: str, thread_ts: str) -> str:
        return build_thread_url(self.settings.slack_workspace_url, channel_id, thread_ts)
