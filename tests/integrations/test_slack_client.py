"""
Tests for the Slack client wrapper

WebClient is replaced with MagicMock; slack_sdk errors are real.
"""

import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

import pytest
from unittest.mock import MagicMock

from slack_sdk.errors import SlackApiError

from decision_bot.integrations.slack import SlackClient


def slack_error(code: str) -> SlackApiError:
    return SlackApiError(message=code, response={"ok": False, "error": code})


@pytest.fixture
def web_client():
    return MagicMock()


@pytest.fixture
def slack(web_client):
    return SlackClient(client=web_client, user_client=web_client)


@pytest.mark.asyncio
async def test_post_message_in_thread(slack, web_client):
    await slack.post_message("C1", "1700000000.000100", "hello")

    web_client.chat_postMessage.assert_called_once_with(
        channel="C1", thread_ts="1700000000.000100", text="hello"
    )


@pytest.mark.asyncio
async def test_post_message_error_propagates(slack, web_client):
    web_client.chat_postMessage.side_effect = slack_error("channel_not_found")

    with pytest.raises(SlackApiError):
        await slack.post_message("C1", "1.0", "hello")


@pytest.mark.asyncio
async def test_fetch_thread_text_joins_replies(slack, web_client):
    web_client.conversations_replies.return_value = {
        "messages": [{"text": "Should we use Postgres?"}, {"text": "Yes, decided."}]
    }

    text = await slack.fetch_thread_text("C1", "1.0", fallback_text="mention")

    assert text == "Should we use Postgres?\nYes, decided."


@pytest.mark.asyncio
async def test_fetch_thread_text_falls_back_to_mention(slack, web_client):
    web_client.conversations_replies.side_effect = slack_error("not_in_channel")

    assert await slack.fetch_thread_text("C1", "1.0", fallback_text="mention") == "mention"


@pytest.mark.asyncio
async def test_channel_name_from_info(slack, web_client):
    web_client.conversations_info.return_value = {"channel": {"id": "C1", "name": "eng"}}

    assert await slack.get_channel_name("C1") == "eng"


@pytest.mark.asyncio
async def test_channel_name_from_list(slack, web_client):
    web_client.conversations_info.side_effect = slack_error("missing_scope")
    web_client.conversations_list.return_value = {
        "channels": [{"id": "C0", "name": "random"}, {"id": "C1", "name": "eng"}]
    }

    assert await slack.get_channel_name("C1") == "eng"


@pytest.mark.asyncio
async def test_channel_name_derived_from_id(slack, web_client):
    web_client.conversations_info.side_effect = slack_error("missing_scope")
    web_client.conversations_list.side_effect = slack_error("missing_scope")

    assert await slack.get_channel_name("C123ABC456") == "#channel-123ABC45"
