"""
Tests for Slack event parsing, thread links and request verification.
"""

import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

import time

from slack_sdk.signature import SignatureVerifier

from decision_bot.integrations.slack import (
    SlackRequestVerifier,
    build_thread_url,
    fallback_channel_name,
    parse_mention_event,
)


def mention_payload(**event_overrides):
    event = {
        "type": "app_mention",
        "channel": "C123ABC456",
        "ts": "1700000000.000200",
        "thread_ts": "1700000000.000100",
        "user": "U42",
        "text": "<@U0BOT> log this decision",
    }
    event.update(event_overrides)
    return {"type": "event_callback", "event": event}


class TestParseMentionEvent:
    """Test suite for app_mention parsing."""

    def test_reply_in_thread(self):
        event = parse_mention_event(mention_payload())

        assert event.channel == "C123ABC456"
        assert event.text == "<@U0BOT> log this decision"
        assert event.thread_locator == "1700000000.000100"

    def test_top_level_mention_uses_own_ts(self):
        payload = mention_payload()
        del payload["event"]["thread_ts"]

        assert parse_mention_event(payload).thread_locator == "1700000000.000200"

    def test_ignores_other_events(self):
        assert parse_mention_event(mention_payload(type="message")) is None
        assert parse_mention_event({"type": "url_verification", "challenge": "x"}) is None

    def test_ignores_bot_messages(self):
        assert parse_mention_event(mention_payload(bot_id="B1")) is None
        assert parse_mention_event(mention_payload(subtype="bot_message")) is None

    def test_requires_channel_and_ts(self):
        assert parse_mention_event(mention_payload(channel=None)) is None
        assert parse_mention_event(mention_payload(ts="")) is None


class TestThreadLinks:
    """Test suite for permalinks and channel names."""

    def test_build_thread_url(self):
        url = build_thread_url("https://acme.slack.com/", "C123ABC456", "1234567890.123456")
        assert url == "https://acme.slack.com/archives/C123ABC456/p1234567890123456"

    def test_fallback_channel_name(self):
        assert fallback_channel_name("C123ABC456XYZ") == "#channel-123ABC45"
        assert fallback_channel_name("G987654321") == "Private Channel 98765432"
        assert fallback_channel_name("D11111111") == "DM 11111111"
        assert fallback_channel_name("X42") == "X42"


class TestRequestVerification:
    """Test suite for Slack signature verification."""

    SECRET = "8f742231b10e8888abcd99yyyzzz85a5"

    def signed_headers(self, body: bytes, timestamp=None):
        timestamp = str(timestamp or int(time.time()))
        signature = SignatureVerifier(self.SECRET).generate_signature(timestamp=timestamp, body=body)
        return {"X-Slack-Request-Timestamp": timestamp, "X-Slack-Signature": signature}

    def test_valid_signature(self):
        body = b'{"type":"event_callback"}'
        assert SlackRequestVerifier(self.SECRET).verify(body, self.signed_headers(body))

    def test_tampered_body(self):
        headers = self.signed_headers(b'{"type":"event_callback"}')
        assert not SlackRequestVerifier(self.SECRET).verify(b'{"type":"other"}', headers)

    def test_stale_timestamp(self):
        body = b"{}"
        headers = self.signed_headers(body, timestamp=int(time.time()) - 600)
        assert not SlackRequestVerifier(self.SECRET).verify(body, headers)

    def test_missing_secret_rejects(self):
        body = b"{}"
        assert not SlackRequestVerifier("").verify(body, self.signed_headers(body))
