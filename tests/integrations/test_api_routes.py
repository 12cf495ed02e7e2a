"""
Tests for the HTTP surface: Slack events webhook and decision views.
"""

import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

import json
import time
import pytest
from unittest.mock import AsyncMock, MagicMock

from fastapi.testclient import TestClient
from slack_sdk.signature import SignatureVerifier

from decision_bot.integrations.notion import DecisionStoreError
from decision_bot.integrations.slack import SlackRequestVerifier
from decision_bot.main import app
from decision_bot.models.decision import DecisionRecord, PendingDeletion
from decision_bot.services.dependencies import (
    get_decision_store,
    get_mention_handler,
    get_pending_registry,
    get_request_verifier,
)
from decision_bot.services.pending_deletions import PendingDeletionRegistry

SECRET = "test-signing-secret"


@pytest.fixture
def handler():
    handler = MagicMock()
    handler.handle = AsyncMock()
    return handler


@pytest.fixture
def client(handler):
    app.dependency_overrides[get_request_verifier] = lambda: SlackRequestVerifier(SECRET)
    app.dependency_overrides[get_mention_handler] = lambda: handler
    yield TestClient(app)
    app.dependency_overrides.clear()


def signed_post(client, payload, extra_headers=None):
    body = json.dumps(payload).encode()
    timestamp = str(int(time.time()))
    headers = {
        "Content-Type": "application/json",
        "X-Slack-Request-Timestamp": timestamp,
        "X-Slack-Signature": SignatureVerifier(SECRET).generate_signature(timestamp=timestamp, body=body),
    }
    headers.update(extra_headers or {})
    return client.post("/slack/events", content=body, headers=headers)


MENTION = {
    "type": "event_callback",
    "event": {
        "type": "app_mention",
        "channel": "C1",
        "ts": "1700000000.000200",
        "thread_ts": "1700000000.000100",
        "text": "<@U0BOT> log this",
        "user": "U42",
    },
}


def test_url_verification_echoes_challenge(client):
    response = client.post("/slack/events", json={"type": "url_verification", "challenge": "abc123"})

    assert response.status_code == 200
    assert response.json() == {"challenge": "abc123"}


def test_unsigned_request_rejected(client, handler):
    response = client.post("/slack/events", json=MENTION)

    assert response.status_code == 401
    handler.handle.assert_not_called()


def test_mention_is_scheduled(client, handler):
    response = signed_post(client, MENTION)

    assert response.status_code == 200
    handler.handle.assert_called_once()
    event = handler.handle.call_args.args[0]
    assert event.channel == "C1"
    assert event.thread_locator == "1700000000.000100"


def test_retries_are_dropped(client, handler):
    response = signed_post(client, MENTION, {"X-Slack-Retry-Num": "1", "X-Slack-Retry-Reason": "http_timeout"})

    assert response.status_code == 200
    handler.handle.assert_not_called()


def test_other_events_ignored(client, handler):
    payload = {"type": "event_callback", "event": {"type": "reaction_added"}}

    response = signed_post(client, payload)

    assert response.status_code == 200
    assert response.json() == {"status": "ignored"}
    handler.handle.assert_not_called()


def test_list_decisions():
    store = MagicMock()
    store.list_decisions = AsyncMock(
        return_value=[DecisionRecord(id="p1", title="Use PostgreSQL", summary="Primary DB")]
    )
    app.dependency_overrides[get_decision_store] = lambda: store
    try:
        response = TestClient(app).get("/api/decisions")
    finally:
        app.dependency_overrides.clear()

    body = response.json()
    assert body["status"] == "success"
    assert body["total"] == 1
    assert body["decisions"][0]["title"] == "Use PostgreSQL"


def test_list_decisions_store_error():
    store = MagicMock()
    store.list_decisions = AsyncMock(side_effect=DecisionStoreError("Notion API returned 503"))
    app.dependency_overrides[get_decision_store] = lambda: store
    try:
        response = TestClient(app).get("/api/decisions")
    finally:
        app.dependency_overrides.clear()

    assert response.json()["status"] == "error"
    assert "503" in response.json()["reason"]


def test_list_pending_deletions():
    registry = PendingDeletionRegistry()
    registry.open(("C1", "1.0"), PendingDeletion(decision_id="p1", title="Old", summary="s"))
    app.dependency_overrides[get_pending_registry] = lambda: registry
    try:
        response = TestClient(app).get("/api/decisions/pending")
    finally:
        app.dependency_overrides.clear()

    body = response.json()
    assert body["total"] == 1
    assert body["pending"][0]["channel_id"] == "C1"
    assert body["pending"][0]["pending"]["decision_id"] == "p1"


def test_health():
    assert TestClient(app).get("/health").json()["status"] == "healthy"


@pytest.mark.parametrize("body", [b"[1, 2]", b"42", b'"text"', b"null"])
def test_non_object_body_rejected(client, handler, body):
    response = client.post("/slack/events", content=body, headers={"Content-Type": "application/json"})

    assert response.status_code == 400
    handler.handle.assert_not_called()


def test_malformed_json_rejected(client, handler):
    response = client.post("/slack/events", content=b"{not json", headers={"Content-Type": "application/json"})

    assert response.status_code == 400
