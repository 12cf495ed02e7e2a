"""
Tests for the Notion decision store

Requests are served by an httpx.MockTransport that records what was sent.
"""

import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

import json
import pytest
import httpx
from datetime import datetime, timezone

from decision_bot.integrations.notion import DecisionStoreError, NotionDecisionStore
from decision_bot.models.decision import DecisionFields

DATABASE_ID = "db-1234-5678"

SCHEMA = {
    "properties": {
        "title": {"type": "title"},
        "summary": {"type": "rich_text"},
        "tag": {"type": "rich_text"},
        "slack_thread": {"type": "rich_text"},
        "slack_channel": {"type": "rich_text"},
        "date_timestamp": {"type": "date"},
    }
}


def make_page(page_id, title, summary="", tag="", archived=False):
    return {
        "id": page_id,
        "archived": archived,
        "url": f"https://www.notion.so/{page_id}",
        "properties": {
            "title": {"type": "title", "title": [{"plain_text": title}]},
            "summary": {"type": "rich_text", "rich_text": [{"plain_text": summary}]},
            "tag": {"type": "rich_text", "rich_text": [{"plain_text": tag}]},
            "slack_thread": {"type": "rich_text", "rich_text": []},
            "slack_channel": {"type": "rich_text", "rich_text": [{"plain_text": "eng"}]},
            "date_timestamp": {"type": "date", "date": {"start": "2024-05-01T10:00:00.000Z"}},
        },
    }


class NotionStub:
    """Minimal Notion API served through httpx.MockTransport."""

    def __init__(self, query_pages=None, schema=None, fail_with=None):
        self.requests = []
        self.query_pages = query_pages or [[]]
        self.schema = schema or SCHEMA
        self.fail_with = fail_with

    def handler(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content) if request.content else None
        self.requests.append((request.method, request.url.path, body, request.headers))

        if self.fail_with is not None:
            return httpx.Response(self.fail_with, json={"message": "nope"})

        path = request.url.path
        if request.method == "GET" and path.endswith(f"/databases/{DATABASE_ID}"):
            return httpx.Response(200, json=self.schema)
        if request.method == "POST" and path.endswith("/query"):
            index = int(body.get("start_cursor", "0"))
            has_more = index + 1 < len(self.query_pages)
            return httpx.Response(
                200,
                json={
                    "results": self.query_pages[index],
                    "has_more": has_more,
                    "next_cursor": str(index + 1) if has_more else None,
                },
            )
        if request.method == "POST" and path.endswith("/pages"):
            return httpx.Response(200, json={"id": "new-page-id"})
        if request.method == "PATCH":
            return httpx.Response(200, json={"id": path.rsplit("/", 1)[-1]})
        return httpx.Response(404, json={"message": "unknown route"})

    def store(self) -> NotionDecisionStore:
        return NotionDecisionStore(
            api_key="secret-token",
            database_id=DATABASE_ID,
            transport=httpx.MockTransport(self.handler),
        )


@pytest.mark.asyncio
async def test_list_decisions_follows_cursor():
    stub = NotionStub(
        query_pages=[
            [make_page("p1", "Use PostgreSQL", "Primary DB", "database")],
            [make_page("p2", "Weekly releases", "Tuesdays", "process")],
        ]
    )

    records = await stub.store().list_decisions()

    assert [r.id for r in records] == ["p1", "p2"]
    assert records[0].title == "Use PostgreSQL"
    assert records[0].summary == "Primary DB"
    assert records[0].source_channel == "eng"
    assert records[0].recorded_at == datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc)
    assert stub.requests[1][2] == {"page_size": 100, "start_cursor": "1"}


@pytest.mark.asyncio
async def test_list_decisions_skips_archived_pages():
    stub = NotionStub(query_pages=[[make_page("p1", "Kept"), make_page("p2", "Gone", archived=True)]])

    records = await stub.store().list_decisions()

    assert [r.title for r in records] == ["Kept"]


@pytest.mark.asyncio
async def test_request_headers():
    stub = NotionStub()

    await stub.store().list_decisions()

    headers = stub.requests[0][3]
    assert headers["authorization"] == "Bearer secret-token"
    assert headers["notion-version"] == "2022-06-28"


@pytest.mark.asyncio
async def test_create_decision_writes_all_properties():
    stub = NotionStub()
    fields = DecisionFields.with_source(
        source_thread="https://acme.slack.com/archives/C1/p1",
        source_channel="eng",
        recorded_at=datetime(2024, 5, 1, tzinfo=timezone.utc),
        title="Use PostgreSQL",
        summary="Primary DB is Postgres.",
        tag="database",
    )

    page_id = await stub.store().create_decision(fields)

    assert page_id == "new-page-id"
    method, path, body, _ = stub.requests[-1]
    assert (method, path) == ("POST", "/v1/pages")
    assert body["parent"] == {"database_id": DATABASE_ID}
    properties = body["properties"]
    assert properties["title"] == {"title": [{"text": {"content": "Use PostgreSQL"}}]}
    assert properties["summary"] == {"rich_text": [{"text": {"content": "Primary DB is Postgres."}}]}
    assert properties["slack_thread"]["rich_text"][0]["text"]["content"].endswith("/p1")
    assert properties["date_timestamp"] == {"date": {"start": "2024-05-01T00:00:00+00:00"}}


@pytest.mark.asyncio
async def test_update_decision_writes_only_set_fields():
    stub = NotionStub()

    await stub.store().update_decision("p1", DecisionFields(summary="Release on Wednesdays."))

    method, path, body, _ = stub.requests[-1]
    assert (method, path) == ("PATCH", "/v1/pages/p1")
    assert body == {
        "properties": {"summary": {"rich_text": [{"text": {"content": "Release on Wednesdays."}}]}}
    }


@pytest.mark.asyncio
async def test_properties_missing_from_schema_are_skipped():
    schema = {"properties": {"title": {"type": "title"}, "summary": {"type": "rich_text"}}}
    stub = NotionStub(schema=schema)

    await stub.store().create_decision(
        DecisionFields.with_source(source_thread="url", source_channel="eng", title="T", summary="S", tag="x")
    )

    assert set(stub.requests[-1][2]["properties"]) == {"title", "summary"}


@pytest.mark.asyncio
async def test_schema_is_fetched_once():
    stub = NotionStub()
    store = stub.store()

    await store.update_decision("p1", DecisionFields(title="A"))
    await store.update_decision("p1", DecisionFields(title="B"))

    gets = [r for r in stub.requests if r[0] == "GET"]
    assert len(gets) == 1


@pytest.mark.asyncio
async def test_delete_decision_archives_page():
    stub = NotionStub()

    await stub.store().delete_decision("p9")

    method, path, body, _ = stub.requests[-1]
    assert (method, path, body) == ("PATCH", "/v1/pages/p9", {"archived": True})


@pytest.mark.asyncio
async def test_http_error_becomes_store_error():
    stub = NotionStub(fail_with=500)

    with pytest.raises(DecisionStoreError):
        await stub.store().list_decisions()


@pytest.mark.asyncio
async def test_malformed_page_becomes_store_error():
    stub = NotionStub(query_pages=[[{"properties": {}}]])

    with pytest.raises(DecisionStoreError, match="Malformed"):
        await stub.store().list_decisions()


def test_database_url():
    store = NotionDecisionStore(api_key="k", database_id="abc-def")
    assert store.database_url == "https://www.notion.so/abcdef"
    assert store.page_url("12-34") == "https://www.notion.so/1234"
