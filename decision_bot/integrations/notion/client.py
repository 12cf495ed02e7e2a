"""
Notion Decision Store

Decision records live as pages in a Notion database with the properties:
title (title or rich_text), summary, tag, slack_thread, slack_channel
(rich_text) and date_timestamp (date).

Responsibilities:
- databases.retrieve: Read (and cache) the database schema
- databases.query: List all decision pages (paged)
- pages.create / pages.update: Create and partially update decisions
- Archive pages to delete decisions
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError

from decision_bot.config import get_settings
from decision_bot.models.decision import DecisionFields, DecisionRecord

logger = logging.getLogger(__name__)

# Record field -> Notion property name
PROPERTY_NAMES = {
    "title": "title",
    "summary": "summary",
    "tag": "tag",
    "source_thread": "slack_thread",
    "source_channel": "slack_channel",
    "recorded_at": "date_timestamp",
}


class DecisionStoreError(Exception):
    """
    Raised when the decision store cannot complete an operation.
    """

    pass


class NotionDecisionStore:
    """Decision record store backed by a Notion database."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        database_id: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            api_key: Notion integration token (defaults to settings)
            database_id: Decision database id (defaults to settings)
            transport: Optional httpx transport, used by tests
        """
        settings = get_settings()
        self.api_key = api_key if api_key is not None else settings.notion_api_key
        self.database_id = database_id if database_id is not None else settings.notion_database_id
        self.base_url = settings.notion_api_url
        self.notion_version = settings.notion_version
        self.timeout = settings.store_timeout
        self._transport = transport
        self._schema: Optional[Dict[str, Any]] = None

        if not self.api_key:
            logger.warning("NOTION_API_KEY not configured, store calls will fail")
        if not self.database_id:
            logger.warning("NOTION_DATABASE_ID not configured, store calls will fail")

    @property
    def database_url(self) -> str:
        return f"https://www.notion.so/{self.database_id.replace('-', '')}"

    def page_url(self, page_id: str) -> str:
        return f"https://www.notion.so/{page_id.replace('-', '')}"

    async def list_decisions(self) -> List[DecisionRecord]:
        """
        Fetch every decision in the database.

        Raises:
            DecisionStoreError: If the query fails
        """
        records: List[DecisionRecord] = []
        body: Dict[str, Any] = {"page_size": 100}

        while True:
            data = await self._request(
                "POST", f"/databases/{self.database_id}/query", json=body
            )
            for page in data.get("results", []):
                if page.get("archived") or page.get("in_trash"):
                    continue
                try:
                    records.append(self._page_to_record(page))
                except (KeyError, TypeError, ValidationError) as e:
                    raise DecisionStoreError(
                        f"Malformed decision page {page.get('id', '<no id>')}"
                    ) from e

            if not data.get("has_more") or not data.get("next_cursor"):
                break
            body = {"page_size": 100, "start_cursor": data["next_cursor"]}

        logger.info(f"Retrieved {len(records)} decisions from Notion")
        return records

    async def create_decision(self, fields: DecisionFields) -> str:
        """
        Create a decision page.

        Returns:
            New page id

        Raises:
            DecisionStoreError: If the page cannot be created
        """
        properties = await self._build_properties(fields)
        data = await self._request(
            "POST",
            "/pages",
            json={"parent": {"database_id": self.database_id}, "properties": properties},
        )
        page_id = data.get("id")
        if not page_id:
            raise DecisionStoreError("Notion did not return a page id")
        logger.info(f"Decision added to Notion: {page_id}")
        return page_id

    async def update_decision(self, decision_id: str, fields: DecisionFields) -> None:
        """
        Update only the fields set on `fields`.

        Raises:
            DecisionStoreError: If the page cannot be updated
        """
        properties = await self._build_properties(fields)
        await self._request("PATCH", f"/pages/{decision_id}", json={"properties": properties})
        logger.info(f"Decision {decision_id} updated ({', '.join(sorted(properties))})")

    async def delete_decision(self, decision_id: str) -> None:
        """
        Archive a decision page (Notion pages are archived, not destroyed).

        Raises:
            DecisionStoreError: If the page cannot be archived
        """
        await self._request("PATCH", f"/pages/{decision_id}", json={"archived": True})
        logger.info(f"Decision {decision_id} archived")

    async def get_schema(self) -> Dict[str, Any]:
        """Database property schema, retrieved once."""
        if self._schema is None:
            data = await self._request("GET", f"/databases/{self.database_id}")
            self._schema = data.get("properties", {})
            logger.info(f"Loaded Notion schema: {', '.join(sorted(self._schema))}")
        return self._schema

    async def _build_properties(self, fields: DecisionFields) -> Dict[str, Any]:
        """
        Build Notion properties for the set fields that exist in the schema.
        """
        schema = await self.get_schema()
        properties: Dict[str, Any] = {}

        for field, value in fields.changed().items():
            name = PROPERTY_NAMES[field]
            column = schema.get(name)
            if column is None:
                logger.debug(f"Property '{name}' not in database schema, skipping")
                continue
            column_type = column.get("type")

            if isinstance(value, datetime):
                if column_type == "date":
                    properties[name] = {"date": {"start": value.isoformat()}}
                continue

            text = [{"text": {"content": str(value)}}]
            if column_type == "title":
                properties[name] = {"title": text}
            elif column_type == "rich_text":
                properties[name] = {"rich_text": text}
            else:
                logger.debug(f"Property '{name}' has unsupported type {column_type}, skipping")

        return properties

    def _page_to_record(self, page: Dict[str, Any]) -> DecisionRecord:
        properties = page.get("properties", {})

        recorded_at = None
        date_prop = properties.get(PROPERTY_NAMES["recorded_at"]) or {}
        start = (date_prop.get("date") or {}).get("start")
        if start:
            try:
                recorded_at = datetime.fromisoformat(start.replace("Z", "+00:00"))
            except ValueError:
                logger.warning(f"Unparseable date '{start}' on page {page.get('id')}")

        return DecisionRecord(
            id=page["id"],
            title=_plain_text(properties.get(PROPERTY_NAMES["title"])),
            summary=_plain_text(properties.get(PROPERTY_NAMES["summary"])),
            tag=_plain_text(properties.get(PROPERTY_NAMES["tag"])),
            source_thread=_plain_text(properties.get(PROPERTY_NAMES["source_thread"])),
            source_channel=_plain_text(properties.get(PROPERTY_NAMES["source_channel"])),
            recorded_at=recorded_at,
            url=page.get("url") or self.page_url(page["id"]),
        )

    async def _request(self, method: str, path: str, json: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Notion-Version": self.notion_version,
            "Content-Type": "application/json",
        }
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                headers=headers,
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                response = await client.request(method, path, json=json)
                response.raise_for_status()
                return response.json()
        except httpx.HTTPStatusError as e:
            logger.error(
                f"Notion API error {e.response.status_code} on {method} {path}: {e.response.text[:200]}"
            )
            raise DecisionStoreError(
                f"Notion API returned {e.response.status_code} for {method} {path}"
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"Notion request {method} {path} failed: {e}")
            raise DecisionStoreError(f"Notion request failed: {e}") from e
        except ValueError as e:
            raise DecisionStoreError(f"Malformed Notion response for {method} {path}") from e


def _plain_text(prop: Optional[Dict[str, Any]]) -> str:
    """Concatenate the plain text of a title or rich_text property."""
    if not prop:
        return ""
    parts = prop.get("title") or prop.get("rich_text") or []
    return "".join(
        part.get("plain_text") or (part.get("text") or {}).get("content", "")
        for part in parts
    )
