"""
Decision Models

Persisted decision records, transient decision candidates, and the structured
outputs returned by the language model capabilities.
"""

from datetime import datetime, timezone
from typing import List, Optional, Dict, Any
from enum import Enum
from pydantic import BaseModel, Field


class ActionType(str, Enum):
    """Action requested by a mention."""

    CREATE = "create"
    UPDATE = "update"
    READ = "read"
    DELETE = "delete"
    SUMMARIZE = "summarize"
    NONE_APPLICABLE = "none_applicable"


class DecisionCandidate(BaseModel):
    """Decision extracted from a thread, not yet reconciled with the store."""

    title: str = Field(..., description="Decision title (<= 80 chars)")
    summary: str = Field(..., description="One or two sentence summary")
    tag: str = Field(..., description="Short category, e.g. 'architecture'")


class DecisionRecord(BaseModel):
    """Decision record as stored in the Notion database."""

    id: str = Field(..., description="Store-assigned page id")
    title: str = ""
    summary: str = ""
    tag: str = ""
    source_thread: str = Field("", description="Slack thread URL")
    source_channel: str = Field("", description="Slack channel display name")
    recorded_at: Optional[datetime] = None
    url: Optional[str] = Field(None, description="Link to the record page")


class DecisionFields(BaseModel):
    """
    Writable decision fields.

    Every field is optional so the same model carries full creates and
    partial updates; unset fields are never written.
    """

    title: Optional[str] = None
    summary: Optional[str] = None
    tag: Optional[str] = None
    source_thread: Optional[str] = None
    source_channel: Optional[str] = None
    recorded_at: Optional[datetime] = None

    @classmethod
    def with_source(
        cls,
        source_thread: str,
        source_channel: str,
        recorded_at: Optional[datetime] = None,
        **changes: Any,
    ) -> "DecisionFields":
        """Build fields with refreshed thread, channel and timestamp."""
        return cls(
            source_thread=source_thread,
            source_channel=source_channel,
            recorded_at=recorded_at or datetime.now(timezone.utc),
            **changes,
        )

    def changed(self) -> Dict[str, Any]:
        """Fields explicitly set, without None values."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


class PendingDeletion(BaseModel):
    """Unconfirmed delete request for one (channel, thread) key."""

    decision_id: str
    title: str
    summary: str
    tag: str = ""
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


# Structured capability outputs


class IntentClassification(BaseModel):
    """Intent classifier output."""

    action: ActionType = Field(
        ...,
        description="One of: create, update, read, delete, summarize, none_applicable",
    )
    reasoning: str = Field("", description="Short explanation of the choice")


class DecisionExtraction(BaseModel):
    """Extraction output for a single decision."""

    title: str = Field(..., description="Crisp decision title, at most 80 characters")
    summary: str = Field(..., description="1-2 sentence summary of the decision")
    tag: str = Field(
        ...,
        description="Single descriptive word or short phrase (e.g. 'architecture', 'process', 'tooling', 'policy')",
    )
    confidence: int = Field(
        ..., ge=0, le=100, description="Confidence that a decision was made (0-100)"
    )


class ComparisonResult(BaseModel):
    """Comparator verdict between a candidate and stored decisions."""

    is_similar: bool = Field(
        ..., description="True if the candidate restates or revises a stored decision"
    )
    similarity_score: int = Field(..., ge=0, le=100, description="Similarity (0-100)")
    matched_id: Optional[str] = Field(
        None, description="Id of the most similar stored decision, if any"
    )
    reasoning: str = Field("", description="Why the decisions are or are not similar")

    @classmethod
    def not_similar(cls, reasoning: str = "No existing decisions to compare against.") -> "ComparisonResult":
        return cls(is_similar=False, similarity_score=0, matched_id=None, reasoning=reasoning)


class RelatedDecision(BaseModel):
    """Decision reported as related, referenced by its position in the query list."""

    ordinal: int = Field(..., ge=1, description="1-based position in the provided list")
    title: str = Field(..., description="Title of the related decision")
    summary: str = Field(..., description="Summary of the related decision")


class RelatedDecisionsResult(BaseModel):
    """Relatedness output: ranked related decisions plus a rationale."""

    related_decisions: List[RelatedDecision] = Field(default_factory=list)
    rationale: str = Field("", description="Why these decisions relate to the thread")


class UpdateTargetOutput(BaseModel):
    """Update-target output: the record to mutate and the changed fields."""

    decision_id: Optional[str] = Field(
        None, description="Id of the decision to update, taken from the candidate list"
    )
    title: Optional[str] = Field(None, description="New title, only if it changes")
    summary: Optional[str] = Field(None, description="New summary, only if it changes")
    tag: Optional[str] = Field(None, description="New tag, only if it changes")
    confidence: int = Field(..., ge=0, le=100, description="Confidence (0-100)")
    reasoning: str = Field("", description="What changed and why")


class UpdateTarget(BaseModel):
    """Accepted update target."""

    decision_id: str
    changes: DecisionFields
    confidence: int


class ThreadSummary(BaseModel):
    """Summarizer output."""

    overview: str = Field(..., description="Two or three sentence overview of the thread")
    open_points: List[str] = Field(default_factory=list, description="Unresolved questions")
    decisions_made: List[str] = Field(default_factory=list, description="Decisions reached")
    next_steps: List[str] = Field(default_factory=list, description="Agreed follow-ups")
    confidence: int = Field(..., ge=0, le=100, description="Confidence (0-100)")
