"""
API Response Models

Pydantic models for workflow outcomes and API response structures.
"""

from pydantic import BaseModel, Field
from typing import Optional, List

from decision_bot.models.decision import ActionType, DecisionRecord, PendingDeletion


class WorkflowResult(BaseModel):
    """Outcome of one workflow run. `message` is what was posted to the thread."""

    action: ActionType = Field(..., description="Workflow that handled the mention")
    success: bool = Field(..., description="False when the workflow reported a failure")
    message: str = Field(..., description="Text posted back to the thread")
    decision_id: Optional[str] = Field(None, description="Record created, updated or deleted")
    outcome: Optional[str] = Field(
        None,
        description="Finer outcome, e.g. added, updated, pending, confirmed, cancelled, reminded",
    )


class DecisionListResponse(BaseModel):
    status: str = Field(..., description="Status: success or error")
    decisions: List[DecisionRecord] = Field(default_factory=list)
    total: int = 0
    reason: Optional[str] = None


class PendingDeletionView(BaseModel):
    channel_id: str
    thread_ts: str
    pending: PendingDeletion


class PendingDeletionListResponse(BaseModel):
    pending: List[PendingDeletionView] = Field(default_factory=list)
    total: int = 0
