"""
Decision API Routes

Read-only views of the decision store and of pending delete confirmations.
"""

import logging

from fastapi import APIRouter, Depends

from decision_bot.integrations.notion import DecisionStoreError, NotionDecisionStore
from decision_bot.models.api_responses import (
    DecisionListResponse,
    PendingDeletionListResponse,
    PendingDeletionView,
)
from decision_bot.services.dependencies import get_decision_store, get_pending_registry
from decision_bot.services.pending_deletions import PendingDeletionRegistry

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=DecisionListResponse)
async def list_decisions(store: NotionDecisionStore = Depends(get_decision_store)):
    """List all stored decisions."""
    try:
        decisions = await store.list_decisions()
    except DecisionStoreError as e:
        logger.error(f"Failed to list decisions: {e}")
        return DecisionListResponse(status="error", reason=str(e))
    return DecisionListResponse(status="success", decisions=decisions, total=len(decisions))


@router.get("/pending", response_model=PendingDeletionListResponse)
async def list_pending_deletions(
    registry: PendingDeletionRegistry = Depends(get_pending_registry),
):
    """List deletions awaiting confirmation."""
    views = [
        PendingDeletionView(channel_id=channel_id, thread_ts=thread_ts, pending=pending)
        for (channel_id, thread_ts), pending in registry.items()
    ]
    return PendingDeletionListResponse(pending=views, total=len(views))
