# Shared data models
from decision_bot.models.thread import MentionEvent, ThreadContext
from decision_bot.models.decision import (
    ActionType,
    DecisionCandidate,
    DecisionRecord,
    DecisionFields,
    PendingDeletion,
    IntentClassification,
    DecisionExtraction,
    ComparisonResult,
    RelatedDecision,
    RelatedDecisionsResult,
    UpdateTargetOutput,
    UpdateTarget,
    ThreadSummary,
)
from decision_bot.models.api_responses import WorkflowResult

__all__ = [
    "MentionEvent",
    "ThreadContext",
    "ActionType",
    "DecisionCandidate",
    "DecisionRecord",
    "DecisionFields",
    "PendingDeletion",
    "IntentClassification",
    "DecisionExtraction",
    "ComparisonResult",
    "RelatedDecision",
    "RelatedDecisionsResult",
    "UpdateTargetOutput",
    "UpdateTarget",
    "ThreadSummary",
    "WorkflowResult",
]
