"""
Service wiring.

Process-wide singletons shared by the API routes.
"""

from functools import lru_cache

from decision_bot.ai_core.extraction import DecisionExtractor
from decision_bot.ai_core.intent import IntentClassifier
from decision_bot.ai_core.llm import create_llm
from decision_bot.ai_core.matching import (
    DecisionComparator,
    RelatedDecisionFinder,
    UpdateTargetResolver,
)
from decision_bot.ai_core.summarization import ThreadSummarizer
from decision_bot.config import get_settings
from decision_bot.integrations.notion import NotionDecisionStore
from decision_bot.integrations.slack import SlackClient, SlackRequestVerifier
from decision_bot.models.decision import ActionType
from decision_bot.services.action_router import ActionRouter
from decision_bot.services.mention_handler import MentionHandler
from decision_bot.services.pending_deletions import PendingDeletionRegistry
from decision_bot.services.workflows import (
    CreateWorkflow,
    DeleteWorkflow,
    ReadWorkflow,
    SummarizeWorkflow,
    UpdateWorkflow,
)


@lru_cache()
def get_decision_store() -> NotionDecisionStore:
    return NotionDecisionStore()


@lru_cache()
def get_pending_registry() -> PendingDeletionRegistry:
    return PendingDeletionRegistry(ttl_seconds=get_settings().pending_deletion_ttl_seconds)


@lru_cache()
def get_request_verifier() -> SlackRequestVerifier:
    return SlackRequestVerifier()


@lru_cache()
def get_mention_handler() -> MentionHandler:
    slack = SlackClient()
    store = get_decision_store()
    pending = get_pending_registry()
    llm = create_llm()
    finder = RelatedDecisionFinder(llm=llm)

    delete = DeleteWorkflow(slack, store, finder, pending)
    workflows = {
        ActionType.CREATE: CreateWorkflow(
            slack, store, DecisionExtractor(llm=llm), DecisionComparator(llm=llm)
        ),
        ActionType.UPDATE: UpdateWorkflow(
            slack, store, finder, UpdateTargetResolver(llm=llm)
        ),
        ActionType.READ: ReadWorkflow(slack, store, finder),
        ActionType.DELETE: delete,
        ActionType.SUMMARIZE: SummarizeWorkflow(slack, ThreadSummarizer(llm=llm)),
    }

    return MentionHandler(
        slack=slack,
        classifier=IntentClassifier(llm=llm),
        router=ActionRouter(slack, workflows),
        delete_workflow=delete,
        pending=pending,
    )
