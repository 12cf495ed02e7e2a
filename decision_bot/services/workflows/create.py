"""
Create workflow: extraction -> duplicate reconciliation -> create or merge.
"""

import logging

from decision_bot.ai_core.exceptions import LowConfidenceError
from decision_bot.ai_core.extraction import DecisionExtractor
from decision_bot.ai_core.matching import DecisionComparator
from decision_bot.integrations.notion import DecisionStoreError, NotionDecisionStore
from decision_bot.models.api_responses import WorkflowResult
from decision_bot.models.decision import ActionType, DecisionFields
from decision_bot.models.thread import ThreadContext
from decision_bot.services.workflows.base import Notifier, Workflow

logger = logging.getLogger(__name__)


class CreateWorkflow(Workflow):
    """
    Records the decision discussed in a thread.

    A candidate that matches a stored decision (similarity at or above the
    comparator threshold) updates that decision instead of creating a
    duplicate.
    """

    action = ActionType.CREATE
    failure_verb = "log decision to Notion database"

    def __init__(
        self,
        notifier: Notifier,
        store: NotionDecisionStore,
        extractor: DecisionExtractor,
        comparator: DecisionComparator,
    ):
        super().__init__(notifier)
        self.store = store
        self.extractor = extractor
        self.comparator = comparator

    async def _execute(self, context: ThreadContext) -> WorkflowResult:
        # Step 1: Extract decision candidate
        try:
            candidate = await self.extractor.extract(context.thread_text)
        except LowConfidenceError as e:
            return self._result(
                False, f"❌ Failed to log decision to Notion database: *{e}*"
            )

        # Step 2: Reconcile against existing decisions
        logger.info("Retrieving existing decisions from Notion database...")
        existing = await self.store.list_decisions()

        logger.info("Comparing new decision with existing decisions...")
        comparison = await self.comparator.compare(candidate, existing)
        matched = self.comparator.find_match(comparison, existing)

        fields = DecisionFields.with_source(
            source_thread=context.thread_url,
            source_channel=context.channel_name,
            title=candidate.title,
            summary=candidate.summary,
            tag=candidate.tag,
        )

        # Step 3: Merge into the match or create a new record
        if matched is not None:
            logger.info(
                f"Similar decision found (similarity: {comparison.similarity_score}%). "
                f"Updating existing decision {matched.id}."
            )
            outcome, decision_id = "updated", matched.id
            try:
                await self.store.update_decision(matched.id, fields)
            except DecisionStoreError as e:
                logger.error(f"Failed to update decision {matched.id}: {e}")
                return self._store_failure(outcome, candidate.title)
        else:
            logger.info("No similar decision found. Adding new decision to database.")
            outcome = "added"
            try:
                decision_id = await self.store.create_decision(fields)
            except DecisionStoreError as e:
                logger.error(f"Failed to create decision: {e}")
                return self._store_failure(outcome, candidate.title)

        similarity = (
            f" (Similarity: {comparison.similarity_score}%)" if matched is not None else ""
        )
        message = (
            f"✅ Decision {outcome} in Notion database: *{candidate.title}* "
            f"(Tag: {candidate.tag}){similarity}\n<{self.store.database_url}|View here>"
        )
        return self._result(True, message, decision_id=decision_id, outcome=outcome)

    def _store_failure(self, outcome: str, title: str) -> WorkflowResult:
        verb = "add" if outcome == "added" else "update"
        return self._result(
            False,
            f"❌ Failed to {verb} decision in Notion database: *{title}*",
            outcome=outcome,
        )
