"""
Update workflow: relatedness lookup -> update-target resolution -> partial update.
"""

import logging

from decision_bot.ai_core.exceptions import LowConfidenceError
from decision_bot.ai_core.matching import (
    RelatedDecisionFinder,
    UpdateTargetResolver,
    resolve_related,
)
from decision_bot.integrations.notion import DecisionStoreError, NotionDecisionStore
from decision_bot.models.api_responses import WorkflowResult
from decision_bot.models.decision import ActionType, DecisionFields
from decision_bot.models.thread import ThreadContext
from decision_bot.services.workflows.base import Notifier, Workflow

logger = logging.getLogger(__name__)

NOTHING_TO_UPDATE_MESSAGE = "🤷 There are no decisions in the Notion database to update yet."
NO_RELATED_MESSAGE = "🔍 I couldn't find an existing decision related to this thread to update."
UNRESOLVED_MESSAGE = (
    "❌ I couldn't match the related decisions to stored records. Please try again."
)
UNKNOWN_TARGET_MESSAGE = (
    "❌ Could not determine which decision to update. Please name the decision explicitly."
)


class UpdateWorkflow(Workflow):
    """Applies changes discussed in a thread to one stored decision."""

    action = ActionType.UPDATE
    failure_verb = "update decision"

    def __init__(
        self,
        notifier: Notifier,
        store: NotionDecisionStore,
        finder: RelatedDecisionFinder,
        resolver: UpdateTargetResolver,
    ):
        super().__init__(notifier)
        self.store = store
        self.finder = finder
        self.resolver = resolver

    async def _execute(self, context: ThreadContext) -> WorkflowResult:
        # Step 1: Snapshot of stored decisions
        existing = await self.store.list_decisions()
        if not existing:
            return self._result(False, NOTHING_TO_UPDATE_MESSAGE)

        # Step 2: Related decisions, referenced by ordinal into the snapshot
        related = await self.finder.find(context.thread_text, existing)
        if not related.related_decisions:
            return self._result(False, NO_RELATED_MESSAGE)

        # Step 3: Ordinals -> real records
        candidates = resolve_related(related, existing)
        if not candidates:
            return self._result(False, UNRESOLVED_MESSAGE)

        # Step 4: Target and changed fields; refusals are relayed as-is
        try:
            target = await self.resolver.resolve(context.thread_text, candidates)
        except LowConfidenceError as e:
            return self._result(False, str(e))

        # Step 5: Target must be one of the candidates
        record = next((c for c in candidates if c.id == target.decision_id), None)
        if record is None:
            logger.warning(
                f"Update target {target.decision_id} is not among the "
                f"{len(candidates)} candidates, refusing to update"
            )
            return self._result(False, UNKNOWN_TARGET_MESSAGE)

        # Step 6: Partial update with refreshed source fields
        changes = target.changes.changed()
        fields = DecisionFields.with_source(
            source_thread=context.thread_url,
            source_channel=context.channel_name,
            **changes,
        )
        title = changes.get("title", record.title)
        try:
            await self.store.update_decision(record.id, fields)
        except DecisionStoreError as e:
            logger.error(f"Failed to update decision {record.id}: {e}")
            return self._result(
                False,
                f"❌ Failed to update decision in Notion database: *{title}*",
                decision_id=record.id,
            )

        changed = ", ".join(sorted(changes)) if changes else "source thread only"
        link = record.url or self.store.page_url(record.id)
        message = (
            f"✅ Decision updated in Notion database: *{title}*\n"
            f"Changed: {changed}\n<{link}|View here>"
        )
        return self._result(True, message, decision_id=record.id, outcome="updated")
