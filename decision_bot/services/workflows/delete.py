"""
Delete workflow: a two-phase confirmation state machine per (channel, thread).

Idle --delete request, exactly one match--> AwaitingConfirmation
AwaitingConfirmation --affirmative--> delete, Idle
AwaitingConfirmation --negative--> Idle
AwaitingConfirmation --anything else--> reminder, AwaitingConfirmation

A decision is only ever deleted right after an explicit affirmative reply to
a prompt naming that single decision.
"""

import logging
from typing import Optional

from decision_bot.ai_core.matching import RelatedDecisionFinder, resolve_related
from decision_bot.integrations.notion import DecisionStoreError, NotionDecisionStore
from decision_bot.models.api_responses import WorkflowResult
from decision_bot.models.decision import ActionType, PendingDeletion
from decision_bot.models.thread import ThreadContext
from decision_bot.services.pending_deletions import PendingDeletionRegistry
from decision_bot.services.workflows.base import Notifier, Workflow
from decision_bot.utils.helpers import format_numbered_list, tokenize

logger = logging.getLogger(__name__)

AFFIRMATIVE_TOKENS = {"yes", "y", "yep", "yeah", "confirm", "confirmed", "delete", "ok", "okay"}
NEGATIVE_TOKENS = {
    "no", "n", "nope", "nah", "never", "cancel", "abort", "stop", "keep", "don't", "dont", "not",
}

NOTHING_FOUND_MESSAGE = "🔍 I couldn't find a decision matching your request to delete."


def classify_reply(text: str) -> Optional[bool]:
    """
    Classify a confirmation reply.

    Negative tokens win over affirmative ones ("no, don't delete" cancels).

    Returns:
        True to confirm, False to cancel, None when the reply is neither
    """
    tokens = set(tokenize(text))
    if tokens & NEGATIVE_TOKENS:
        return False
    if tokens & AFFIRMATIVE_TOKENS:
        return True
    return None


def confirmation_prompt(pending: PendingDeletion) -> str:
    """Prompt shown when a deletion is opened and on every reminder."""
    return (
        "⚠️ Are you sure you want to delete this decision?\n"
        f"*{pending.title}*\n{pending.summary}\n(Tag: {pending.tag or 'none'})\n"
        "Reply `yes` to delete it or `no` to keep it."
    )


class DeleteWorkflow(Workflow):
    """Deletes a stored decision after explicit confirmation in the same thread."""

    action = ActionType.DELETE
    failure_verb = "delete decision"

    def __init__(
        self,
        notifier: Notifier,
        store: NotionDecisionStore,
        finder: RelatedDecisionFinder,
        pending: PendingDeletionRegistry,
    ):
        super().__init__(notifier)
        self.store = store
        self.finder = finder
        self.pending = pending

    async def _execute(self, context: ThreadContext) -> WorkflowResult:
        """Idle: identify exactly one candidate and ask for confirmation."""
        existing = await self.store.list_decisions()
        if not existing:
            return self._result(False, NOTHING_FOUND_MESSAGE)

        related = await self.finder.find(context.thread_text, existing)
        candidates = resolve_related(related, existing)

        if not candidates:
            return self._result(False, NOTHING_FOUND_MESSAGE)

        if len(candidates) > 1:
            titles = format_numbered_list([c.title for c in candidates])
            message = (
                "🤔 I found several decisions that could match. "
                f"Please mention me again naming the one to delete:\n{titles}"
            )
            return self._result(False, message, outcome="ambiguous")

        record = candidates[0]
        entry = PendingDeletion(
            decision_id=record.id,
            title=record.title,
            summary=record.summary,
            tag=record.tag,
        )
        self.pending.open(context.key, entry)
        return self._result(
            True, confirmation_prompt(entry), decision_id=record.id, outcome="pending"
        )

    async def resolve_pending(
        self, context: ThreadContext, pending: PendingDeletion
    ) -> WorkflowResult:
        """AwaitingConfirmation: act on the reply in the same thread."""
        return await self._deliver(context, self._resolve, pending)

    async def _resolve(
        self, context: ThreadContext, pending: PendingDeletion
    ) -> WorkflowResult:
        verdict = classify_reply(context.message_text)

        if verdict is None:
            logger.info(f"Reply in {context.key} is not a confirmation, reminding")
            return self._result(
                True,
                confirmation_prompt(pending),
                decision_id=pending.decision_id,
                outcome="reminded",
            )

        self.pending.clear(context.key)

        if verdict is False:
            return self._result(
                True,
                f"👍 Deletion cancelled. *{pending.title}* was kept.",
                decision_id=pending.decision_id,
                outcome="cancelled",
            )

        try:
            await self.store.delete_decision(pending.decision_id)
        except DecisionStoreError as e:
            logger.error(f"Failed to delete decision {pending.decision_id}: {e}")
            return self._result(
                False,
                f"❌ Failed to delete decision from Notion database: *{pending.title}*",
                decision_id=pending.decision_id,
                outcome="confirmed",
            )

        return self._result(
            True,
            f"🗑️ Decision deleted from Notion database: *{pending.title}*",
            decision_id=pending.decision_id,
            outcome="confirmed",
        )
