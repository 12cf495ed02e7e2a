"""
Mention Handler

Turns an inbound app_mention into a ThreadContext and hands it either to the
pending delete confirmation for that thread or to the intent classifier and
action router.
"""

import logging
from typing import Optional

from decision_bot.ai_core.exceptions import CapabilityError
from decision_bot.ai_core.intent import IntentClassifier
from decision_bot.integrations.slack import SlackClient
from decision_bot.models.api_responses import WorkflowResult
from decision_bot.models.decision import ActionType
from decision_bot.models.thread import MentionEvent, ThreadContext
from decision_bot.services.action_router import ActionRouter
from decision_bot.services.pending_deletions import PendingDeletionRegistry
from decision_bot.services.workflows.base import post_safely
from decision_bot.services.workflows.delete import DeleteWorkflow
from decision_bot.utils.helpers import strip_mentions

logger = logging.getLogger(__name__)

CLASSIFICATION_FAILED_MESSAGE = (
    "❌ Failed to understand your request. Please try again in a moment."
)


class MentionHandler:
    """Entry point for one mention event."""

    def __init__(
        self,
        slack: SlackClient,
        classifier: IntentClassifier,
        router: ActionRouter,
        delete_workflow: DeleteWorkflow,
        pending: PendingDeletionRegistry,
    ):
        self.slack = slack
        self.classifier = classifier
        self.router = router
        self.delete_workflow = delete_workflow
        self.pending = pending

    async def build_context(self, event: MentionEvent) -> ThreadContext:
        thread_ts = event.thread_locator
        channel_name = await self.slack.get_channel_name(event.channel)
        thread_text = await self.slack.fetch_thread_text(
            event.channel, thread_ts, fallback_text=event.text
        )
        return ThreadContext(
            channel_id=event.channel,
            thread_ts=thread_ts,
            channel_name=channel_name,
            thread_url=self.slack.build_thread_url(event.channel, thread_ts),
            thread_text=thread_text,
            message_text=strip_mentions(event.text),
        )

    async def handle(self, event: MentionEvent) -> Optional[WorkflowResult]:
        """
        Handle a mention. Runs as a background task, so errors are logged
        and never raised.
        """
        try:
            context = await self.build_context(event)
            async with self.pending.lock(context.key):
                return await self._dispatch(context)
        except Exception as e:
            logger.error(f"Unhandled error for mention {event.channel}/{event.ts}: {e}", exc_info=True)
            return None

    async def _dispatch(self, context: ThreadContext) -> WorkflowResult:
        pending = self.pending.get(context.key)
        if pending is not None:
            logger.info(f"Thread {context.key} awaits delete confirmation")
            return await self.delete_workflow.resolve_pending(context, pending)

        try:
            intent = await self.classifier.classify(context.message_text)
        except CapabilityError as e:
            logger.error(f"Intent classification failed: {e}")
            await post_safely(self.slack, context, CLASSIFICATION_FAILED_MESSAGE)
            return WorkflowResult(
                action=ActionType.NONE_APPLICABLE,
                success=False,
                message=CLASSIFICATION_FAILED_MESSAGE,
            )

        return await self.router.route(intent, context)
