"""
Read and summarize workflows. Neither mutates the store.
"""

import logging

from decision_bot.ai_core.exceptions import LowConfidenceError
from decision_bot.ai_core.matching import RelatedDecisionFinder
from decision_bot.ai_core.summarization import ThreadSummarizer
from decision_bot.integrations.notion import NotionDecisionStore
from decision_bot.models.api_responses import WorkflowResult
from decision_bot.models.decision import ActionType, RelatedDecisionsResult, ThreadSummary
from decision_bot.models.thread import ThreadContext
from decision_bot.services.workflows.base import Notifier, Workflow
from decision_bot.utils.helpers import format_numbered_list

logger = logging.getLogger(__name__)


def source_link(context: ThreadContext) -> str:
    return f"<{context.thread_url}|source>"


class ReadWorkflow(Workflow):
    """Lists stored decisions related to the thread."""

    action = ActionType.READ
    failure_verb = "fetch related decisions"

    def __init__(
        self,
        notifier: Notifier,
        store: NotionDecisionStore,
        finder: RelatedDecisionFinder,
    ):
        super().__init__(notifier)
        self.store = store
        self.finder = finder

    async def _execute(self, context: ThreadContext) -> WorkflowResult:
        logger.info("Retrieving all decisions from Notion database...")
        existing = await self.store.list_decisions()
        if not existing:
            return self._result(
                True, f"📭 No decisions have been recorded yet.\n\n{source_link(context)}"
            )

        logger.info("Finding related decisions using AI...")
        related = await self.finder.find(context.thread_text, existing)
        return self._result(True, self.format_related(related, context))

    @staticmethod
    def format_related(related: RelatedDecisionsResult, context: ThreadContext) -> str:
        if not related.related_decisions:
            return f"🔍 No related decisions found.\n\n{source_link(context)}"

        message = "📋 *Related Decisions:*\n"
        for decision in related.related_decisions:
            message += f"\n*{decision.ordinal}. {decision.title}*\n{decision.summary}\n"
        message += f"\n{source_link(context)}"
        return message


class SummarizeWorkflow(Workflow):
    """Summarizes the thread itself; no store access."""

    action = ActionType.SUMMARIZE
    failure_verb = "summarize thread"

    def __init__(self, notifier: Notifier, summarizer: ThreadSummarizer):
        super().__init__(notifier)
        self.summarizer = summarizer

    async def _execute(self, context: ThreadContext) -> WorkflowResult:
        try:
            summary = await self.summarizer.summarize(context.thread_text)
        except LowConfidenceError as e:
            return self._result(False, str(e))
        return self._result(True, self.format_summary(summary, context))

    @staticmethod
    def format_summary(summary: ThreadSummary, context: ThreadContext) -> str:
        sections = [f"📝 *Thread Summary*\n{summary.overview}"]
        for heading, items in (
            ("Open Points", summary.open_points),
            ("Decisions Made", summary.decisions_made),
            ("Next Steps", summary.next_steps),
        ):
            if items:
                sections.append(f"*{heading}:*\n{format_numbered_list(items)}")
        sections.append(source_link(context))
        return "\n\n".join(sections)
