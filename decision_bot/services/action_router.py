"""
Action Router

Dispatches a classified intent to exactly one workflow.
"""

import logging
from typing import Dict

from decision_bot.models.api_responses import WorkflowResult
from decision_bot.models.decision import ActionType
from decision_bot.models.thread import ThreadContext
from decision_bot.services.workflows.base import Notifier, Workflow, post_safely

logger = logging.getLogger(__name__)

CLARIFICATION_MESSAGE = (
    "🤔 I'm not sure what you'd like me to do. Mention me and ask me to "
    "*log*, *update*, *find*, *delete* a decision, or *summarize* this thread."
)


class ActionRouter:
    """Routes intents to workflows. Never raises."""

    def __init__(self, notifier: Notifier, workflows: Dict[ActionType, Workflow]):
        self.notifier = notifier
        self.workflows = workflows

    async def route(self, intent: ActionType, context: ThreadContext) -> WorkflowResult:
        workflow = self.workflows.get(intent)
        if workflow is None:
            logger.info(f"No workflow for intent {intent.value}, asking for clarification")
            await post_safely(self.notifier, context, CLARIFICATION_MESSAGE)
            return WorkflowResult(
                action=ActionType.NONE_APPLICABLE,
                success=True,
                message=CLARIFICATION_MESSAGE,
            )

        logger.info(f"Routing {context.key} to {intent.value} workflow")
        return await workflow.run(context)
