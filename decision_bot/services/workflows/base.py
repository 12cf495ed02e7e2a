"""
Workflow base class.

Every workflow posts exactly one message per run. Exceptions raised inside a
workflow body are logged and turned into that workflow's failure message;
nothing propagates past the workflow boundary.
"""

import logging
from typing import Awaitable, Callable, Protocol

from decision_bot.models.api_responses import WorkflowResult
from decision_bot.models.decision import ActionType
from decision_bot.models.thread import ThreadContext

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    """Outbound chat messages (implemented by SlackClient)."""

    async def post_message(self, channel_id: str, thread_ts: str, text: str) -> None: ...


class Workflow:
    """Base class for the action workflows."""

    action: ActionType = ActionType.NONE_APPLICABLE
    failure_verb = "process your request"

    def __init__(self, notifier: Notifier):
        self.notifier = notifier

    async def run(self, context: ThreadContext) -> WorkflowResult:
        """Run the workflow and post its single outward message."""
        return await self._deliver(context, self._execute)

    async def _execute(self, context: ThreadContext) -> WorkflowResult:
        raise NotImplementedError

    async def _deliver(
        self,
        context: ThreadContext,
        step: Callable[..., Awaitable[WorkflowResult]],
        *args,
    ) -> WorkflowResult:
        try:
            result = await step(context, *args)
        except Exception as e:
            logger.error(f"{self.action.value} workflow failed: {e}", exc_info=True)
            result = self._result(False, self.failure_message(e))

        await post_safely(self.notifier, context, result.message)
        return result

    def failure_message(self, error: Exception) -> str:
        return f"❌ Failed to {self.failure_verb}: {error}"

    def _result(self, success: bool, message: str, **kwargs) -> WorkflowResult:
        return WorkflowResult(action=self.action, success=success, message=message, **kwargs)


async def post_safely(notifier: Notifier, context: ThreadContext, text: str) -> None:
    """Post a message, logging instead of raising on failure."""
    try:
        await notifier.post_message(context.channel_id, context.thread_ts, text)
    except Exception as e:
        logger.error(
            f"Failed to post message to {context.channel_id}/{context.thread_ts}: {e}",
            exc_info=True,
        )
