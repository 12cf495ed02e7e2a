"""
Thread Summarizer

Summarizes a Slack thread into overview, open points, decisions made and
next steps.
"""

import logging
from typing import Optional

from decision_bot.ai_core.exceptions import LowConfidenceError
from decision_bot.ai_core.llm import StructuredCapability
from decision_bot.ai_core.prompts.summary import (
    SUMMARY_SYSTEM_PROMPT,
    SUMMARY_USER_PROMPT_TEMPLATE,
)
from decision_bot.config import get_settings
from decision_bot.models.decision import ThreadSummary

logger = logging.getLogger(__name__)

LOW_CONFIDENCE_MESSAGE = (
    "Could not confidently summarize this thread. There may not be enough discussion yet."
)


class ThreadSummarizer(StructuredCapability):
    """Summarizes thread text; no store access."""

    name = "thread summarizer"

    def __init__(
        self,
        llm=None,
        timeout: Optional[float] = None,
        confidence_threshold: Optional[int] = None,
    ):
        super().__init__(llm=llm, timeout=timeout)
        config = get_settings()
        self.confidence_threshold = (
            confidence_threshold
            if confidence_threshold is not None
            else config.summary_confidence_threshold
        )

    async def summarize(self, thread_text: str) -> ThreadSummary:
        """
        Raises:
            LowConfidenceError: If the summary confidence is below the threshold
            CapabilityError: If the model call fails
        """
        summary = await self._invoke(
            ThreadSummary,
            SUMMARY_SYSTEM_PROMPT,
            SUMMARY_USER_PROMPT_TEMPLATE.format(thread_text=thread_text),
        )
        if summary.confidence < self.confidence_threshold:
            logger.info(f"Summary confidence {summary.confidence} too low")
            raise LowConfidenceError(LOW_CONFIDENCE_MESSAGE)
        return summary
