"""
Decision Extraction Module

Extracts a single decision candidate (title, summary, tag) from a Slack
thread. Low-confidence answers are rejected; transport or schema failures
fall back to a deterministic extraction from the raw text.
"""

import logging
from typing import Optional

from decision_bot.ai_core.exceptions import CapabilityError, LowConfidenceError
from decision_bot.ai_core.llm import StructuredCapability
from decision_bot.ai_core.prompts.extraction import (
    EXTRACTION_SYSTEM_PROMPT,
    EXTRACTION_USER_PROMPT_TEMPLATE,
)
from decision_bot.config import get_settings
from decision_bot.models.decision import DecisionCandidate, DecisionExtraction
from decision_bot.utils.helpers import (
    TITLE_MAX_LENGTH,
    collapse_whitespace,
    extract_summary_fallback,
    extract_title_fallback,
    truncate,
)

logger = logging.getLogger(__name__)

LOW_CONFIDENCE_MESSAGE = (
    "Could not confidently extract decision. Please provide more context."
)


class DecisionExtractor(StructuredCapability):
    """
    Extracts decisions from Slack threads.
    """

    name = "decision extractor"

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
            else config.extraction_confidence_threshold
        )

    async def extract(self, thread_text: str) -> DecisionCandidate:
        """
        Extract a decision candidate from thread text.

        Args:
            thread_text: Full reconstructed thread text

        Returns:
            DecisionCandidate (LLM-extracted, or fallback on LLM failure)

        Raises:
            LowConfidenceError: If the model reports confidence below the threshold
        """
        try:
            extraction = await self._invoke(
                DecisionExtraction,
                EXTRACTION_SYSTEM_PROMPT,
                EXTRACTION_USER_PROMPT_TEMPLATE.format(thread_text=thread_text),
            )
        except CapabilityError as e:
            logger.warning(f"Extraction failed, using fallback extraction: {e}")
            return self.fallback(thread_text)

        if extraction.confidence < self.confidence_threshold:
            logger.info(
                f"Extraction confidence {extraction.confidence} below "
                f"{self.confidence_threshold}, rejecting"
            )
            raise LowConfidenceError(LOW_CONFIDENCE_MESSAGE)

        candidate = DecisionCandidate(
            title=truncate(collapse_whitespace(extraction.title), TITLE_MAX_LENGTH)
            or "Decision",
            summary=collapse_whitespace(extraction.summary) or "Summary unavailable.",
            tag=collapse_whitespace(extraction.tag) or "general",
        )
        logger.info(
            f"Extracted decision: {candidate.title} "
            f"(tag: {candidate.tag}, confidence: {extraction.confidence})"
        )
        return candidate

    @staticmethod
    def fallback(thread_text: str) -> DecisionCandidate:
        """Deterministic extraction used when the model is unavailable."""
        return DecisionCandidate(
            title=extract_title_fallback(thread_text),
            summary=extract_summary_fallback(thread_text),
            tag="general",
        )
