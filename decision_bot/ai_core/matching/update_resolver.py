"""
Update Target Resolver

Picks the single stored decision a conversation changes and the fields that
change. Refuses (LowConfidenceError) rather than guessing.
"""

import logging
from typing import List, Optional

from decision_bot.ai_core.exceptions import LowConfidenceError
from decision_bot.ai_core.llm import StructuredCapability
from decision_bot.ai_core.prompts.matching import (
    UPDATE_TARGET_SYSTEM_PROMPT,
    UPDATE_TARGET_USER_PROMPT_TEMPLATE,
)
from decision_bot.config import get_settings
from decision_bot.models.decision import (
    DecisionFields,
    DecisionRecord,
    UpdateTarget,
    UpdateTargetOutput,
)
from decision_bot.utils.helpers import TITLE_MAX_LENGTH, collapse_whitespace, truncate

logger = logging.getLogger(__name__)

NO_CANDIDATES_MESSAGE = "No related decisions found to update."
LOW_CONFIDENCE_MESSAGE = (
    "Could not confidently determine which decision to update. "
    "Please mention the decision and the change more explicitly."
)


class UpdateTargetResolver(StructuredCapability):
    """Resolves the update target among related decisions."""

    name = "update target resolver"

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
            else config.update_confidence_threshold
        )

    async def resolve(
        self, thread_text: str, candidates: List[DecisionRecord]
    ) -> UpdateTarget:
        """
        Args:
            thread_text: Full thread text
            candidates: Related decisions, already resolved to real ids

        Returns:
            UpdateTarget with the decision id and only the changed fields

        Raises:
            LowConfidenceError: No candidates, no target, or confidence too low
            CapabilityError: If the model call fails
        """
        if not candidates:
            raise LowConfidenceError(NO_CANDIDATES_MESSAGE)

        output = await self._invoke(
            UpdateTargetOutput,
            UPDATE_TARGET_SYSTEM_PROMPT,
            UPDATE_TARGET_USER_PROMPT_TEMPLATE.format(
                thread_text=thread_text,
                candidates=self._format_candidates(candidates),
            ),
        )

        if not output.decision_id or output.confidence < self.confidence_threshold:
            logger.info(
                f"Update target rejected (id={output.decision_id}, "
                f"confidence={output.confidence}, threshold={self.confidence_threshold})"
            )
            raise LowConfidenceError(LOW_CONFIDENCE_MESSAGE)

        changes = {}
        if output.title and output.title.strip():
            changes["title"] = truncate(collapse_whitespace(output.title), TITLE_MAX_LENGTH)
        if output.summary and output.summary.strip():
            changes["summary"] = collapse_whitespace(output.summary)
        if output.tag and output.tag.strip():
            changes["tag"] = collapse_whitespace(output.tag)

        logger.info(
            f"Update target: {output.decision_id}, changing {sorted(changes) or 'no fields'} "
            f"(confidence: {output.confidence})"
        )
        return UpdateTarget(
            decision_id=output.decision_id,
            changes=DecisionFields(**changes),
            confidence=output.confidence,
        )

    def _format_candidates(self, candidates: List[DecisionRecord]) -> str:
        return "\n".join(
            f"- id: {record.id}\n  Title: {record.title}\n  Summary: {record.summary}\n  Tag: {record.tag or 'none'}"
            for record in candidates
        )
