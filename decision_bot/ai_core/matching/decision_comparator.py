"""
Decision Comparator

Reconciliation step of the create workflow: decides whether a new decision
candidate restates or revises a decision already in the store.
"""

import logging
from typing import List, Optional

from decision_bot.ai_core.llm import StructuredCapability
from decision_bot.ai_core.prompts.matching import (
    COMPARISON_SYSTEM_PROMPT,
    COMPARISON_USER_PROMPT_TEMPLATE,
)
from decision_bot.config import get_settings
from decision_bot.models.decision import (
    ComparisonResult,
    DecisionCandidate,
    DecisionRecord,
)

logger = logging.getLogger(__name__)


class DecisionComparator(StructuredCapability):
    """
    Compares a decision candidate against stored decisions.
    """

    name = "decision comparator"

    def __init__(
        self,
        llm=None,
        timeout: Optional[float] = None,
        similarity_threshold: Optional[int] = None,
    ):
        super().__init__(llm=llm, timeout=timeout)
        config = get_settings()
        self.similarity_threshold = (
            similarity_threshold
            if similarity_threshold is not None
            else config.similarity_threshold
        )

    async def compare(
        self, candidate: DecisionCandidate, existing: List[DecisionRecord]
    ) -> ComparisonResult:
        """
        Args:
            candidate: Newly extracted decision
            existing: All stored decisions

        Returns:
            ComparisonResult as reported by the model, or a not-similar
            verdict when there is nothing to compare against

        Raises:
            CapabilityError: If the model call fails
        """
        if not existing:
            logger.info("No existing decisions, skipping comparison")
            return ComparisonResult.not_similar()

        result = await self._invoke(
            ComparisonResult,
            COMPARISON_SYSTEM_PROMPT,
            COMPARISON_USER_PROMPT_TEMPLATE.format(
                title=candidate.title,
                summary=candidate.summary,
                tag=candidate.tag,
                existing_decisions=self._format_existing(existing),
            ),
        )
        logger.info(
            f"Comparison: similar={result.is_similar}, score={result.similarity_score}, "
            f"matched_id={result.matched_id}"
        )
        return result

    def find_match(
        self, result: ComparisonResult, existing: List[DecisionRecord]
    ) -> Optional[DecisionRecord]:
        """
        Resolve an accepted verdict to the stored record it names.

        A verdict is accepted when its score reaches the similarity threshold
        and its matched_id belongs to one of the compared records.

        Returns:
            Matched DecisionRecord, or None when the candidate is new
        """
        if result.similarity_score < self.similarity_threshold:
            return None
        if not result.matched_id:
            logger.warning(
                f"Similarity {result.similarity_score} without a matched id, treating as new"
            )
            return None

        matched = next((r for r in existing if r.id == result.matched_id), None)
        if matched is None:
            logger.warning(
                f"Comparator matched unknown id {result.matched_id}, treating as new"
            )
            return None
        if not result.is_similar:
            logger.info(
                f"Score {result.similarity_score} reaches threshold although "
                f"is_similar=false, merging into {matched.id}"
            )
        return matched

    def _format_existing(self, existing: List[DecisionRecord]) -> str:
        """Format stored decisions for the prompt."""
        return "\n".join(
            f"- id: {record.id}\n  Title: {record.title}\n  Summary: {record.summary}\n  Tag: {record.tag or 'none'}"
            for record in existing
        )
