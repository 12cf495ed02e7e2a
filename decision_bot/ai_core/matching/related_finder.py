"""
Related Decision Finder

Finds stored decisions related to a conversation. The model refers to
decisions by their 1-based ordinal in the list sent with that call, so
ordinals must be resolved against the same snapshot before any mutation.
"""

import logging
from typing import List

from decision_bot.ai_core.llm import StructuredCapability
from decision_bot.ai_core.prompts.matching import (
    RELATED_SYSTEM_PROMPT,
    RELATED_USER_PROMPT_TEMPLATE,
)
from decision_bot.models.decision import DecisionRecord, RelatedDecisionsResult

logger = logging.getLogger(__name__)


class RelatedDecisionFinder(StructuredCapability):
    """Ranks stored decisions by relatedness to a thread."""

    name = "related decision finder"

    async def find(
        self, thread_text: str, decisions: List[DecisionRecord]
    ) -> RelatedDecisionsResult:
        """
        Args:
            thread_text: Full thread text
            decisions: Snapshot of stored decisions; ordinals index into it

        Returns:
            RelatedDecisionsResult (possibly empty)

        Raises:
            CapabilityError: If the model call fails
        """
        if not decisions:
            return RelatedDecisionsResult(rationale="No decisions recorded yet.")

        result = await self._invoke(
            RelatedDecisionsResult,
            RELATED_SYSTEM_PROMPT,
            RELATED_USER_PROMPT_TEMPLATE.format(
                thread_text=thread_text,
                decisions=self._format_decisions(decisions),
            ),
        )
        logger.info(
            f"Found {len(result.related_decisions)} related decisions "
            f"out of {len(decisions)}"
        )
        return result

    def _format_decisions(self, decisions: List[DecisionRecord]) -> str:
        return "\n".join(
            f"{i}. {record.title}\n   Summary: {record.summary}\n   Tag: {record.tag or 'none'}"
            for i, record in enumerate(decisions, 1)
        )


def resolve_related(
    result: RelatedDecisionsResult, snapshot: List[DecisionRecord]
) -> List[DecisionRecord]:
    """
    Map ordinals from a relatedness result back to stored records.

    Ordinals outside the snapshot are dropped with a warning; duplicates are
    kept once, in result order.

    Args:
        result: Relatedness result for one call
        snapshot: The exact list of records sent in that call

    Returns:
        Resolved DecisionRecords
    """
    resolved: List[DecisionRecord] = []
    seen = set()

    for related in result.related_decisions:
        index = related.ordinal - 1
        if not 0 <= index < len(snapshot):
            logger.warning(
                f"Dropping related decision with ordinal {related.ordinal} "
                f"('{related.title}'): only {len(snapshot)} decisions were listed"
            )
            continue
        record = snapshot[index]
        if record.id in seen:
            continue
        seen.add(record.id)
        resolved.append(record)

    return resolved
