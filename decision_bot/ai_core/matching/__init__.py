from decision_bot.ai_core.matching.decision_comparator import DecisionComparator
from decision_bot.ai_core.matching.related_finder import (
    RelatedDecisionFinder,
    resolve_related,
)
from decision_bot.ai_core.matching.update_resolver import UpdateTargetResolver

__all__ = [
    "DecisionComparator",
    "RelatedDecisionFinder",
    "resolve_related",
    "UpdateTargetResolver",
]
