"""
Intent Classifier

Classifies a mention utterance into one of the supported actions.
"""

import logging

from decision_bot.ai_core.llm import StructuredCapability
from decision_bot.ai_core.prompts.intent import (
    INTENT_SYSTEM_PROMPT,
    INTENT_USER_PROMPT_TEMPLATE,
)
from decision_bot.models.decision import ActionType, IntentClassification

logger = logging.getLogger(__name__)


class IntentClassifier(StructuredCapability):
    """Maps an utterance to create / update / read / delete / summarize / none_applicable."""

    name = "intent classifier"

    async def classify(self, message_text: str) -> ActionType:
        """
        Args:
            message_text: The mention text with the bot mention stripped

        Returns:
            Classified ActionType

        Raises:
            CapabilityError: If the model call fails or returns an invalid action
        """
        if not message_text.strip():
            logger.info("Empty utterance, nothing to classify")
            return ActionType.NONE_APPLICABLE

        result = await self._invoke(
            IntentClassification,
            INTENT_SYSTEM_PROMPT,
            INTENT_USER_PROMPT_TEMPLATE.format(message_text=message_text),
        )
        logger.info(f"Classified intent: {result.action.value} ({result.reasoning})")
        return result.action
