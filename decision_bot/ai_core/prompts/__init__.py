"""Prompts package."""

from decision_bot.ai_core.prompts.intent import (
    INTENT_SYSTEM_PROMPT,
    INTENT_USER_PROMPT_TEMPLATE,
)
from decision_bot.ai_core.prompts.extraction import (
    EXTRACTION_SYSTEM_PROMPT,
    EXTRACTION_USER_PROMPT_TEMPLATE,
)
from decision_bot.ai_core.prompts.matching import (
    COMPARISON_SYSTEM_PROMPT,
    COMPARISON_USER_PROMPT_TEMPLATE,
    RELATED_SYSTEM_PROMPT,
    RELATED_USER_PROMPT_TEMPLATE,
    UPDATE_TARGET_SYSTEM_PROMPT,
    UPDATE_TARGET_USER_PROMPT_TEMPLATE,
)
from decision_bot.ai_core.prompts.summary import (
    SUMMARY_SYSTEM_PROMPT,
    SUMMARY_USER_PROMPT_TEMPLATE,
)

__all__ = [
    "INTENT_SYSTEM_PROMPT",
    "INTENT_USER_PROMPT_TEMPLATE",
    "EXTRACTION_SYSTEM_PROMPT",
    "EXTRACTION_USER_PROMPT_TEMPLATE",
    "COMPARISON_SYSTEM_PROMPT",
    "COMPARISON_USER_PROMPT_TEMPLATE",
    "RELATED_SYSTEM_PROMPT",
    "RELATED_USER_PROMPT_TEMPLATE",
    "UPDATE_TARGET_SYSTEM_PROMPT",
    "UPDATE_TARGET_USER_PROMPT_TEMPLATE",
    "SUMMARY_SYSTEM_PROMPT",
    "SUMMARY_USER_PROMPT_TEMPLATE",
]
