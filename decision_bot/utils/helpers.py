"""
Shared Utility Functions

Common helper functions used across multiple modules.
"""

import re
import logging
from typing import List, Sequence

logger = logging.getLogger(__name__)

TITLE_MAX_LENGTH = 80
SUMMARY_FALLBACK_MAX_LENGTH = 180

_MENTION_PATTERN = re.compile(r"<@[A-Z0-9]+(?:\|[^>]*)?>")
_APOSTROPHE_PATTERN = re.compile("[‘’ʼ´`]")


def collapse_whitespace(text: str) -> str:
    """Replace runs of whitespace with a single space and trim."""
    return re.sub(r"\s+", " ", text or "").strip()


def truncate(text: str, max_length: int) -> str:
    """Cut text to at most max_length characters."""
    return (text or "")[:max_length]


def extract_title_fallback(text: str) -> str:
    """
    Derive a decision title from raw text without the LLM.

    Uses the first non-empty line or sentence, cut to 80 characters.

    Args:
        text: Raw thread text

    Returns:
        Title string, "Decision" when nothing usable is found
    """
    segments = (s.strip() for s in re.split(r"\n|\.", text or ""))
    first = next((s for s in segments if s), "Decision")
    return truncate(first, TITLE_MAX_LENGTH)


def extract_summary_fallback(text: str) -> str:
    """
    Derive a decision summary from raw text without the LLM.

    Whitespace is collapsed; text longer than 180 characters is cut to 177
    characters followed by "...".

    Args:
        text: Raw thread text

    Returns:
        Summary string, "Summary TBD" for empty input
    """
    summary = collapse_whitespace(text)
    if len(summary) > SUMMARY_FALLBACK_MAX_LENGTH:
        summary = summary[: SUMMARY_FALLBACK_MAX_LENGTH - 3] + "..."
    return summary or "Summary TBD"


def strip_mentions(text: str) -> str:
    """
    Remove Slack user mentions (<@U123> or <@U123|name>) from text.

    Examples:
        "<@U0BOT> log this decision" -> "log this decision"
    """
    return collapse_whitespace(_MENTION_PATTERN.sub(" ", text or ""))


def tokenize(text: str) -> List[str]:
    """
    Lowercase word tokens of a message.

    Typographic apostrophes are folded to ' so "don’t" and "don't" tokenize alike.
    """
    text = _APOSTROPHE_PATTERN.sub("'", text or "")
    return re.findall(r"[a-z']+", text.lower())


def format_numbered_list(items: Sequence[str]) -> str:
    """Format items as "1. item" lines."""
    return "\n".join(f"{i}. {item}" for i, item in enumerate(items, 1))
