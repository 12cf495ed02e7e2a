"""
Utility package exports
"""

from decision_bot.utils.helpers import (
    collapse_whitespace,
    truncate,
    extract_title_fallback,
    extract_summary_fallback,
    strip_mentions,
    tokenize,
    format_numbered_list,
)

__all__ = [
    "collapse_whitespace",
    "truncate",
    "extract_title_fallback",
    "extract_summary_fallback",
    "strip_mentions",
    "tokenize",
    "format_numbered_list",
]
