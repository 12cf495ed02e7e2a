"""
Unit Tests for Utility Functions

Tests shared helper functions.
"""

import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from decision_bot.utils.helpers import (
    collapse_whitespace,
    extract_summary_fallback,
    extract_title_fallback,
    format_numbered_list,
    strip_mentions,
    tokenize,
)


def test_collapse_whitespace():
    """Runs of whitespace become one space."""
    assert collapse_whitespace("  a \n\n b\t c ") == "a b c"
    assert collapse_whitespace("") == ""


def test_title_fallback_first_line():
    """Title is the first non-empty line."""
    assert extract_title_fallback("\n\nUse Postgres\nbecause it is boring") == "Use Postgres"


def test_title_fallback_first_sentence():
    """Title stops at the first period."""
    assert extract_title_fallback("Adopt trunk based dev. Everyone agreed.") == "Adopt trunk based dev"


def test_title_fallback_truncated_to_80():
    """Long first lines are cut to 80 characters."""
    assert len(extract_title_fallback("x" * 200)) == 80


def test_title_fallback_empty():
    """Empty text gives the generic title."""
    assert extract_title_fallback("") == "Decision"
    assert extract_title_fallback(" . \n ") == "Decision"


def test_summary_fallback_short_text_kept():
    """Short text is kept with whitespace collapsed."""
    assert extract_summary_fallback("We  will\nship Friday") == "We will ship Friday"


def test_summary_fallback_long_text_ellipsis():
    """Text over 180 characters becomes 177 characters plus '...'."""
    summary = extract_summary_fallback("word " * 100)
    assert len(summary) == 180
    assert summary.endswith("...")


def test_summary_fallback_exactly_180_untouched():
    """Text of exactly 180 characters is not shortened."""
    text = "a" * 180
    assert extract_summary_fallback(text) == text


def test_strip_mentions():
    """User mentions are removed from the utterance."""
    assert strip_mentions("<@U0BOT> log this decision") == "log this decision"
    assert strip_mentions("hey <@U0BOT|decisionbot>   yes") == "hey yes"
    assert strip_mentions("no mentions here") == "no mentions here"


def test_tokenize():
    """Tokens are lowercase words, apostrophes kept."""
    assert tokenize("Yes, DON'T wait!") == ["yes", "don't", "wait"]
    assert tokenize("Don’t delete") == ["don't", "delete"]
    assert tokenize("it‘s fine") == ["it's", "fine"]
    assert tokenize("") == []


def test_format_numbered_list():
    """Items are numbered from 1."""
    assert format_numbered_list(["a", "b"]) == "1. a\n2. b"
    assert format_numbered_list([]) == ""
