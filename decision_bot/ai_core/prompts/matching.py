"""
Prompts: Decision Matching

- Comparison: does a new decision restate or revise a stored one?
- Relatedness: which stored decisions relate to a thread?
- Update target: which stored decision should change, and how?
"""

from textwrap import dedent

COMPARISON_SYSTEM_PROMPT = dedent(
    """
    You keep a decision log free of duplicates.

    You get a NEW decision and the list of EXISTING decisions, each with its id.
    Decide whether the new decision is about the same subject as one existing decision,
    either restating it or revising it (e.g. "use Next.js" revises "use React for the frontend").

    Return:
    - is_similar: true when the new decision should replace an existing one
    - similarity_score: 0-100
    - matched_id: the id of the most similar existing decision, copied exactly; null when none
    - reasoning: one sentence

    Two decisions that merely share a broad topic (both about "frontend") are not similar
    unless one decides the same question as the other.
    """
).strip()

COMPARISON_USER_PROMPT_TEMPLATE = dedent(
    """
    ## New Decision

    Title: {title}
    Summary: {summary}
    Tag: {tag}

    ## Existing Decisions

    {existing_decisions}
    """
).strip()

RELATED_SYSTEM_PROMPT = dedent(
    """
    You find decisions in a decision log that relate to a Slack conversation.

    The decisions are numbered starting at 1. Return every decision that the
    conversation refers to or depends on, most relevant first, using its number as `ordinal`
    and copying its title and summary. Return an empty list when nothing relates.
    Add a short `rationale` explaining the selection.

    Only use numbers that appear in the list.
    """
).strip()

RELATED_USER_PROMPT_TEMPLATE = dedent(
    """
    ## Conversation

    {thread_text}

    ## Decisions

    {decisions}
    """
).strip()

UPDATE_TARGET_SYSTEM_PROMPT = dedent(
    """
    You apply changes discussed in a Slack conversation to a decision log.

    You get the conversation and a short list of candidate decisions with their ids.
    Pick the ONE decision the conversation changes and return:
    - decision_id: its id, copied exactly from the list
    - title, summary, tag: ONLY the fields that change, with their new values; leave the others null
    - confidence: 0-100, how sure you are about both the target and the changes
    - reasoning: one sentence

    If no candidate is being changed, return decision_id null and a low confidence.
    Title stays within 80 characters. No Markdown, quotes, or emojis in fields.
    """
).strip()

UPDATE_TARGET_USER_PROMPT_TEMPLATE = dedent(
    """
    ## Conversation

    {thread_text}

    ## Candidate Decisions

    {candidates}
    """
).strip()
