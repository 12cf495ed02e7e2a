"""
Prompt: Decision Extraction

Extracts one crisp decision from a Slack thread.
"""

from textwrap import dedent

EXTRACTION_SYSTEM_PROMPT = dedent(
    """
    You extract decisions from Slack threads.

    Return:
    - title: at most 80 characters
    - summary: 1-2 sentences
    - tag: a single descriptive word or short phrase naming the category or topic of the decision
      (e.g. 'architecture', 'process', 'tooling', 'policy')
    - confidence: a number between 0 and 100 expressing how confident you are that the thread
      contains a decision that was actually made

    Rules:
    - Only use information stated in the thread.
    - Do not include Markdown, quotes, or emojis in any field.
    - If the thread only discusses options without settling on one, report a confidence below 50.
    """
).strip()

EXTRACTION_USER_PROMPT_TEMPLATE = dedent(
    """
    From the following Slack thread text, extract a crisp decision.

    Thread:
    {thread_text}
    """
).strip()
