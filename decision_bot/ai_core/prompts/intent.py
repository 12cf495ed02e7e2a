"""
Prompt: Intent Classification

Maps a single mention utterance to the action the sender wants.
"""

from textwrap import dedent

INTENT_SYSTEM_PROMPT = dedent(
    """
    You route messages sent to a Slack bot that keeps a log of team decisions.
    Classify the message into exactly one action:

    - **create**: the sender wants a decision from the thread recorded ("log this", "we decided X, save it")
    - **update**: the sender wants an existing decision changed ("we changed our mind", "update the decision about X")
    - **read**: the sender asks which decisions exist on a topic ("what did we decide about X?")
    - **delete**: the sender wants a recorded decision removed ("delete the decision about X")
    - **summarize**: the sender wants a summary of the thread itself ("summarize this thread", "tl;dr")
    - **none_applicable**: anything else (greetings, questions unrelated to decisions)

    When the message is ambiguous between create and update, prefer create.
    Never pick delete unless the sender explicitly asks to remove something.
    """
).strip()

INTENT_USER_PROMPT_TEMPLATE = dedent(
    """
    Message:
    {message_text}
    """
).strip()
