"""
Chat digest utilities.

A digest is a short, lossy reduction of a node's conversation that is fed
into the tutoring prompt of other nodes. Only what the tutor said is kept.
"""

from typing import Iterable

from learning.models.session import ChatMessage

EMPTY_DIGEST = "No content yet"
MESSAGES_PER_DIGEST = 2
MESSAGE_CHAR_LIMIT = 200
DIGEST_CHAR_LIMIT = 400
DIGEST_SEPARATOR = " ... "
DIGEST_SUFFIX = "..."


def summarize(messages: Iterable[ChatMessage]) -> str:
    """
    Build a digest from the last two assistant messages.

    Each message is cut to 200 characters, the pieces are joined with " ... ",
    the result is cut to 400 characters and "..." is always appended, so a
    digest is never longer than 403 characters.
    """
    taught = [m.content for m in messages if m.role == "assistant"]
    recent = [content[:MESSAGE_CHAR_LIMIT] for content in taught[-MESSAGES_PER_DIGEST:]]

    if not recent:
        return EMPTY_DIGEST

    return DIGEST_SEPARATOR.join(recent)[:DIGEST_CHAR_LIMIT] + DIGEST_SUFFIX
