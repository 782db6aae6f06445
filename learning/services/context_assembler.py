"""
Teaching context assembly.

Collects what was already taught around the current node so the tutor can
build on it: digests of the direct ancestors' chats (root first) followed by
the immediate siblings' chats. Descendants and cousins are never included.
"""

import logging
from typing import Mapping, Optional

from learning.models.curriculum import CurriculumNode
from learning.models.session import NodeChatHistory
from learning.utils.summary_utils import summarize
from learning.utils.tree_utils import ancestors_of, siblings_of

logger = logging.getLogger(__name__)


def history_digest(history: Optional[NodeChatHistory]) -> Optional[str]:
    """Cached summary if present, otherwise a fresh digest. None for an empty history."""
    if history is None or not history.has_messages:
        return None
    return history.summary or summarize(history.messages)


def build_context(
    current_node: CurriculumNode,
    curriculum: CurriculumNode,
    chat_histories: Mapping[str, NodeChatHistory],
) -> str:
    """Return the context lines for the current node, or "" when nothing was taught yet."""
    contexts: list[str] = []

    for ancestor in ancestors_of(curriculum, current_node.id):
        digest = history_digest(chat_histories.get(ancestor.id))
        if digest is not None:
            contexts.append(f"[{ancestor.title}]: {digest}")

    for sibling in siblings_of(current_node, curriculum):
        digest = history_digest(chat_histories.get(sibling.id))
        if digest is not None:
            contexts.append(f"[Sibling: {sibling.title}]: {digest}")

    logger.debug(f"Built {len(contexts)} context entries for node {current_node.id}")
    return "\n".join(contexts)
