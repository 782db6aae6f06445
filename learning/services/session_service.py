"""
Session mutation logic.

Sessions are copy-on-write: every function returns a new LearningSession with
a refreshed updated_at and never mutates its input. Saving the result is the
caller's job.
"""

import logging
from typing import Optional

from learning.exceptions import StateTransitionError
from learning.models.curriculum import (
    COMPLETED,
    IN_PROGRESS,
    NOT_STARTED,
    CurriculumNode,
    NodeStatus,
)
from learning.models.session import (
    ChatMessage,
    LearningSession,
    NodeChatHistory,
    PersonalizationData,
    utcnow,
)
from learning.utils.ids import new_id
from learning.utils.tree_utils import find_by_id, update_status

logger = logging.getLogger(__name__)

_STATUS_ORDER = {NOT_STARTED: 0, IN_PROGRESS: 1, COMPLETED: 2}


def create_learning_session(
    personalization: PersonalizationData,
    curriculum: CurriculumNode,
    session_id: Optional[str] = None,
) -> LearningSession:
    """Create a new session right after a curriculum has been generated."""
    now = utcnow()
    return LearningSession(
        id=session_id or new_id(),
        personalization=personalization,
        curriculum=curriculum,
        chat_histories={},
        created_at=now,
        updated_at=now,
    )


def validate_transition(from_status: NodeStatus, to_status: NodeStatus) -> None:
    """
    Allow only forward moves of one step (or staying put).

    not-started -> in-progress -> completed
    """
    step = _STATUS_ORDER[to_status] - _STATUS_ORDER[from_status]
    if step < 0:
        raise StateTransitionError(from_status, to_status, "status cannot move backwards")
    if step > 1:
        raise StateTransitionError(from_status, to_status, "topic must be started first")


def update_node_status(
    session: LearningSession,
    node_id: str,
    status: NodeStatus,
    strict: bool = False,
) -> LearningSession:
    """Return a session whose curriculum has the node's status replaced."""
    if strict:
        node = find_by_id(session.curriculum, node_id)
        if node is not None:
            validate_transition(node.status, status)

    return session.model_copy(update={
        "curriculum": update_status(session.curriculum, node_id, status),
        "updated_at": utcnow(),
    })


def start_node(session: LearningSession, node_id: str) -> LearningSession:
    """Mark a node in-progress when it is opened for the first time."""
    node = find_by_id(session.curriculum, node_id)
    if node is None or node.status != NOT_STARTED:
        return session.model_copy()
    return update_node_status(session, node_id, IN_PROGRESS)


def complete_node(session: LearningSession, node_id: str) -> LearningSession:
    return update_node_status(session, node_id, COMPLETED)


def get_node_chat_history(session: LearningSession, node_id: str) -> NodeChatHistory:
    """Stored history for the node, or an empty one."""
    history = session.chat_histories.get(node_id)
    if history is None:
        return NodeChatHistory(node_id=node_id, messages=[])
    return history


def add_message_to_history(
    session: LearningSession,
    node_id: str,
    message: ChatMessage,
) -> LearningSession:
    """
    Append a message to a node's history, creating the history on first use.

    The cached summary is dropped because it no longer covers every message.
    """
    history = get_node_chat_history(session, node_id)
    updated = NodeChatHistory(
        node_id=node_id,
        messages=[*history.messages, message],
        summary=None,
    )

    return session.model_copy(update={
        "chat_histories": {**session.chat_histories, node_id: updated},
        "updated_at": utcnow(),
    })
