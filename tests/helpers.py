"""Builders shared by the unit tests."""
from learning.models.curriculum import CurriculumNode
from learning.models.session import ChatMessage, NodeChatHistory


def make_node(node_id, title=None, depth=0, parent_id=None, children=None, status="not-started"):
    """Build a CurriculumNode with readable defaults."""
    return CurriculumNode(
        id=node_id,
        title=title or node_id.upper(),
        description=f"About {node_id}",
        depth=depth,
        parent_id=parent_id,
        status=status,
        children=children or [],
    )


def make_history(node_id, *contents, roles=None, summary=None):
    """Build a NodeChatHistory alternating user/assistant unless roles are given."""
    roles = roles or ["user" if i % 2 == 0 else "assistant" for i in range(len(contents))]
    return NodeChatHistory(
        node_id=node_id,
        messages=[
            ChatMessage(id=f"{node_id}-m{i}", role=role, content=content)
            for i, (role, content) in enumerate(zip(roles, contents))
        ],
        summary=summary,
    )
