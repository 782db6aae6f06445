"""Identifier generation for nodes, messages and sessions."""

import uuid


def new_id() -> str:
    """Return a statistically unique opaque identifier."""
    return str(uuid.uuid4())
