"""Storage layer for learning sessions."""
from .session_store import SessionStore, InMemorySessionStore, JsonFileSessionStore

__all__ = [
    "SessionStore",
    "InMemorySessionStore",
    "JsonFileSessionStore"
]
