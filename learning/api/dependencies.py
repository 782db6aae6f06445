"""FastAPI dependencies for the learning routers."""
from typing import Optional

from config import get_settings
from learning.exceptions import ConfigurationError
from learning.repositories.session_store import JsonFileSessionStore, SessionStore
from shared.services.anthropic_adapter import AnthropicAdapter

_store: Optional[SessionStore] = None


def get_session_store() -> SessionStore:
    """Process-wide session store backed by the configured file."""
    global _store
    if _store is None:
        _store = JsonFileSessionStore(get_settings().storage_path)
    return _store


def get_llm() -> AnthropicAdapter:
    settings = get_settings()
    if not settings.anthropic_api_key:
        raise ConfigurationError("anthropic_api_key", "ANTHROPIC_API_KEY is not set")

    return AnthropicAdapter(
        api_key=settings.anthropic_api_key,
        timeout=settings.llm_timeout,
        model=settings.llm_model,
        max_tokens=settings.llm_max_tokens,
    )
