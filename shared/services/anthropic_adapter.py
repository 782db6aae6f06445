"""
Anthropic (Claude) Adapter

Encapsulates all Claude API interaction for the learning backend.

Handles:
- One-shot completions (curriculum generation) -> full response text
- Streamed completions (tutoring, onboarding) -> text fragments in arrival order
- Mapping SDK failures to LLMProviderException (no retries)
"""

import json
import logging
from typing import Any, AsyncIterator, Dict, List, Optional

import anthropic

from shared.utils.exceptions import LLMProviderException

logger = logging.getLogger(__name__)

DEFAULT_CLAUDE_MODEL = "claude-sonnet-4-20250514"
DEFAULT_MAX_TOKENS = 4096


class AnthropicAdapter:
    """Completion provider backed by Anthropic's Messages API."""

    def __init__(
        self,
        api_key: str,
        timeout: int = 60,
        model: str = DEFAULT_CLAUDE_MODEL,
        max_tokens: int = DEFAULT_MAX_TOKENS,
    ):
        self.model = model
        self.max_tokens = max_tokens
        self.client = anthropic.Anthropic(api_key=api_key, timeout=timeout)
        self.async_client = anthropic.AsyncAnthropic(api_key=api_key, timeout=timeout)

    def _build_kwargs(
        self,
        messages: List[Dict[str, str]],
        system: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Build kwargs for anthropic messages.create() / messages.stream()."""
        kwargs: Dict[str, Any] = {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "messages": [{"role": m["role"], "content": m["content"]} for m in messages],
        }
        if system:
            kwargs["system"] = system
        return kwargs

    @staticmethod
    def _extract_text(response: Any) -> str:
        """Concatenate every text block of a response."""
        return "".join(block.text for block in response.content if block.type == "text")

    def _log_call(self, mode: str, status: str, **extra: Any) -> None:
        logger.info(json.dumps({
            "step": "LLM_CALL",
            "status": status,
            "mode": mode,
            "model": self.model,
            **extra,
        }))

    def complete(
        self,
        messages: List[Dict[str, str]],
        system: Optional[str] = None,
    ) -> str:
        """Sync call to Claude, returning the full response text."""
        kwargs = self._build_kwargs(messages, system)
        self._log_call("complete", "starting", message_count=len(messages))
        try:
            response = self.client.messages.create(**kwargs)
        except anthropic.APIError as e:
            logger.error(f"Claude completion failed: {e}")
            raise LLMProviderException(e) from e

        text = self._extract_text(response)
        self._log_call("complete", "complete", output_chars=len(text))
        return text

    async def stream(
        self,
        messages: List[Dict[str, str]],
        system: Optional[str] = None,
    ) -> AsyncIterator[str]:
        """Async stream of text fragments, yielded in the order they arrive."""
        kwargs = self._build_kwargs(messages, system)
        self._log_call("stream", "starting", message_count=len(messages))
        try:
            async with self.async_client.messages.stream(**kwargs) as stream:
                async for text in stream.text_stream:
                    yield text
        except anthropic.APIError as e:
            logger.error(f"Claude stream failed: {e}")
            raise LLMProviderException(e) from e
        self._log_call("stream", "complete")
