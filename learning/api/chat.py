"""Streaming chat endpoints for node tutoring and onboarding."""
import logging
from typing import AsyncIterator

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import StreamingResponse

from learning.api.dependencies import get_llm, get_session_store
from learning.models.messages import ChatRequest, OnboardingRequest
from learning.prompts.onboarding_prompts import build_onboarding_system_prompt
from learning.repositories.session_store import SessionStore
from learning.services.chat_service import ChatService
from shared.services.anthropic_adapter import AnthropicAdapter
from shared.utils.exceptions import RecursiveLearningException

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["chat"])

STREAM_MEDIA_TYPE = "text/plain; charset=utf-8"


async def _relay(fragments: AsyncIterator[str], label: str) -> AsyncIterator[str]:
    """Forward fragments verbatim; a provider failure ends the stream."""
    try:
        async for fragment in fragments:
            yield fragment
    except RecursiveLearningException as e:
        logger.error(f"Error in {label} stream: {e}")
        raise


@router.post("/chat")
async def chat(
    request: ChatRequest,
    llm: AnthropicAdapter = Depends(get_llm),
    store: SessionStore = Depends(get_session_store),
):
    """Stream the tutor's reply for one node, token by token."""
    if not request.node_id or not request.message.strip() or request.curriculum is None or request.personalization is None:
        raise HTTPException(status_code=400, detail="Missing required fields")

    service = ChatService(llm, store)
    try:
        system, messages = service.prepare_turn(
            request.node_id,
            request.message,
            request.chat_histories,
            request.curriculum,
            request.personalization,
        )
    except RecursiveLearningException as e:
        raise e.to_http_exception()

    return StreamingResponse(
        _relay(service.stream_reply(system, messages), "chat"),
        media_type=STREAM_MEDIA_TYPE,
    )


@router.post("/onboarding")
async def onboarding(
    request: OnboardingRequest,
    llm: AnthropicAdapter = Depends(get_llm),
):
    """Stream the onboarding coach's next reply."""
    if not request.messages:
        raise HTTPException(status_code=400, detail="Missing messages")

    messages = [{"role": m.role, "content": m.content} for m in request.messages]
    return StreamingResponse(
        _relay(llm.stream(messages, system=build_onboarding_system_prompt()), "onboarding"),
        media_type=STREAM_MEDIA_TYPE,
    )
