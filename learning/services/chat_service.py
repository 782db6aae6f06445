"""Node chat business logic: prompt assembly, streaming and history updates."""

import logging
from typing import AsyncIterable, AsyncIterator, Callable, Mapping, Optional

from learning.models.curriculum import CurriculumNode
from learning.models.session import (
    ChatMessage,
    LearningSession,
    NodeChatHistory,
    PersonalizationData,
    create_assistant_message,
    create_user_message,
)
from learning.prompts.node_chat_prompts import build_node_chat_system_prompt
from learning.repositories.session_store import SessionStore
from learning.services.session_service import (
    add_message_to_history,
    get_node_chat_history,
    start_node,
)
from learning.utils.tree_utils import find_by_id
from shared.services.anthropic_adapter import AnthropicAdapter
from shared.utils.exceptions import NodeNotFoundException

logger = logging.getLogger("learning.chat_service")


async def consume_stream(
    fragments: AsyncIterable[str],
    on_fragment: Optional[Callable[[str], None]] = None,
) -> str:
    """
    Concatenate streamed fragments in arrival order.

    on_fragment receives the accumulated text after every fragment, which is
    what a UI re-renders token by token.
    """
    parts: list[str] = []
    async for fragment in fragments:
        parts.append(fragment)
        if on_fragment is not None:
            on_fragment("".join(parts))
    return "".join(parts)


def build_chat_messages(previous: list[ChatMessage], message: str) -> list[dict[str, str]]:
    """Provider messages: the node's previous turns followed by the new user message."""
    # Clients may send the history with the new message already appended
    if previous and previous[-1].role == "user" and previous[-1].content == message:
        previous = previous[:-1]

    messages = [{"role": m.role, "content": m.content} for m in previous]
    messages.append({"role": "user", "content": message})
    return messages


class ChatService:
    """Runs tutoring turns for curriculum nodes."""

    def __init__(self, llm: AnthropicAdapter, store: SessionStore):
        self.llm = llm
        self.store = store

    def prepare_turn(
        self,
        node_id: str,
        message: str,
        chat_histories: Mapping[str, NodeChatHistory],
        curriculum: CurriculumNode,
        personalization: PersonalizationData,
    ) -> tuple[str, list[dict[str, str]]]:
        """Return (system_prompt, messages) for a turn, or raise NodeNotFoundException."""
        current_node = find_by_id(curriculum, node_id)
        if current_node is None:
            raise NodeNotFoundException(node_id)

        system = build_node_chat_system_prompt(
            personalization, current_node, curriculum, chat_histories
        )
        history = chat_histories.get(node_id)
        previous = history.messages if history is not None else []
        return system, build_chat_messages(previous, message)

    def stream_reply(self, system: str, messages: list[dict[str, str]]) -> AsyncIterator[str]:
        return self.llm.stream(messages, system=system)

    async def send_message(
        self,
        session: LearningSession,
        node_id: str,
        text: str,
        on_fragment: Optional[Callable[[str], None]] = None,
    ) -> LearningSession:
        """
        Run one full tutoring turn and persist it.

        The user message is saved before the provider is called, so it
        survives a transport failure. Provider errors propagate unchanged.
        A blank message is ignored: nothing is saved and the provider is not
        called.
        """
        if find_by_id(session.curriculum, node_id) is None:
            raise NodeNotFoundException(node_id)

        content = text.strip()
        if not content:
            logger.info(f"Session {session.id}: ignoring blank message for node {node_id}")
            return session

        session = start_node(session, node_id)
        previous = get_node_chat_history(session, node_id).messages
        system, messages = self.prepare_turn(
            node_id,
            content,
            session.chat_histories,
            session.curriculum,
            session.personalization,
        )

        session = add_message_to_history(session, node_id, create_user_message(content))
        session = self.store.save(session)
        logger.info(f"Session {session.id}: node {node_id} turn started with {len(previous)} previous messages")

        reply = await consume_stream(self.stream_reply(system, messages), on_fragment)

        session = add_message_to_history(session, node_id, create_assistant_message(reply))
        return self.store.save(session)
