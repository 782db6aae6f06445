"""Curriculum generation business logic."""

import logging

from learning.models.session import LearningSession, PersonalizationData
from learning.prompts.curriculum_prompts import build_curriculum_prompt
from learning.repositories.session_store import SessionStore
from learning.services.curriculum_parser import parse_curriculum_response
from learning.services.session_service import create_learning_session
from learning.utils.tree_utils import count_nodes
from shared.services.anthropic_adapter import AnthropicAdapter

logger = logging.getLogger("learning.curriculum_service")


class CurriculumService:
    """Generates a curriculum for a learner and opens a session for it."""

    def __init__(self, llm: AnthropicAdapter, store: SessionStore):
        self.llm = llm
        self.store = store

    def generate(self, personalization: PersonalizationData) -> LearningSession:
        """
        Ask the provider for a curriculum, parse it and save a new session.

        Provider failures propagate as LLMProviderException. A response that
        cannot be parsed still yields a session (with the default path).
        """
        self.store.save_last_input(personalization)

        prompt = build_curriculum_prompt(personalization)
        response_text = self.llm.complete([{"role": "user", "content": prompt}])

        curriculum = parse_curriculum_response(response_text)
        session = self.store.save(create_learning_session(personalization, curriculum))

        logger.info(
            f"Created session {session.id} for topic '{personalization.topic}' "
            f"with {count_nodes(curriculum)} nodes"
        )
        return session
