"""Learning models."""
from learning.models.curriculum import CurriculumNode, RawCurriculumNode, NodeStatus
from learning.models.session import (
    ChatMessage,
    LearningSession,
    NodeChatHistory,
    PersonalizationData,
)
