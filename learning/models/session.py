"""
Session Models

A LearningSession is the unit of persistence: personalization inputs, the
curriculum tree and every per-node chat history.
"""

from datetime import datetime, timezone
from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, Field

from learning.models.curriculum import CurriculumNode
from learning.utils.ids import new_id


KnowledgeLevel = Literal["complete-beginner", "some-familiarity", "intermediate", "advanced"]
ChatRole = Literal["user", "assistant"]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PersonalizationData(BaseModel):
    """Snapshot of the onboarding inputs used to generate a curriculum."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(default="", description="Learner's name")
    topic: str = Field(description="Topic to learn")
    background: str = Field(default="", description="Learner background")
    knowledge_level: KnowledgeLevel = Field(
        default="complete-beginner", description="Current knowledge level"
    )
    learning_goals: str = Field(default="", description="What the learner wants to achieve")
    prior_knowledge: Optional[str] = Field(
        default=None, description="What the learner already knows, e.g. 'JavaScript, React'"
    )


class ChatMessage(BaseModel):
    """Individual message in a node's conversation."""

    id: str = Field(default_factory=new_id, description="Unique message identifier")
    role: ChatRole = Field(description="Role of the message sender")
    content: str = Field(description="Message content text")
    timestamp: datetime = Field(default_factory=utcnow, description="When the message was created")


class NodeChatHistory(BaseModel):
    """Conversation attached to one curriculum node."""

    node_id: str
    messages: list[ChatMessage] = Field(default_factory=list)
    summary: Optional[str] = Field(default=None, description="Cached digest of messages")

    @property
    def has_messages(self) -> bool:
        return len(self.messages) > 0


class LearningSession(BaseModel):
    """One learner's complete learning record."""

    id: str = Field(default_factory=new_id, description="Unique session identifier")
    personalization: PersonalizationData
    curriculum: CurriculumNode
    chat_histories: dict[str, NodeChatHistory] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


# Factory Functions

def create_user_message(content: str) -> ChatMessage:
    return ChatMessage(role="user", content=content)


def create_assistant_message(content: str) -> ChatMessage:
    return ChatMessage(role="assistant", content=content)
