"""
API Message Models

Request and response DTOs for the HTTP surface.
"""

from typing import Literal, Optional
from pydantic import BaseModel, Field

from learning.models.curriculum import CurriculumNode, NodeStatus
from learning.models.session import NodeChatHistory, PersonalizationData


class GenerateCurriculumRequest(BaseModel):
    personalization: PersonalizationData


class GenerateCurriculumResponse(BaseModel):
    session_id: str
    curriculum: CurriculumNode


class ChatRequest(BaseModel):
    """A tutoring turn; the client sends its current copy of the session data."""

    session_id: Optional[str] = None
    node_id: str = ""
    message: str = ""
    chat_histories: dict[str, NodeChatHistory] = Field(default_factory=dict)
    curriculum: Optional[CurriculumNode] = None
    personalization: Optional[PersonalizationData] = None


class OnboardingMessage(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class OnboardingRequest(BaseModel):
    messages: list[OnboardingMessage] = Field(default_factory=list)


class StatusUpdateRequest(BaseModel):
    status: NodeStatus
    strict: bool = Field(default=False, description="Reject backward or skipped transitions")


class ChecklistItemDTO(BaseModel):
    number: int
    depth: int
    node_id: str
    title: str
    status: NodeStatus


class ProgressResponse(BaseModel):
    total: int
    completed: int
    in_progress: int
    percentage: int
    next_node_id: Optional[str] = None
    next_node_title: Optional[str] = None
    checklist: list[ChecklistItemDTO] = Field(default_factory=list)


class SessionSummaryDTO(BaseModel):
    session_id: str
    title: str
    topic: str
    percentage: int
    updated_at: str
