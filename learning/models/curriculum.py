"""
Curriculum Models

The curriculum is a tree of topics. Each node owns its children; parent_id
is a lookup back-reference only.
"""

from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, Field


NodeStatus = Literal["not-started", "in-progress", "completed"]

NOT_STARTED: NodeStatus = "not-started"
IN_PROGRESS: NodeStatus = "in-progress"
COMPLETED: NodeStatus = "completed"


class CurriculumNode(BaseModel):
    """One topic at any depth of the curriculum tree."""

    id: str = Field(description="Opaque unique identifier, stable for the node's lifetime")
    title: str = Field(description="Topic title")
    description: str = Field(default="", description="What the learner will understand")
    depth: int = Field(ge=0, description="0 at the root, parent depth + 1 below")
    parent_id: Optional[str] = Field(default=None, description="Owning node id, None for the root")
    status: NodeStatus = Field(default=NOT_STARTED, description="Learning status")
    children: list["CurriculumNode"] = Field(
        default_factory=list, description="Ordered subtopics, empty for a leaf"
    )

    @property
    def is_leaf(self) -> bool:
        return not self.children

    @property
    def is_root(self) -> bool:
        return self.parent_id is None


class RawCurriculumNode(BaseModel):
    """
    Decode schema for the curriculum JSON returned by the completion provider.

    Every field is optional so that partially filled objects still decode;
    unknown keys are ignored. Wrong types fail validation.
    """

    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = None
    description: Optional[str] = None
    children: Optional[list["RawCurriculumNode"]] = None


CurriculumNode.model_rebuild()
RawCurriculumNode.model_rebuild()
