"""
Progress tracking utilities.

Whole-tree statistics plus the helpers behind the learning-path checklist.
"""

import math
from typing import Optional

from pydantic import BaseModel

from learning.models.curriculum import (
    COMPLETED,
    IN_PROGRESS,
    NOT_STARTED,
    CurriculumNode,
    NodeStatus,
)
from learning.utils.tree_utils import flatten


class Progress(BaseModel):
    total: int
    completed: int
    in_progress: int
    percentage: int


class ChecklistEntry(BaseModel):
    number: int
    depth: int
    node: CurriculumNode


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def progress(tree: CurriculumNode) -> Progress:
    """Count nodes by status in one pre-order pass."""
    total = 0
    completed = 0
    in_progress = 0

    for node in flatten(tree):
        total += 1
        if node.status == COMPLETED:
            completed += 1
        elif node.status == IN_PROGRESS:
            in_progress += 1

    percentage = round_half_up(completed / total * 100) if total > 0 else 0

    return Progress(
        total=total,
        completed=completed,
        in_progress=in_progress,
        percentage=percentage,
    )


def find_node_by_status(tree: CurriculumNode, status: NodeStatus) -> Optional[CurriculumNode]:
    """First non-root node in pre-order with the given status."""
    for node in flatten(tree):
        if node.depth > 0 and node.status == status:
            return node
    return None


def find_next_node(tree: CurriculumNode) -> Optional[CurriculumNode]:
    """The topic to continue with: an in-progress one first, else the next not started."""
    return find_node_by_status(tree, IN_PROGRESS) or find_node_by_status(tree, NOT_STARTED)


def checklist(tree: CurriculumNode) -> list[ChecklistEntry]:
    """Pre-order checklist rows; the number is the pre-order index (root is 0)."""
    return [
        ChecklistEntry(number=index, depth=node.depth, node=node)
        for index, node in enumerate(flatten(tree))
    ]
