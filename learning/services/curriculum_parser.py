"""
Curriculum response parser.

Turns the raw text of a curriculum-generation completion into a validated
CurriculumNode tree. Models sometimes wrap the JSON in code fences or prose,
so the text is unwrapped before decoding. The parser never fails outward:
anything that does not decode into the expected shape is replaced by a fixed
three-topic learning path.
"""

import json
import logging
import re
from typing import Callable, Optional

from pydantic import ValidationError

from learning.models.curriculum import CurriculumNode, RawCurriculumNode
from learning.utils.ids import new_id

logger = logging.getLogger(__name__)

UNTITLED = "Untitled"

_LEADING_FENCE = re.compile(r"^```(?:json)?\n?")
_TRAILING_FENCE = re.compile(r"\n?```\Z")
_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")

DEFAULT_CURRICULUM = RawCurriculumNode(
    title="Learning Path",
    description="Your personalized learning curriculum",
    children=[
        RawCurriculumNode(
            title="Fundamentals",
            description="Core concepts and basics",
            children=[],
        ),
        RawCurriculumNode(
            title="Intermediate Concepts",
            description="Building on the fundamentals",
            children=[],
        ),
        RawCurriculumNode(
            title="Advanced Topics",
            description="Deep dive into complex areas",
            children=[],
        ),
    ],
)


def extract_json_text(response: str) -> str:
    """Strip surrounding code fences and prose, keeping the outermost {...} span."""
    text = response.strip()

    if text.startswith("```"):
        text = _LEADING_FENCE.sub("", text)
        text = _TRAILING_FENCE.sub("", text)

    match = _JSON_OBJECT.search(text)
    if match:
        text = match.group(0)

    return text


def decode_raw_curriculum(text: str) -> Optional[RawCurriculumNode]:
    """Strict JSON + shape decode. Returns None when either step fails."""
    try:
        return RawCurriculumNode.model_validate_json(text)
    except ValidationError as e:
        logger.error(json.dumps({
            "step": "CURRICULUM_PARSE",
            "status": "failed",
            "error_count": e.error_count(),
            "first_error": e.errors()[0]["type"] if e.error_count() else None,
        }))
        return None


def build_tree(
    raw: RawCurriculumNode,
    depth: int = 0,
    parent_id: Optional[str] = None,
    id_factory: Callable[[], str] = new_id,
) -> CurriculumNode:
    """Assign ids, depths and parent links, recursing into children in order."""
    node_id = id_factory()

    return CurriculumNode(
        id=node_id,
        title=raw.title or UNTITLED,
        description=raw.description or "",
        depth=depth,
        parent_id=parent_id,
        status="not-started",
        children=[
            build_tree(child, depth + 1, node_id, id_factory)
            for child in (raw.children or [])
        ],
    )


def parse_curriculum_response(
    response: str,
    id_factory: Callable[[], str] = new_id,
) -> CurriculumNode:
    """Parse an LLM response into a curriculum tree, falling back to the default path."""
    raw = decode_raw_curriculum(extract_json_text(response))

    if raw is None:
        logger.error("Failed to parse curriculum JSON, creating default structure")
        raw = DEFAULT_CURRICULUM

    return build_tree(raw, id_factory=id_factory)
