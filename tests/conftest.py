"""Pytest configuration and shared fixtures."""
import os

import pytest

os.environ.setdefault("ANTHROPIC_API_KEY", "test-key-fake")
os.environ.setdefault("STORAGE_PATH", "/tmp/recursive-learning-test-store.json")

from learning.models.session import LearningSession, PersonalizationData
from learning.repositories.session_store import InMemorySessionStore
from tests.helpers import make_node


@pytest.fixture
def sample_tree():
    """
    Seven-node curriculum:

        root
        ├── a
        │   ├── a1
        │   └── a2
        ├── b
        │   └── b1
        └── c
    """
    return make_node("root", title="Python", children=[
        make_node("a", title="Basics", depth=1, parent_id="root", children=[
            make_node("a1", title="Variables", depth=2, parent_id="a"),
            make_node("a2", title="Loops", depth=2, parent_id="a"),
        ]),
        make_node("b", title="Functions", depth=1, parent_id="root", children=[
            make_node("b1", title="Arguments", depth=2, parent_id="b"),
        ]),
        make_node("c", title="Classes", depth=1, parent_id="root"),
    ])


@pytest.fixture
def sample_personalization():
    return PersonalizationData(
        name="Sam",
        topic="Python",
        background="Accountant who uses spreadsheets daily",
        knowledge_level="complete-beginner",
        learning_goals="Automate reports",
        prior_knowledge="Excel formulas",
    )


@pytest.fixture
def sample_session(sample_personalization, sample_tree):
    return LearningSession(
        id="sess-1",
        personalization=sample_personalization,
        curriculum=sample_tree,
    )


@pytest.fixture
def store():
    """Fresh in-memory session store."""
    return InMemorySessionStore()


@pytest.fixture
def mock_llm(mocker):
    """Completion provider double; stream yields the fragments in stream_fragments."""
    llm = mocker.Mock()
    llm.complete.return_value = '{"title": "Python", "description": "Learn Python", "children": []}'
    llm.stream_fragments = ["Hello", ", ", "learner", "!"]

    async def _stream(messages, system=None):
        for fragment in llm.stream_fragments:
            yield fragment

    llm.stream.side_effect = _stream
    return llm
