"""
Tests for learning/api routers

Covers curriculum generation, streaming chat/onboarding and session storage
endpoints with the store and completion provider overridden.
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from learning.api import chat, curriculum, sessions
from learning.api.dependencies import get_llm, get_session_store
from learning.services.session_service import update_node_status
from learning.utils.tree_utils import find_by_id
from shared.utils.exceptions import LLMProviderException
from tests.helpers import make_history


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def client(store, mock_llm):
    """Test app with the learning routers, an in-memory store and a fake provider."""
    app = FastAPI()
    app.include_router(curriculum.router)
    app.include_router(chat.router)
    app.include_router(sessions.router)

    app.dependency_overrides[get_session_store] = lambda: store
    app.dependency_overrides[get_llm] = lambda: mock_llm
    return TestClient(app)


@pytest.fixture
def stored_session(store, sample_session):
    return store.save(sample_session)


def _chat_body(session, node_id="a1", message="What is a variable?", **overrides):
    body = {
        "session_id": session.id,
        "node_id": node_id,
        "message": message,
        "chat_histories": {k: v.model_dump(mode="json") for k, v in session.chat_histories.items()},
        "curriculum": session.curriculum.model_dump(mode="json"),
        "personalization": session.personalization.model_dump(mode="json"),
    }
    body.update(overrides)
    return body


# ===========================================================================
# POST /api/generate-curriculum
# ===========================================================================

class TestGenerateCurriculum:

    def test_success(self, client, store, sample_personalization):
        resp = client.post("/api/generate-curriculum", json={
            "personalization": sample_personalization.model_dump(mode="json"),
        })

        assert resp.status_code == 200
        data = resp.json()
        assert data["curriculum"]["title"] == "Python"
        assert data["curriculum"]["depth"] == 0
        assert data["curriculum"]["status"] == "not-started"
        assert store.load(data["session_id"]) is not None

    def test_blank_topic(self, client, mock_llm):
        resp = client.post("/api/generate-curriculum", json={"personalization": {"topic": "   "}})

        assert resp.status_code == 400
        assert resp.json()["detail"] == "Missing personalization data or topic"
        mock_llm.complete.assert_not_called()

    def test_missing_personalization(self, client):
        assert client.post("/api/generate-curriculum", json={}).status_code == 422

    def test_provider_failure(self, client, mock_llm, sample_personalization):
        mock_llm.complete.side_effect = LLMProviderException(RuntimeError("down"))

        resp = client.post("/api/generate-curriculum", json={
            "personalization": sample_personalization.model_dump(mode="json"),
        })

        assert resp.status_code == 503
        assert resp.json()["detail"] == "AI service temporarily unavailable"

    def test_unexpected_failure(self, client, mock_llm, sample_personalization):
        mock_llm.complete.side_effect = RuntimeError("boom")

        resp = client.post("/api/generate-curriculum", json={
            "personalization": sample_personalization.model_dump(mode="json"),
        })

        assert resp.status_code == 500
        assert resp.json()["detail"] == "Failed to generate curriculum"

    def test_unparseable_reply_still_succeeds(self, client, mock_llm, sample_personalization):
        mock_llm.complete.return_value = "no json here"

        resp = client.post("/api/generate-curriculum", json={
            "personalization": sample_personalization.model_dump(mode="json"),
        })

        assert resp.status_code == 200
        assert resp.json()["curriculum"]["title"] == "Learning Path"


# ===========================================================================
# POST /api/chat
# ===========================================================================

class TestChat:

    def test_streams_reply(self, client, sample_session):
        resp = client.post("/api/chat", json=_chat_body(sample_session))

        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/plain")
        assert resp.text == "Hello, learner!"

    def test_provider_gets_prompt_and_history(self, client, mock_llm, sample_session):
        session = sample_session.model_copy(update={
            "chat_histories": {"a1": make_history("a1", "first", "reply")},
        })

        client.post("/api/chat", json=_chat_body(session, message="second"))

        messages = mock_llm.stream.call_args.args[0]
        assert [m["content"] for m in messages] == ["first", "reply", "second"]
        assert 'You are teaching the topic: "Variables"' in mock_llm.stream.call_args.kwargs["system"]

    @pytest.mark.parametrize("overrides", [
        {"node_id": ""},
        {"message": ""},
        {"message": "   "},
        {"curriculum": None},
        {"personalization": None},
    ])
    def test_missing_fields(self, client, mock_llm, sample_session, overrides):
        resp = client.post("/api/chat", json=_chat_body(sample_session, **overrides))

        assert resp.status_code == 400
        assert resp.json()["detail"] == "Missing required fields"
        mock_llm.stream.assert_not_called()

    def test_unknown_node(self, client, sample_session):
        resp = client.post("/api/chat", json=_chat_body(sample_session, node_id="missing"))

        assert resp.status_code == 404
        assert resp.json()["detail"] == "Node not found"

    def test_does_not_touch_store(self, client, store, sample_session):
        client.post("/api/chat", json=_chat_body(sample_session))
        assert store.list_all() == []


# ===========================================================================
# POST /api/onboarding
# ===========================================================================

class TestOnboarding:

    def test_streams_reply(self, client, mock_llm):
        resp = client.post("/api/onboarding", json={
            "messages": [{"role": "user", "content": "Hi, I'm Sam"}],
        })

        assert resp.status_code == 200
        assert resp.text == "Hello, learner!"
        assert mock_llm.stream.call_args.args[0] == [{"role": "user", "content": "Hi, I'm Sam"}]
        assert "learning coach" in mock_llm.stream.call_args.kwargs["system"]

    def test_missing_messages(self, client):
        resp = client.post("/api/onboarding", json={"messages": []})
        assert resp.status_code == 400


# ===========================================================================
# /api/sessions
# ===========================================================================

class TestSessions:

    def test_list_empty(self, client):
        resp = client.get("/api/sessions")
        assert resp.status_code == 200
        assert resp.json() == []

    def test_list_summaries(self, client, store, stored_session):
        store.save(update_node_status(stored_session, "c", "completed"))

        data = client.get("/api/sessions").json()

        assert len(data) == 1
        assert data[0]["session_id"] == "sess-1"
        assert data[0]["title"] == "Python"
        assert data[0]["topic"] == "Python"
        assert data[0]["percentage"] == 14

    def test_get(self, client, stored_session):
        resp = client.get("/api/sessions/sess-1")

        assert resp.status_code == 200
        assert resp.json()["curriculum"]["children"][0]["title"] == "Basics"

    def test_get_missing(self, client):
        resp = client.get("/api/sessions/nope")
        assert resp.status_code == 404
        assert resp.json()["detail"] == "Session nope not found"

    def test_put_saves(self, client, store, sample_session):
        session = sample_session.model_copy(update={
            "chat_histories": {"a": make_history("a", "q", "answer")},
        })

        resp = client.put("/api/sessions/sess-1", json=session.model_dump(mode="json"))

        assert resp.status_code == 200
        assert store.load("sess-1").chat_histories["a"].messages[1].content == "answer"

    def test_put_id_mismatch(self, client, sample_session):
        resp = client.put("/api/sessions/other", json=sample_session.model_dump(mode="json"))
        assert resp.status_code == 400

    def test_delete(self, client, store, stored_session):
        resp = client.delete("/api/sessions/sess-1")

        assert resp.status_code == 204
        assert store.load("sess-1") is None

    def test_delete_missing_is_noop(self, client):
        assert client.delete("/api/sessions/nope").status_code == 204


class TestProgressEndpoint:

    def test_fresh_session(self, client, stored_session):
        data = client.get("/api/sessions/sess-1/progress").json()

        assert data["total"] == 7
        assert data["completed"] == 0
        assert data["percentage"] == 0
        assert data["next_node_id"] == "a"
        assert data["next_node_title"] == "Basics"
        assert [item["number"] for item in data["checklist"]] == list(range(7))
        assert data["checklist"][2] == {
            "number": 2, "depth": 2, "node_id": "a1", "title": "Variables", "status": "not-started",
        }

    def test_partial_progress(self, client, store, stored_session):
        session = update_node_status(stored_session, "a1", "completed")
        session = update_node_status(session, "b", "in-progress")
        store.save(session)

        data = client.get("/api/sessions/sess-1/progress").json()

        assert data["completed"] == 1
        assert data["in_progress"] == 1
        assert data["next_node_id"] == "b"

    def test_missing_session(self, client):
        assert client.get("/api/sessions/nope/progress").status_code == 404


class TestNodeStatusEndpoint:

    def test_updates_and_saves(self, client, store, stored_session):
        resp = client.patch("/api/sessions/sess-1/nodes/a1/status", json={"status": "completed"})

        assert resp.status_code == 200
        assert find_by_id(store.load("sess-1").curriculum, "a1").status == "completed"

    def test_unknown_node(self, client, stored_session):
        resp = client.patch("/api/sessions/sess-1/nodes/zzz/status", json={"status": "completed"})
        assert resp.status_code == 404

    def test_invalid_status_value(self, client, stored_session):
        resp = client.patch("/api/sessions/sess-1/nodes/a1/status", json={"status": "done"})
        assert resp.status_code == 422

    def test_strict_rejects_skip(self, client, store, stored_session):
        resp = client.patch(
            "/api/sessions/sess-1/nodes/a1/status",
            json={"status": "completed", "strict": True},
        )

        assert resp.status_code == 409
        assert find_by_id(store.load("sess-1").curriculum, "a1").status == "not-started"


class TestLastInput:

    def test_none_saved(self, client):
        assert client.get("/api/last-input").status_code == 404

    def test_put_then_get(self, client, sample_personalization):
        resp = client.put("/api/last-input", json=sample_personalization.model_dump(mode="json"))
        assert resp.status_code == 204

        data = client.get("/api/last-input").json()
        assert data["topic"] == "Python"
        assert data["prior_knowledge"] == "Excel formulas"
