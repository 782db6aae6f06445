"""Learning session API endpoints."""
import logging

from fastapi import APIRouter, Depends, HTTPException

from learning.api.dependencies import get_session_store
from learning.exceptions import StateTransitionError
from learning.models.messages import (
    ChecklistItemDTO,
    ProgressResponse,
    SessionSummaryDTO,
    StatusUpdateRequest,
)
from learning.models.session import LearningSession, PersonalizationData
from learning.repositories.session_store import SessionStore
from learning.services.session_service import update_node_status
from learning.utils.progress_utils import checklist, find_next_node, progress
from learning.utils.tree_utils import find_by_id
from shared.utils.exceptions import NodeNotFoundException, SessionNotFoundException

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["sessions"])


def _load_or_404(store: SessionStore, session_id: str) -> LearningSession:
    session = store.load(session_id)
    if session is None:
        raise SessionNotFoundException(session_id).to_http_exception()
    return session


@router.get("/sessions", response_model=list[SessionSummaryDTO])
def list_sessions(store: SessionStore = Depends(get_session_store)):
    """List stored sessions, most recently updated first."""
    return [
        SessionSummaryDTO(
            session_id=s.id,
            title=s.curriculum.title,
            topic=s.personalization.topic,
            percentage=progress(s.curriculum).percentage,
            updated_at=s.updated_at.isoformat(),
        )
        for s in store.list_all()
    ]


@router.get("/sessions/{session_id}", response_model=LearningSession)
def get_session(session_id: str, store: SessionStore = Depends(get_session_store)):
    return _load_or_404(store, session_id)


@router.put("/sessions/{session_id}", response_model=LearningSession)
def save_session(
    session_id: str,
    session: LearningSession,
    store: SessionStore = Depends(get_session_store),
):
    """Replace the whole session record (last write wins)."""
    if session.id != session_id:
        raise HTTPException(status_code=400, detail="Session id does not match the URL")
    return store.save(session)


@router.delete("/sessions/{session_id}", status_code=204)
def delete_session(session_id: str, store: SessionStore = Depends(get_session_store)):
    store.delete(session_id)


@router.get("/sessions/{session_id}/progress", response_model=ProgressResponse)
def get_progress(session_id: str, store: SessionStore = Depends(get_session_store)):
    """Progress counts, the next topic to continue with and the numbered checklist."""
    session = _load_or_404(store, session_id)
    stats = progress(session.curriculum)
    next_node = find_next_node(session.curriculum)

    return ProgressResponse(
        **stats.model_dump(),
        next_node_id=next_node.id if next_node else None,
        next_node_title=next_node.title if next_node else None,
        checklist=[
            ChecklistItemDTO(
                number=entry.number,
                depth=entry.depth,
                node_id=entry.node.id,
                title=entry.node.title,
                status=entry.node.status,
            )
            for entry in checklist(session.curriculum)
        ],
    )


@router.patch("/sessions/{session_id}/nodes/{node_id}/status", response_model=LearningSession)
def set_node_status(
    session_id: str,
    node_id: str,
    request: StatusUpdateRequest,
    store: SessionStore = Depends(get_session_store),
):
    """Change one node's status and save the session."""
    session = _load_or_404(store, session_id)
    if find_by_id(session.curriculum, node_id) is None:
        raise NodeNotFoundException(node_id).to_http_exception()

    try:
        updated = update_node_status(session, node_id, request.status, strict=request.strict)
    except StateTransitionError as e:
        raise HTTPException(status_code=409, detail=e.message)

    logger.info(f"Session {session_id}: node {node_id} -> {request.status}")
    return store.save(updated)


@router.get("/last-input", response_model=PersonalizationData)
def get_last_input(store: SessionStore = Depends(get_session_store)):
    personalization = store.load_last_input()
    if personalization is None:
        raise HTTPException(status_code=404, detail="No saved input")
    return personalization


@router.put("/last-input", status_code=204)
def save_last_input(
    personalization: PersonalizationData,
    store: SessionStore = Depends(get_session_store),
):
    store.save_last_input(personalization)
