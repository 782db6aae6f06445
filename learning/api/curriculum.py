"""Curriculum generation API endpoint."""
import logging

from fastapi import APIRouter, Depends, HTTPException

from learning.api.dependencies import get_llm, get_session_store
from learning.models.messages import GenerateCurriculumRequest, GenerateCurriculumResponse
from learning.repositories.session_store import SessionStore
from learning.services.curriculum_service import CurriculumService
from shared.services.anthropic_adapter import AnthropicAdapter
from shared.utils.exceptions import RecursiveLearningException

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["curriculum"])


@router.post("/generate-curriculum", response_model=GenerateCurriculumResponse)
def generate_curriculum(
    request: GenerateCurriculumRequest,
    llm: AnthropicAdapter = Depends(get_llm),
    store: SessionStore = Depends(get_session_store),
):
    """Generate a curriculum tree for the learner and open a new session."""
    if not request.personalization.topic.strip():
        raise HTTPException(status_code=400, detail="Missing personalization data or topic")

    try:
        session = CurriculumService(llm, store).generate(request.personalization)
        return GenerateCurriculumResponse(session_id=session.id, curriculum=session.curriculum)
    except RecursiveLearningException as e:
        raise e.to_http_exception()
    except Exception as e:
        logger.error(f"Error generating curriculum: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to generate curriculum")
