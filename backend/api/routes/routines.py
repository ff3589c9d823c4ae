"""
Workout routine generation API routes.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException

from backend.api.dependencies import get_current_user, get_language_model
from backend.clients.protocol import LanguageModel
from backend.db.models import User
from backend.errors import RoutineGenerationError
from backend.features import Feature, FeatureFlagService, get_feature_service
from backend.features.service import require_feature
from backend.models.schemas import RoutinePromptStyle, RoutineRequest, RoutineResponse
from backend.services.routine_service import RoutineGenerationService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/routines", tags=["routines"])


@router.post("/generate", response_model=RoutineResponse)
def generate_workout_routine(
    request: RoutineRequest,
    current_user: User = Depends(get_current_user),
    model: LanguageModel = Depends(get_language_model),
    feature_service: FeatureFlagService = Depends(get_feature_service),
    _: None = Depends(require_feature(Feature.ROUTINE_GENERATION)),
):
    """
    Generate a multi-day workout routine.

    Returns a title, a short description and a markdown outline of the
    training days, built only from the selected equipment.
    """
    if feature_service.is_enabled(Feature.STRUCTURED_ROUTINE_PROMPT):
        style = RoutinePromptStyle.STRUCTURED
    else:
        style = RoutinePromptStyle.MARKDOWN

    service = RoutineGenerationService(model, style=style)

    try:
        record = service.generate_routine(request)
    except RoutineGenerationError as e:
        logger.error(f"Routine generation failed for user {current_user.id}: {e.message}")
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())

    return RoutineResponse(**record.to_dict())
