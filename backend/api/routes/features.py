"""
Feature flags API routes.

Lets authenticated clients check which model-backed features are available.
"""
from fastapi import APIRouter, Depends
from pydantic import BaseModel
from typing import Dict

from backend.api.dependencies import get_current_user
from backend.db.models import User
from backend.features import FeatureFlagService, get_feature_service

router = APIRouter(prefix="/api/features", tags=["features"])


class FeatureFlagsResponse(BaseModel):
    """Feature flag states keyed by feature name."""

    flags: Dict[str, bool]

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "flags": {
                        "equipment_detection": True,
                        "routine_generation": True,
                        "structured_routine_prompt": True,
                    }
                }
            ]
        }
    }


@router.get("", response_model=FeatureFlagsResponse)
async def get_feature_flags(
    current_user: User = Depends(get_current_user),
    feature_service: FeatureFlagService = Depends(get_feature_service),
):
    """
    Get current state of all feature flags.

    Use this to hide equipment scanning or routine generation in the client
    when they are switched off on the server.
    """
    return FeatureFlagsResponse(flags=feature_service.get_all_flags())
