"""
Equipment detection API routes.
"""
import logging
from typing import Union

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.api.dependencies import get_current_user, get_image_source, get_language_model
from backend.clients.protocol import ImageSource, LanguageModel
from backend.db.database import get_db
from backend.db.models import User
from backend.errors import (
    DatabaseQueryError,
    EquipmentDetectionError,
    InvalidArgumentError,
    LocationNotFoundError,
)
from backend.features import Feature
from backend.features.service import require_feature
from backend.models.schemas import (
    EquipmentDetectionRequest,
    EquipmentDetectionResponse,
    NoPhotosResponse,
)
from backend.services.equipment_service import EquipmentDetectionService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/equipment", tags=["equipment"])


@router.post(
    "/detect",
    response_model=Union[EquipmentDetectionResponse, NoPhotosResponse],
)
def detect_gym_equipment(
    request: EquipmentDetectionRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    model: LanguageModel = Depends(get_language_model),
    images: ImageSource = Depends(get_image_source),
    _: None = Depends(require_feature(Feature.EQUIPMENT_DETECTION)),
):
    """
    Detect gym equipment in a location's photos.

    Every photo is analyzed; newly detected equipment is added to the
    location's stored equipment, which is never shrunk. Returns the equipment
    detected by this scan.
    """
    service = EquipmentDetectionService(db, model, images)

    try:
        result = service.detect_equipment(current_user, request.location_id)
    except (InvalidArgumentError, LocationNotFoundError) as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())
    except EquipmentDetectionError as e:
        logger.error(f"Equipment detection failed: {e.reason}")
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())
    except SQLAlchemyError as e:
        logger.exception("Database error during equipment detection")
        error = DatabaseQueryError("detect_equipment", type(e).__name__)
        raise HTTPException(status_code=error.status_code, detail=error.to_detail())

    if not result.has_photos:
        return NoPhotosResponse(message=result.message)

    return EquipmentDetectionResponse(
        success=True,
        detected_equipment=result.detected_equipment,
    )
