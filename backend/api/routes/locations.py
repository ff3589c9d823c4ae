"""
Gym location management API routes.
"""
import logging
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field, field_validator
from sqlalchemy.orm import Session

from backend.api.dependencies import get_current_user
from backend.db.database import get_db
from backend.db.models import User, Location
from backend.errors import LocationNotFoundError
from backend.services.location_service import LocationService
from backend.utils.sanitization import SanitizedStr

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/locations", tags=["locations"])


def _validate_photo_urls(urls: List[str]) -> List[str]:
    cleaned = [url.strip() for url in urls]
    for url in cleaned:
        if not url.startswith(("http://", "https://")):
            raise ValueError(f"Photo URL must be http(s): {url!r}")
    return cleaned


# Request/Response schemas
class CreateLocationRequest(BaseModel):
    """Request to create a gym location."""
    name: SanitizedStr = Field(..., min_length=1, max_length=255)
    photo_urls: List[str] = Field(default_factory=list, alias="photoUrls")

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Home garage",
                    "photoUrls": ["https://cdn.example.com/photos/garage-1.jpg"],
                }
            ]
        },
    }

    @field_validator("photo_urls")
    @classmethod
    def photo_urls_are_http(cls, urls: List[str]) -> List[str]:
        return _validate_photo_urls(urls)


class AddPhotosRequest(BaseModel):
    """Request to add photos to a location."""
    photo_urls: List[str] = Field(..., min_length=1, alias="photoUrls")

    model_config = {"populate_by_name": True}

    @field_validator("photo_urls")
    @classmethod
    def photo_urls_are_http(cls, urls: List[str]) -> List[str]:
        return _validate_photo_urls(urls)


class LocationResponse(BaseModel):
    """A gym location with its photos and detected equipment."""
    id: UUID
    name: str
    photo_urls: List[str] = Field(alias="photoUrls")
    equipment: List[str]
    last_equipment_scan_time: Optional[datetime] = Field(None, alias="lastEquipmentScanTime")
    created_at: datetime = Field(alias="createdAt")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_db(cls, location: Location) -> "LocationResponse":
        return cls(
            id=location.id,
            name=location.name,
            photo_urls=list(location.photo_urls or []),
            equipment=list(location.equipment or []),
            last_equipment_scan_time=location.last_equipment_scan_time,
            created_at=location.created_at,
        )


def _not_found(error: LocationNotFoundError) -> HTTPException:
    return HTTPException(status_code=error.status_code, detail=error.to_detail())


@router.get("", response_model=List[LocationResponse])
def list_locations(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """List the current user's locations, newest first."""
    service = LocationService(db)
    return [LocationResponse.from_db(loc) for loc in service.list_locations(current_user)]


@router.post("", response_model=LocationResponse, status_code=status.HTTP_201_CREATED)
def create_location(
    request: CreateLocationRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Create a gym location, optionally with photos."""
    service = LocationService(db)
    location = service.create_location(current_user, request.name, request.photo_urls)
    logger.info(f"Created location {location.id} with {len(location.photo_urls)} photos")
    return LocationResponse.from_db(location)


@router.get("/{location_id}", response_model=LocationResponse)
def get_location(
    location_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Get a single location."""
    service = LocationService(db)
    try:
        return LocationResponse.from_db(service.get_location(current_user, location_id))
    except LocationNotFoundError as e:
        raise _not_found(e)


@router.post("/{location_id}/photos", response_model=LocationResponse)
def add_location_photos(
    location_id: UUID,
    request: AddPhotosRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Add photos to a location. URLs already stored are ignored."""
    service = LocationService(db)
    try:
        location = service.add_photos(current_user, location_id, request.photo_urls)
    except LocationNotFoundError as e:
        raise _not_found(e)
    return LocationResponse.from_db(location)


@router.delete("/{location_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_location(
    location_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Delete a location."""
    service = LocationService(db)
    try:
        service.delete_location(current_user, location_id)
    except LocationNotFoundError as e:
        raise _not_found(e)
