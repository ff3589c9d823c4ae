"""
Equipment detection service.

Scans every photo of a gym location with a vision model and unions the
equipment it finds into the location's stored equipment.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from backend.clients.protocol import ImageSource, LanguageModel
from backend.db.models import Location, User
from backend.engine.parsing.equipment import aggregate_equipment, merge_equipment
from backend.errors import (
    EquipmentDetectionError,
    InvalidArgumentError,
    LocationNotFoundError,
)

logger = logging.getLogger(__name__)

EQUIPMENT_DETECTION_PROMPT = (
    "List all gym or fitness equipment present in this image. "
    "Return only equipment names, one per line. "
    "If no equipment is found, return an empty response."
)

NO_PHOTOS_MESSAGE = "No photos to analyze"


@dataclass
class EquipmentDetectionResult:
    """Outcome of scanning a location's photos."""

    detected_equipment: List[str] = field(default_factory=list)
    photos_analyzed: int = 0
    message: Optional[str] = None

    @property
    def has_photos(self) -> bool:
        return self.photos_analyzed > 0


class EquipmentDetectionService:
    """
    Service for detecting gym equipment in location photos.

    Photos are analyzed one at a time, in stored order. A failure on any
    photo aborts the whole scan and nothing is merged, so a location's
    equipment only ever grows from complete scans.
    """

    def __init__(self, db: Session, model: LanguageModel, images: ImageSource):
        """
        Initialize the equipment detection service.

        Args:
            db: SQLAlchemy database session for persistence operations.
            model: Vision-capable language model.
            images: Source used to download photos as data URIs.
        """
        self.db = db
        self.model = model
        self.images = images

    def get_location(self, user: User, location_id: str) -> Location:
        """
        Load a location owned by the user.

        Raises:
            InvalidArgumentError: If location_id is empty.
            LocationNotFoundError: If no such location belongs to the user.
        """
        if not location_id or not location_id.strip():
            raise InvalidArgumentError("locationId", "Location ID is required")

        try:
            location_uuid = UUID(location_id.strip())
        except ValueError:
            raise LocationNotFoundError(location_id)

        location = (
            self.db.query(Location)
            .filter(Location.id == location_uuid, Location.user_id == user.id)
            .first()
        )
        if location is None:
            raise LocationNotFoundError(location_id)
        return location

    def analyze_photos(self, photo_urls: List[str]) -> List[str]:
        """
        Run the vision model over each photo and aggregate the answers.

        Args:
            photo_urls: Photo URLs in the order they should be analyzed.

        Returns:
            Canonical, de-duplicated equipment names across all photos.

        Raises:
            Exception: Whatever the image source or model raised for the
                first photo that failed.
        """
        responses = []
        for index, photo_url in enumerate(photo_urls):
            logger.debug(f"Analyzing photo {index + 1}/{len(photo_urls)}")
            image_uri = self.images.fetch_data_uri(photo_url)
            responses.append(
                self.model.describe_image(EQUIPMENT_DETECTION_PROMPT, image_uri)
            )
        return aggregate_equipment(responses)

    def detect_equipment(self, user: User, location_id: str) -> EquipmentDetectionResult:
        """
        Detect equipment in a location's photos and store it.

        Args:
            user: Caller who owns the location.
            location_id: ID of the location to scan.

        Returns:
            EquipmentDetectionResult with the equipment detected by this scan
            (not the merged total), or a "no photos" message.

        Raises:
            InvalidArgumentError: If location_id is empty.
            LocationNotFoundError: If the location does not exist.
            EquipmentDetectionError: If downloading or analyzing any photo fails.
        """
        location = self.get_location(user, location_id)
        photo_urls = list(location.photo_urls or [])

        if not photo_urls:
            return EquipmentDetectionResult(message=NO_PHOTOS_MESSAGE)

        try:
            detected = self.analyze_photos(photo_urls)
        except Exception as e:
            logger.exception(f"Error detecting equipment for location {location.id}")
            raise EquipmentDetectionError(str(location.id), str(e)) from e

        if detected:
            # Scans that committed while the photos were analyzed must survive the union
            self.db.refresh(location, with_for_update=True)
            location.equipment = merge_equipment(location.equipment or [], detected)
            location.last_equipment_scan_time = datetime.now(timezone.utc)
            self.db.commit()
            self.db.refresh(location)
            logger.info(
                f"Detected {len(detected)} equipment items for location {location.id}; "
                f"{len(location.equipment)} stored"
            )

        return EquipmentDetectionResult(
            detected_equipment=detected,
            photos_analyzed=len(photo_urls),
        )
