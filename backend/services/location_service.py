"""
Gym location management service with database persistence.
"""
from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from backend.db.models import Location, User
from backend.errors import LocationNotFoundError


class LocationService:
    """
    Service for gym location operations.

    Manages a user's locations and their photos. Equipment is only written
    by EquipmentDetectionService.
    """

    def __init__(self, db: Session):
        """
        Initialize the location service.

        Args:
            db: SQLAlchemy database session for persistence operations.
        """
        self.db = db

    def list_locations(self, user: User) -> List[Location]:
        """Get all locations for a user, newest first."""
        return (
            self.db.query(Location)
            .filter(Location.user_id == user.id)
            .order_by(Location.created_at.desc())
            .all()
        )

    def get_location(self, user: User, location_id: UUID) -> Location:
        """
        Get a single location owned by the user.

        Raises:
            LocationNotFoundError: If the location does not exist for this user.
        """
        location = (
            self.db.query(Location)
            .filter(Location.id == location_id, Location.user_id == user.id)
            .first()
        )
        if location is None:
            raise LocationNotFoundError(str(location_id))
        return location

    def create_location(
        self,
        user: User,
        name: str,
        photo_urls: Optional[List[str]] = None,
    ) -> Location:
        """
        Create a location.

        Args:
            user: Owner of the location
            name: Display name
            photo_urls: Initial photo URLs, duplicates removed

        Returns:
            Created Location
        """
        location = Location(
            user_id=user.id,
            name=name,
            photo_urls=_unique(photo_urls or []),
            equipment=[],
        )
        self.db.add(location)
        self.db.commit()
        self.db.refresh(location)
        return location

    def add_photos(self, user: User, location_id: UUID, photo_urls: List[str]) -> Location:
        """Append photo URLs to a location, skipping ones already stored."""
        location = self.get_location(user, location_id)
        location.photo_urls = _unique(list(location.photo_urls or []) + list(photo_urls))
        self.db.commit()
        self.db.refresh(location)
        return location

    def delete_location(self, user: User, location_id: UUID) -> None:
        """Delete a location."""
        location = self.get_location(user, location_id)
        self.db.delete(location)
        self.db.commit()


def _unique(values: List[str]) -> List[str]:
    unique: List[str] = []
    for value in values:
        if value not in unique:
            unique.append(value)
    return unique
