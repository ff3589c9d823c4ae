"""
SQLAlchemy ORM models for LiftLens database.
"""
from datetime import datetime, timezone
from sqlalchemy import (
    Column, String, DateTime, ForeignKey, Enum as SQLEnum, Boolean, JSON, Index
)
from sqlalchemy.orm import relationship
from sqlalchemy.dialects.postgresql import UUID
import uuid

from backend.db.database import Base
from backend.models.schemas import UserRole


class User(Base):
    """User account with authentication."""
    __tablename__ = "users"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    full_name = Column(String(255), nullable=True)
    role = Column(SQLEnum(UserRole), default=UserRole.USER, nullable=False, server_default='USER')
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc), nullable=False)

    # Relationships
    locations = relationship("Location", back_populates="user", cascade="all, delete-orphan")


class Location(Base):
    """A gym or training location with photos and detected equipment."""
    __tablename__ = "locations"
    __table_args__ = (
        # Composite index for listing a user's locations by creation date
        Index('ix_locations_user_id_created_at', 'user_id', 'created_at'),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    photo_urls = Column(JSON, nullable=False, default=list)  # List[str]
    # Grown only by set union with newly detected equipment
    equipment = Column(JSON, nullable=False, default=list)  # List[str]
    last_equipment_scan_time = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc), nullable=False)
    updated_at = Column(DateTime, default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc), nullable=False)

    # Relationships
    user = relationship("User", back_populates="locations")
