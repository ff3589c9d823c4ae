"""
Pydantic data models for LiftLens requests and results.

Wire names are camelCase to match the mobile client; snake_case field names
are accepted as well.
"""
from enum import Enum
from typing import List

from pydantic import BaseModel, Field, field_validator

from backend.utils.sanitization import SanitizedStr


class UserRole(str, Enum):
    """User roles for access control."""
    USER = "user"
    ADMIN = "admin"


class RoutinePromptStyle(str, Enum):
    """How the routine model is asked to lay out its answer."""
    MARKDOWN = "markdown"  # Plain markdown with a "# " title
    STRUCTURED = "structured"  # Explicit TITLE:/DESCRIPTION:/OUTLINE: cues


class RoutineRequest(BaseModel):
    """Parameters for generating a multi-day workout routine."""
    number_of_days: int = Field(
        ...,
        alias="numberOfDays",
        ge=1,
        description="Number of training days",
    )
    duration_minutes: int = Field(
        ...,
        alias="durationMinutes",
        ge=1,
        description="Length of each session in minutes",
    )
    fitness_goal: SanitizedStr = Field(..., alias="fitnessGoal", min_length=1, max_length=500)
    selected_equipment: List[SanitizedStr] = Field(..., alias="selectedEquipment", min_length=1)

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "examples": [
                {
                    "numberOfDays": 3,
                    "durationMinutes": 45,
                    "fitnessGoal": "Build strength",
                    "selectedEquipment": ["barbell", "squat rack", "dumbbells"],
                }
            ]
        },
    }

    @field_validator("fitness_goal")
    @classmethod
    def fitness_goal_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("fitnessGoal must not be empty")
        return value.strip()

    @field_validator("selected_equipment")
    @classmethod
    def equipment_names_not_blank(cls, values: List[str]) -> List[str]:
        names = [value.strip() for value in values]
        if any(not name for name in names):
            raise ValueError("selectedEquipment must not contain empty names")
        return names


class RoutineResponse(BaseModel):
    """A generated workout routine."""
    title: str
    description: str
    outline: str = Field(..., description="Markdown outline of the routine")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "title": "Strength Plan",
                    "description": "Three full-body sessions built around compound lifts.",
                    "outline": "## Day 1\n\n- Back Squat: 5x5\n- Bench Press: 5x5",
                }
            ]
        }
    }


class EquipmentDetectionRequest(BaseModel):
    """Request to scan a location's photos for equipment."""
    location_id: str = Field(..., alias="locationId")

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "examples": [{"locationId": "550e8400-e29b-41d4-a716-446655440000"}]
        },
    }


class EquipmentDetectionResponse(BaseModel):
    """Equipment found by a scan of every photo of a location."""
    success: bool
    detected_equipment: List[str] = Field(..., alias="detectedEquipment")

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "examples": [
                {"success": True, "detectedEquipment": ["treadmill", "dumbbells"]}
            ]
        },
    }


class NoPhotosResponse(BaseModel):
    """Returned when a location has no photos to scan."""
    message: str
