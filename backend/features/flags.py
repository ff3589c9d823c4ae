"""
Feature flag definitions and configuration.

This module defines all available feature flags and their default states.
Feature flags can be overridden via environment variables.
"""

from enum import Enum
from typing import Dict
from pydantic_settings import BaseSettings, SettingsConfigDict


class Feature(str, Enum):
    """
    Enumeration of all feature flags in the application.

    Each feature flag represents a toggleable capability that can be
    enabled or disabled without code changes.
    """

    # Model-backed endpoints
    EQUIPMENT_DETECTION = "equipment_detection"
    ROUTINE_GENERATION = "routine_generation"

    # Ask the routine model for explicit TITLE:/DESCRIPTION:/OUTLINE: cues
    # instead of a plain markdown document
    STRUCTURED_ROUTINE_PROMPT = "structured_routine_prompt"


# Default states for all features (True = enabled by default)
DEFAULT_FEATURE_STATES: Dict[Feature, bool] = {
    Feature.EQUIPMENT_DETECTION: True,
    Feature.ROUTINE_GENERATION: True,
    Feature.STRUCTURED_ROUTINE_PROMPT: True,
}


class FeatureFlags(BaseSettings):
    """
    Feature flag settings loaded from environment variables.

    Each feature flag can be toggled via an environment variable:
    FEATURE_<FLAG_NAME>=true/false

    Example:
        FEATURE_EQUIPMENT_DETECTION=false
        FEATURE_STRUCTURED_ROUTINE_PROMPT=false
    """

    feature_equipment_detection: bool = DEFAULT_FEATURE_STATES[Feature.EQUIPMENT_DETECTION]
    feature_routine_generation: bool = DEFAULT_FEATURE_STATES[Feature.ROUTINE_GENERATION]
    feature_structured_routine_prompt: bool = DEFAULT_FEATURE_STATES[
        Feature.STRUCTURED_ROUTINE_PROMPT
    ]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore non-feature-flag environment variables
    )

    def get_flag(self, feature: Feature) -> bool:
        """
        Get the current state of a feature flag.

        Args:
            feature: The feature to check

        Returns:
            True if the feature is enabled, False otherwise
        """
        attr_name = f"feature_{feature.value}"
        return getattr(self, attr_name, DEFAULT_FEATURE_STATES.get(feature, False))

    def get_all_flags(self) -> Dict[str, bool]:
        """Get the current state of all feature flags, keyed by feature name."""
        return {feature.value: self.get_flag(feature) for feature in Feature}


def get_feature_flags(**overrides) -> FeatureFlags:
    """
    Factory function to create FeatureFlags instance.

    Useful for testing where you need to override specific flags
    without modifying environment variables.
    """
    return FeatureFlags(**overrides)


# Global feature flags instance
feature_flags = get_feature_flags()
