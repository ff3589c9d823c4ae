"""
Feature flag service for checking feature states.

This service can be injected into route handlers as a dependency.
"""

from typing import Dict, Optional
from fastapi import Depends, HTTPException, status

from backend.features.flags import Feature, FeatureFlags, feature_flags


class FeatureFlagService:
    """
    Service for evaluating feature flags.

    Attributes:
        flags: The FeatureFlags configuration instance
    """

    def __init__(self, flags: Optional[FeatureFlags] = None):
        self.flags = flags or feature_flags

    def is_enabled(self, feature: Feature) -> bool:
        """Check if a feature is enabled."""
        return self.flags.get_flag(feature)

    def require_feature(self, feature: Feature) -> None:
        """
        Require a feature to be enabled, raising an exception if not.

        Raises:
            HTTPException: 503 Service Unavailable if feature is disabled
        """
        if not self.is_enabled(feature):
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail={
                    "error_code": "FEATURE_DISABLED",
                    "message": f"Feature '{feature.value}' is currently disabled",
                    "feature": feature.value,
                },
            )

    def get_all_flags(self) -> Dict[str, bool]:
        """Get the current state of all feature flags."""
        return self.flags.get_all_flags()


# Global service instance
_feature_service: Optional[FeatureFlagService] = None


def get_feature_service() -> FeatureFlagService:
    """
    Get or create the global feature flag service instance.

    Used as a FastAPI dependency; tests override it to flip flags.
    """
    global _feature_service
    if _feature_service is None:
        _feature_service = FeatureFlagService()
    return _feature_service


def require_feature(feature: Feature):
    """
    FastAPI dependency factory that requires a feature to be enabled.

    Usage:
        @router.post("/detect")
        def detect(_: None = Depends(require_feature(Feature.EQUIPMENT_DETECTION))):
            ...
    """

    def check_feature(
        feature_service: FeatureFlagService = Depends(get_feature_service),
    ) -> None:
        feature_service.require_feature(feature)

    return check_feature
