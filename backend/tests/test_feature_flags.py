"""
Tests for the feature flags system.
"""
import os
import pytest
from unittest.mock import patch
from fastapi import HTTPException

from backend.features.flags import (
    Feature,
    FeatureFlags,
    DEFAULT_FEATURE_STATES,
    get_feature_flags,
)
from backend.features.service import (
    FeatureFlagService,
    get_feature_service,
    require_feature,
)


class TestFeatureEnum:
    """Tests for the Feature enum."""

    def test_all_features_have_default_states(self):
        """Every Feature enum value should have a default state defined."""
        for feature in Feature:
            assert feature in DEFAULT_FEATURE_STATES, f"Missing default state for {feature}"

    def test_feature_values_are_snake_case(self):
        for feature in Feature:
            assert feature.value.replace("_", "").isalnum()
            assert feature.value == feature.value.lower()


class TestFeatureFlags:
    """Tests for the FeatureFlags settings class."""

    def test_all_enabled_by_default(self):
        flags = FeatureFlags()

        for feature in Feature:
            assert flags.get_flag(feature) is True

    def test_override_feature_flag(self):
        """Feature flags can be overridden via constructor."""
        flags = get_feature_flags(feature_structured_routine_prompt=False)

        assert flags.get_flag(Feature.STRUCTURED_ROUTINE_PROMPT) is False
        assert flags.get_flag(Feature.ROUTINE_GENERATION) is True

    def test_flag_from_environment(self):
        with patch.dict(os.environ, {"FEATURE_EQUIPMENT_DETECTION": "false"}):
            flags = FeatureFlags()

        assert flags.get_flag(Feature.EQUIPMENT_DETECTION) is False

    def test_get_all_flags(self):
        all_flags = FeatureFlags().get_all_flags()

        assert all_flags == {
            "equipment_detection": True,
            "routine_generation": True,
            "structured_routine_prompt": True,
        }


class TestFeatureFlagService:
    """Tests for the FeatureFlagService."""

    def test_is_enabled_with_disabled_flag(self):
        service = FeatureFlagService(flags=FeatureFlags(feature_routine_generation=False))

        assert service.is_enabled(Feature.ROUTINE_GENERATION) is False
        assert service.is_enabled(Feature.EQUIPMENT_DETECTION) is True

    def test_require_feature_passes_when_enabled(self):
        FeatureFlagService().require_feature(Feature.EQUIPMENT_DETECTION)

    def test_require_feature_raises_when_disabled(self):
        service = FeatureFlagService(flags=FeatureFlags(feature_equipment_detection=False))

        with pytest.raises(HTTPException) as exc_info:
            service.require_feature(Feature.EQUIPMENT_DETECTION)

        assert exc_info.value.status_code == 503
        assert exc_info.value.detail["error_code"] == "FEATURE_DISABLED"
        assert exc_info.value.detail["feature"] == "equipment_detection"


class TestGetFeatureService:
    """Tests for the get_feature_service function."""

    def test_returns_singleton(self):
        import backend.features.service as service_module
        service_module._feature_service = None

        service1 = get_feature_service()
        service2 = get_feature_service()

        assert isinstance(service1, FeatureFlagService)
        assert service1 is service2


class TestRequireFeatureDependency:
    """Tests for the require_feature FastAPI dependency."""

    def test_dependency_checks_given_service(self):
        dependency = require_feature(Feature.ROUTINE_GENERATION)
        disabled = FeatureFlagService(flags=FeatureFlags(feature_routine_generation=False))

        assert dependency(feature_service=FeatureFlagService()) is None
        with pytest.raises(HTTPException):
            dependency(feature_service=disabled)


class TestFeaturesEndpoint:
    """Tests for GET /api/features."""

    def test_requires_authentication(self, client):
        assert client.get("/api/features").status_code == 401

    def test_returns_all_flags(self, client, auth_headers):
        response = client.get("/api/features", headers=auth_headers)

        assert response.status_code == 200
        flags = response.json()["flags"]
        assert set(flags) == {feature.value for feature in Feature}
        assert all(value is True for value in flags.values())
