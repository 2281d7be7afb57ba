"""Tests for API documentation and route registration."""
import pytest


class TestOpenAPISchema:
    """Tests for API documentation."""

    def test_openapi_schema_available(self, client):
        """Test that OpenAPI schema is generated."""
        response = client.get("/openapi.json")
        assert response.status_code == 200
        schema = response.json()
        assert "openapi" in schema
        assert "paths" in schema
        assert "info" in schema

    def test_docs_endpoint_available(self, client):
        """Test that Swagger UI is accessible."""
        response = client.get("/docs")
        assert response.status_code == 200

    def test_api_routes_registered(self, client):
        """Test that every portal view has its routes in the schema."""
        paths = client.get("/openapi.json").json().get("paths", {})

        assert "/health" in paths
        assert "/api/auth/login" in paths
        assert "/api/notifications/" in paths
        assert "/api/hazards/" in paths
        assert "/api/sensors/" in paths
        assert "/api/sensors/views" in paths
        assert "/api/alerts/" in paths
        assert "/api/reports/" in paths
        assert "/api/community/posts" in paths
        assert "/api/education/resources" in paths
        assert "/api/profile/" in paths
        assert "/api/home/summary" in paths


class TestLifespan:
    """Tests for application context lifecycle."""

    def test_context_created_on_startup(self, client):
        context = client.app.state.context
        assert context.scheduler.running
        assert len(context.hazards) == 4
        assert len(context.alerts) == 4

    def test_shutdown_stops_scheduler_and_closes_views(self, test_settings):
        from fastapi.testclient import TestClient
        from aqua_alert.main import app

        with TestClient(app) as client:
            client.post("/api/sensors/views")
            context = client.app.state.context
            assert len(context.sensors.open_views) == 1

        assert not context.scheduler.running
        assert context.sensors.open_views == []

    def test_invalid_failure_rate_rejected(self, test_settings, monkeypatch):
        from aqua_alert.main import validate_config

        monkeypatch.setattr(test_settings, "SUBMISSION_FAILURE_RATE", 1.5)
        with pytest.raises(RuntimeError, match="SUBMISSION_FAILURE_RATE"):
            validate_config()

    def test_non_positive_refresh_rejected(self, test_settings, monkeypatch):
        from aqua_alert.main import validate_config

        monkeypatch.setattr(test_settings, "SENSOR_REFRESH_SECONDS", 0)
        with pytest.raises(RuntimeError, match="SENSOR_REFRESH_SECONDS"):
            validate_config()


class TestSettings:
    """Tests for CORS origin parsing."""

    def test_cors_origins_comma_separated(self):
        from aqua_alert.core.config import Settings

        s = Settings(BACKEND_CORS_ORIGINS="https://a.example, https://b.example")
        assert s.BACKEND_CORS_ORIGINS == ["https://a.example", "https://b.example"]

    def test_cors_origins_json_array(self):
        from aqua_alert.core.config import Settings

        s = Settings(BACKEND_CORS_ORIGINS='["https://a.example"]')
        assert s.BACKEND_CORS_ORIGINS == ["https://a.example"]

    def test_cors_origins_single_url(self):
        from aqua_alert.core.config import Settings

        s = Settings(BACKEND_CORS_ORIGINS=" https://a.example ")
        assert s.BACKEND_CORS_ORIGINS == ["https://a.example"]

    def test_sqlite_storage_is_not_production(self):
        from aqua_alert.core.config import Settings

        assert not Settings(STORAGE_URL="sqlite://").is_production
        assert Settings(STORAGE_URL="postgresql://db/aqua").is_production
