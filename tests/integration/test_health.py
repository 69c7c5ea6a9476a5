"""Integration tests for health endpoints."""

from fastapi.testclient import TestClient

from voiceforge.api import APIConfig, create_app


class TestHealthLive:
    def test_live_returns_200(self, client):
        response = client.get("/health/live")
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "alive"

    def test_live_without_service(self):
        """Liveness does not depend on the voice service."""
        client = TestClient(create_app(APIConfig()))

        response = client.get("/health/live")
        assert response.status_code == 200


class TestHealthReady:
    def test_ready_with_placeholder_engine(self, client):
        response = client.get("/health/ready")
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "ready"
        assert data["checks"] == {"service": True, "engine": True}

    def test_not_ready_when_engine_down(self, forge_config, engine_factory):
        from voiceforge.core import EngineUnavailable
        from voiceforge.service import VoiceForge

        forge = VoiceForge(forge_config, engine=engine_factory(error=EngineUnavailable()))
        client = TestClient(create_app(APIConfig(), forge=forge))

        response = client.get("/health/ready")
        assert response.status_code == 503
        assert response.json()["checks"] == {"service": True, "engine": False}

    def test_not_ready_without_service(self):
        client = TestClient(create_app(APIConfig()))

        response = client.get("/health/ready")
        assert response.status_code == 503
        assert response.json()["checks"]["service"] is False


class TestHealthStartup:
    def test_startup_after_init(self, client):
        response = client.get("/health/startup")
        assert response.status_code == 200
        assert response.json()["status"] == "started"

    def test_starting_before_lifespan(self):
        client = TestClient(create_app(APIConfig()))

        response = client.get("/health/startup")
        assert response.status_code == 503
        assert response.json()["status"] == "starting"
