"""
Tests for the HTTP routes and the service behind them.
"""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from proximity_quiz.app import create_app
from proximity_quiz.config import config
from proximity_quiz.providers.mock import MockProvider
from proximity_quiz.service import ProximityQuizService
from proximity_quiz.tracking import LocationTracker, TrackOutcome

T0 = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def make_client(provider=None, tracker=None) -> TestClient:
    service = ProximityQuizService(tracker=tracker, provider=provider or MockProvider())
    return TestClient(create_app(service))


class TestService:
    """Tests for ProximityQuizService."""

    def test_track_location_with_explicit_time(self):
        service = ProximityQuizService(provider=MockProvider())

        assert service.track_location("u", 40.0, -73.0, now=T0).kind == TrackOutcome.INITIALIZED
        result = service.track_location("u", 40.0, -73.0, now=T0 + timedelta(minutes=11))
        assert result.kind == TrackOutcome.TRIGGERED

    def test_track_location_defaults_to_now(self):
        service = ProximityQuizService(provider=MockProvider())
        service.track_location("u", 40.0, -73.0)

        state = service.tracker.store.get("u")
        assert state.timestamp.tzinfo is not None

    def test_track_location_evicts_with_ttl(self, monkeypatch):
        """With STATE_TTL_SECONDS set each report drops stale users."""
        monkeypatch.setattr(config.tracker, "state_ttl_seconds", 60)
        service = ProximityQuizService(provider=MockProvider())

        service.track_location("old", 40.0, -73.0, now=T0)
        service.track_location("fresh", 41.0, -74.0, now=T0 + timedelta(minutes=30))

        assert "old" not in service.tracker.store
        assert "fresh" in service.tracker.store

    def test_track_location_keeps_users_without_ttl(self, monkeypatch):
        monkeypatch.setattr(config.tracker, "state_ttl_seconds", 0)
        service = ProximityQuizService(provider=MockProvider())

        service.track_location("old", 40.0, -73.0, now=T0)
        service.track_location("fresh", 41.0, -74.0, now=T0 + timedelta(days=30))

        assert len(service.tracker.store) == 2

    @pytest.mark.asyncio
    async def test_generate_quiz(self):
        service = ProximityQuizService(provider=MockProvider())
        quiz = await service.generate_quiz("Times Square")

        assert len(quiz.questions) == 5


class TestTrackUserLocation:
    """Tests for POST /track-user-location."""

    def test_first_report(self):
        with make_client() as client:
            response = client.post(
                "/track-user-location",
                json={"userId": "u1", "latitude": 40.7580, "longitude": -73.9855},
            )

        assert response.status_code == 200
        assert response.json() == {"message": "User location initialized."}

    def test_second_report_updates(self):
        with make_client() as client:
            body = {"userId": "u1", "latitude": 40.7580, "longitude": -73.9855}
            client.post("/track-user-location", json=body)
            response = client.post("/track-user-location", json=body)

        assert response.json() == {"message": "Location updated."}

    def test_trigger(self):
        """With no dwell requirement a second nearby report triggers."""
        tracker = LocationTracker(dwell_minutes=0)
        with make_client(tracker=tracker) as client:
            body = {"userId": "u1", "latitude": 40.7580, "longitude": -73.9855}
            client.post("/track-user-location", json=body)
            response = client.post("/track-user-location", json=body)

        assert response.status_code == 200
        assert response.json() == {
            "message": "Trigger quiz",
            "location": {"latitude": 40.7580, "longitude": -73.9855},
        }

    @pytest.mark.parametrize("body", [
        {"latitude": 1.0, "longitude": 2.0},
        {"userId": "u1", "latitude": "north", "longitude": 2.0},
        {"userId": "u1", "latitude": 91.0, "longitude": 2.0},
        {"userId": "", "latitude": 1.0, "longitude": 2.0},
    ])
    def test_invalid_body(self, body):
        with make_client() as client:
            response = client.post("/track-user-location", json=body)

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid JSON payload"

    def test_malformed_json(self):
        with make_client() as client:
            response = client.post(
                "/track-user-location",
                content=b"{not json",
                headers={"Content-Type": "application/json"},
            )

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid JSON payload"

    def test_tracker_failure(self):
        class BrokenTracker(LocationTracker):
            def update(self, user_id, location, now):
                raise RuntimeError("store offline")

        with make_client(tracker=BrokenTracker()) as client:
            response = client.post(
                "/track-user-location",
                json={"userId": "u1", "latitude": 1.0, "longitude": 2.0},
            )

        assert response.status_code == 500
        assert response.json() == {
            "error": "Failed to track user location",
            "details": "store offline",
        }


class TestGenerateQuiz:
    """Tests for POST /generate-quiz."""

    def test_generate(self):
        with make_client() as client:
            response = client.post("/generate-quiz", json={"locationKeyword": "Eiffel Tower"})

        assert response.status_code == 200
        data = response.json()
        assert len(data["questions"]) == 5
        assert set(data["questions"][0]["options"]) == {"a", "b", "c", "d"}
        assert "Eiffel Tower" in data["rawText"]

    def test_unparseable_output_is_not_an_error(self):
        provider = MockProvider(fixed_response="Sorry, no quiz today.")
        with make_client(provider=provider) as client:
            response = client.post("/generate-quiz", json={"locationKeyword": "Eiffel Tower"})

        assert response.status_code == 200
        assert response.json() == {"questions": [], "rawText": "Sorry, no quiz today."}

    def test_provider_failure(self):
        with make_client(provider=MockProvider(fail_rate=1.0)) as client:
            response = client.post("/generate-quiz", json={"locationKeyword": "Eiffel Tower"})

        assert response.status_code == 502
        data = response.json()
        assert data["error"] == "Quiz generation failed"
        assert "Simulated" in data["details"]

    def test_missing_keyword(self):
        with make_client() as client:
            response = client.post("/generate-quiz", json={})

        assert response.status_code == 400


class TestRouting:
    """Tests for unknown routes."""

    def test_unknown_path(self):
        with make_client() as client:
            response = client.get("/nope")

        assert response.status_code == 404
        assert response.json() == {"error": "Not Found"}

    def test_wrong_method(self):
        with make_client() as client:
            response = client.get("/track-user-location")

        assert response.status_code == 404
        assert response.json() == {"error": "Not Found"}


class TestConfig:
    """Tests for configuration presets."""

    def test_defaults(self):
        from proximity_quiz.config import Config

        cfg = Config()
        assert cfg.generation.PROVIDER_DEFAULTS["perplexity"] == "llama-3.1-sonar-small-128k-online"

    def test_test_mode_uses_mock(self):
        from proximity_quiz.config import Config
        from proximity_quiz.providers import get_provider

        cfg = Config.test_mode()
        assert cfg.generation.provider == "mock"
        assert cfg.generation.get_model() == "mock-model-v1"
        assert isinstance(get_provider(cfg.generation.provider), MockProvider)
