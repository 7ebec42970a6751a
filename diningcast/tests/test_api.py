from __future__ import annotations

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from diningcast.app import app
from diningcast.recommendations.models import (
    Pick,
    RecommendationResponse,
    WeatherOut,
)
from diningcast.weather.client import WeatherUnavailableError

client = TestClient(app)

SECRET = "test-secret"
HEADERS = {"x-api-key": SECRET}

SAMPLE_RESPONSE = RecommendationResponse(
    weather=WeatherOut(
        temperature_c=2.0,
        temperature_f=36,
        precipitation_mm=3.1,
        condition_code=61,
        condition="rain",
    ),
    desired_tags=["soup", "comfort", "hot"],
    meal="lunch",
    picks=[
        Pick(
            hall_id="soup-hall",
            name="Soup Hall",
            score=4.0,
            reason="36°F, warm comfort food for the rain: try Chicken Noodle Soup",
            sample_items=["Chicken Noodle Soup"],
            lat=30.285,
            lon=-97.734,
        ),
    ],
)


@pytest.fixture(autouse=True)
def _api_secret(monkeypatch):
    monkeypatch.setenv("API_SECRET", SECRET)


def test_health_is_public():
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_recommend_requires_api_key():
    resp = client.post("/recommend")
    assert resp.status_code == 401
    assert resp.json() == {"error": "unauthorized"}


def test_recommend_rejects_wrong_api_key():
    resp = client.post("/recommend", headers={"x-api-key": "nope"})
    assert resp.status_code == 401
    assert resp.json() == {"error": "unauthorized"}


def test_recommend_rejects_when_no_secret_configured(monkeypatch):
    monkeypatch.delenv("API_SECRET")
    resp = client.post("/recommend", headers={"x-api-key": ""})
    assert resp.status_code == 401


@patch("diningcast.app.get_recommendations", return_value=SAMPLE_RESPONSE)
def test_recommend_returns_camel_case_body(mock_run):
    resp = client.post("/recommend", headers=HEADERS)
    assert resp.status_code == 200
    body = resp.json()
    assert set(body) == {"weather", "desiredTags", "meal", "picks"}
    assert body["weather"]["condition"] == "rain"
    assert body["desiredTags"] == ["soup", "comfort", "hot"]
    pick = body["picks"][0]
    assert pick["hallId"] == "soup-hall"
    assert pick["sampleItems"] == ["Chicken Noodle Soup"]
    assert pick["lat"] == 30.285
    mock_run.assert_called_once_with(origin=None)


@patch("diningcast.app.get_recommendations", return_value=SAMPLE_RESPONSE)
def test_recommend_get_passes_caller_position(mock_run):
    resp = client.get("/recommend", params={"lat": 30.28, "lon": -97.73}, headers=HEADERS)
    assert resp.status_code == 200
    mock_run.assert_called_once_with(origin=(30.28, -97.73))


def test_recommend_validates_position():
    resp = client.get("/recommend", params={"lat": 120, "lon": 0}, headers=HEADERS)
    assert resp.status_code == 422


@patch("diningcast.app.get_recommendations", side_effect=WeatherUnavailableError("weather fetch failed: 503"))
def test_recommend_reports_failures(mock_run):
    resp = client.post("/recommend", headers=HEADERS)
    assert resp.status_code == 500
    body = resp.json()
    assert body["error"] == "recommendation_failed"
    assert "503" in body["detail"]


@patch("diningcast.app.get_latest_recommendation", return_value=None)
def test_latest_recommendation_404_when_empty(mock_latest):
    resp = client.get("/recommendation/latest", headers=HEADERS)
    assert resp.status_code == 404


@patch("diningcast.app.get_latest_recommendation", return_value={"meal": "dinner", "pick": None})
def test_latest_recommendation_returns_record(mock_latest):
    resp = client.get("/recommendation/latest", headers=HEADERS)
    assert resp.status_code == 200
    assert resp.json()["meal"] == "dinner"


def test_operational_endpoints_require_api_key():
    assert client.get("/analytics").status_code == 401
    assert client.get("/recommendation/latest").json() == {"error": "unauthorized"}
    assert client.get("/cache/stats").status_code == 401
    assert client.get("/analytics", headers=HEADERS).status_code == 200
    assert client.get("/cache/stats", headers=HEADERS).status_code == 200
