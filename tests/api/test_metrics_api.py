# tests/api/test_metrics_api.py
"""
Integration tests for the event and metrics API endpoints.
"""

import pytest


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


class TestEventsAPI:
    def test_list_events(self, client):
        response = client.get("/api/events")

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert {e["id"] for e in data["events"]} == {"evt_upcoming", "evt_past", "evt_live"}

    def test_list_events_for_unknown_organization(self, client):
        response = client.get("/api/events", params={"organization_id": "org_nobody"})

        assert response.json()["events"] == []

    def test_get_event(self, client):
        response = client.get("/api/events/evt_past")

        assert response.status_code == 200
        assert response.json()["event"]["event_code"] == "AVC2025-042"

    def test_get_unknown_event(self, client):
        response = client.get("/api/events/evt_missing")

        assert response.status_code == 404
        assert response.json() == {
            "success": False,
            "error": "Event not found",
            "error_code": "EVENT_NOT_FOUND",
        }


class TestMetricsAPI:
    def test_get_metrics(self, client):
        response = client.get("/api/events/evt_past/metrics")

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["event"]["id"] == "evt_past"
        assert set(data["metrics"]) >= {
            "registration",
            "attendance",
            "onchain",
            "social",
            "comparison_data",
        }
        attendance = data["metrics"]["attendance"]
        registration = data["metrics"]["registration"]
        assert attendance["no_show_rate"] + registration["conversion_rate"] == pytest.approx(1.0)

    def test_get_metrics_for_upcoming_event_has_no_attendance(self, client):
        data = client.get("/api/events/evt_upcoming/metrics").json()

        assert data["metrics"]["attendance"]["checked_in"] == 0
        assert data["metrics"]["attendance"]["check_in_timestamps"] == []

    def test_get_metrics_filtered_by_category(self, client):
        response = client.get(
            "/api/events/evt_past/metrics",
            params=[("categories", "social"), ("categories", "onchain")],
        )

        assert response.status_code == 200
        assert set(response.json()["metrics"]) == {
            "event_id",
            "event_name",
            "last_updated",
            "social",
            "onchain",
        }

    def test_get_metrics_rejects_unknown_category(self, client):
        response = client.get("/api/events/evt_past/metrics", params={"categories": "weather"})

        assert response.status_code == 422

    def test_get_metrics_unknown_event(self, client):
        response = client.get("/api/events/evt_missing/metrics")

        assert response.status_code == 404
        assert response.json()["success"] is False

    def test_get_summary(self, client):
        response = client.get("/api/events/evt_past/metrics/summary")

        assert response.status_code == 200
        summary = response.json()["summary"]
        assert summary["total_attendance"] > 0
        assert summary["total_registrations"] >= summary["total_attendance"]

    def test_get_comparison(self, client):
        response = client.get("/api/events/evt_upcoming/metrics/comparison")

        assert response.status_code == 200
        comparison = response.json()["comparison"]
        assert len(comparison["similar_events"]) == 3
        assert 50 <= comparison["percentile"] <= 95

    def test_realtime_for_live_event(self, client):
        response = client.get("/api/events/evt_live/metrics/realtime")

        assert response.status_code == 200
        data = response.json()
        assert data["is_active"] is True
        assert len(data["updates"]) == 1
        assert data["updates"][0]["category"] in {"registration", "attendance", "onchain", "social"}

    def test_realtime_for_upcoming_event(self, client):
        data = client.get("/api/events/evt_upcoming/metrics/realtime").json()

        assert data["is_active"] is False
        assert data["updates"] == []

    def test_internal_error_is_reported(self, client, mocker):
        mocker.patch(
            "metrycs.features.metrics.router.MetricsSynthesizer.synthesize",
            side_effect=RuntimeError("boom"),
        )

        response = client.get("/api/events/evt_past/metrics")

        assert response.status_code == 500
        assert response.json() == {"success": False, "error": "Failed to fetch metrics"}
