"""
Tests for the mock sensor feed, per-view auto-refresh and the sensors API.

The unit tests use an AsyncIOScheduler that is never started: jobs stay
pending, which is enough to check that views add and remove their job.
"""
import asyncio
import random
import pytest
from unittest.mock import MagicMock, patch
from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.asyncio import AsyncIOScheduler

from aqua_alert.domain.models import SENSOR_PARAMETERS
from aqua_alert.domain.services.sensor_feed import (
    SENSOR_SITES,
    SensorFeed,
    ViewNotFoundError,
    generate_history,
    generate_readings,
)


@pytest.fixture
def scheduler():
    return AsyncIOScheduler()


@pytest.fixture
def feed(scheduler, clock):
    return SensorFeed(scheduler, refresh_seconds=5, rng=random.Random(42), clock=clock)


class TestGenerateReadings:
    def test_one_reading_per_site(self, clock):
        readings = generate_readings(random.Random(1), clock.now)
        assert len(readings) == len(SENSOR_SITES)
        assert [r.id for r in readings] == [f"sensor-{i}" for i in range(1, len(SENSOR_SITES) + 1)]

    def test_every_parameter_present(self, clock):
        for reading in generate_readings(random.Random(1), clock.now):
            assert set(reading.parameters) == set(SENSOR_PARAMETERS)

    def test_last_update_not_in_future(self, clock):
        for reading in generate_readings(random.Random(1), clock.now):
            assert reading.last_update <= clock.now

    def test_history_has_24_hourly_points(self):
        history = generate_history(7.0, random.Random(1))
        assert len(history) == 24
        assert history[0].time == "23h ago"
        assert history[-1].time == "0h ago"
        assert all(6.0 <= point.value <= 8.0 for point in history)


class TestSensorFeed:
    def test_base_snapshot(self, feed, clock):
        snapshot = feed.snapshot()
        assert len(snapshot.sensors) == len(SENSOR_SITES)
        assert snapshot.refreshed_at == clock.now

    def test_open_view_adds_refresh_job(self, feed, scheduler):
        view_id = feed.open_view()
        job = scheduler.get_job(SensorFeed.JOB_PREFIX + view_id)
        assert job is not None
        assert job.args == (view_id,)
        assert feed.open_views == [view_id]

    def test_close_view_removes_job(self, feed, scheduler):
        view_id = feed.open_view()
        feed.close_view(view_id)
        assert scheduler.get_job(SensorFeed.JOB_PREFIX + view_id) is None
        assert feed.open_views == []
        with pytest.raises(ViewNotFoundError):
            feed.snapshot(view_id)

    def test_close_unknown_view(self, feed):
        with pytest.raises(ViewNotFoundError):
            feed.close_view("missing")

    def test_views_are_independent(self, feed):
        first = feed.open_view()
        second = feed.open_view()
        before = feed.snapshot(second)

        feed.refresh(first)
        assert feed.snapshot(second) is before

    def test_refresh_replaces_snapshot_wholesale(self, feed, clock):
        view_id = feed.open_view()
        before = feed.snapshot(view_id)
        clock.advance(seconds=5)

        after = feed.refresh(view_id)
        assert after is not before
        assert after.refreshed_at == clock.now
        assert feed.snapshot(view_id) is after

    def test_refresh_base_snapshot(self, feed):
        before = feed.snapshot()
        assert feed.refresh() is not before
        assert feed.snapshot() is not before

    def test_tick_refreshes_view(self, feed, clock):
        view_id = feed.open_view()
        before = feed.snapshot(view_id)
        clock.advance(seconds=5)

        asyncio.run(feed._tick(view_id))
        assert feed.snapshot(view_id) is not before
        assert feed.snapshot(view_id).refreshed_at == clock.now

    def test_tick_for_closed_view_is_skipped(self, feed):
        view_id = feed.open_view()
        feed.close_view(view_id)
        asyncio.run(feed._tick(view_id))
        assert feed.open_views == []

    def test_running_scheduler_refreshes_open_view(self):
        """The interval job replaces the view's snapshot without a manual refresh."""
        async def scenario():
            scheduler = AsyncIOScheduler()
            scheduler.start()
            feed = SensorFeed(scheduler, refresh_seconds=1, rng=random.Random(7))
            try:
                view_id = feed.open_view()
                before = feed.snapshot(view_id)
                await asyncio.sleep(1.5)
                return before, feed.snapshot(view_id)
            finally:
                feed.close_all()
                scheduler.shutdown(wait=False)

        before, after = asyncio.run(scenario())
        assert after is not before
        assert after.refreshed_at > before.refreshed_at

    def test_close_all(self, feed, scheduler):
        views = [feed.open_view() for _ in range(3)]
        feed.close_all()
        assert feed.open_views == []
        for view_id in views:
            assert scheduler.get_job(SensorFeed.JOB_PREFIX + view_id) is None

    def test_close_view_with_missing_job(self, clock):
        """A job already gone from the scheduler does not stop the view closing."""
        scheduler = MagicMock()
        scheduler.remove_job.side_effect = JobLookupError("sensor-refresh-x")
        feed = SensorFeed(scheduler, refresh_seconds=5, rng=random.Random(1), clock=clock)

        view_id = feed.open_view()
        with patch("aqua_alert.domain.services.sensor_feed.logger") as mock_logger:
            feed.close_view(view_id)

        scheduler.remove_job.assert_called_once_with(SensorFeed.JOB_PREFIX + view_id)
        mock_logger.warning.assert_called_once()
        assert feed.open_views == []

    def test_get_sensor(self, feed):
        assert feed.get_sensor("sensor-1").name == "Central Reservoir"
        assert feed.get_sensor("sensor-999") is None


# =============================================================================
# API
# =============================================================================

class TestSensorsAPI:
    def test_list_sensors(self, client):
        response = client.get("/api/sensors/")
        assert response.status_code == 200
        sensors = response.json()
        assert len(sensors) == 10
        for sensor in sensors:
            assert len(sensor["evaluations"]) == 8
            assert sensor["out_of_range_count"] == sum(e["out_of_range"] for e in sensor["evaluations"])

    def test_overview(self, client):
        data = client.get("/api/sensors/overview").json()
        assert data["total"] == 10
        assert data["online"] + data["warning"] + data["offline"] == 10

    def test_open_read_and_close_view(self, client, context):
        response = client.post("/api/sensors/views")
        assert response.status_code == 201
        view = response.json()
        assert view["refresh_seconds"] == context.settings.SENSOR_REFRESH_SECONDS
        assert context.scheduler.get_job(SensorFeed.JOB_PREFIX + view["view_id"]) is not None

        sensors = client.get("/api/sensors/", params={"view_id": view["view_id"]})
        assert sensors.status_code == 200
        assert len(sensors.json()) == 10

        assert client.delete(f"/api/sensors/views/{view['view_id']}").status_code == 200
        assert context.scheduler.get_job(SensorFeed.JOB_PREFIX + view["view_id"]) is None
        assert client.get("/api/sensors/", params={"view_id": view["view_id"]}).status_code == 404

    def test_close_unknown_view(self, client):
        assert client.delete("/api/sensors/views/missing").status_code == 404

    def test_manual_refresh(self, client):
        view_id = client.post("/api/sensors/views").json()["view_id"]
        response = client.post(f"/api/sensors/views/{view_id}/refresh")
        assert response.status_code == 200
        assert response.json()["total"] == 10

    def test_refresh_unknown_view(self, client):
        assert client.post("/api/sensors/views/missing/refresh").status_code == 404

    def test_get_sensor(self, client):
        response = client.get("/api/sensors/sensor-1")
        assert response.status_code == 200
        assert response.json()["name"] == "Central Reservoir"

    def test_get_unknown_sensor(self, client):
        assert client.get("/api/sensors/sensor-999").status_code == 404

    def test_parameter_history(self, client):
        response = client.get("/api/sensors/sensor-1/history/ph")
        assert response.status_code == 200
        assert len(response.json()) == 24

    def test_unknown_parameter_history(self, client):
        assert client.get("/api/sensors/sensor-1/history/chlorine").status_code == 404
