"""
Sensor Feed - mock IoT readings with per-view auto-refresh.

Every open dashboard view owns a snapshot of all monitoring sites. While the
view is open, an APScheduler interval job replaces that snapshot wholesale
every SENSOR_REFRESH_SECONDS; closing the view removes the job. Snapshots are
never patched in place, so a reader always sees one complete generation.

Usage:
    feed = SensorFeed(scheduler, refresh_seconds=5)
    view_id = feed.open_view()       # starts auto-refresh for this view
    feed.snapshot(view_id)           # current readings for the view
    feed.close_view(view_id)         # cancels the job
"""
import logging
import random
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, List, Optional
from uuid import uuid4

from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.base import BaseScheduler
from apscheduler.triggers.interval import IntervalTrigger

from ..models import HistoryPoint, SensorParameter, SensorReading

logger = logging.getLogger(__name__)


class ViewNotFoundError(Exception):
    """Raised for an unknown or already-closed dashboard view."""
    pass


# name, location, (lat, lng)
SENSOR_SITES = [
    ("Central Reservoir", "Downtown District", (40.7128, -74.0060)),
    ("North Treatment Plant", "Industrial Zone", (40.7589, -73.9851)),
    ("East River Monitor", "Riverside Park", (40.7282, -73.7949)),
    ("South Bay Station", "Harbor Area", (40.6892, -74.0445)),
    ("West Lake Sensor", "Recreation Area", (40.7505, -73.9934)),
    ("Main Distribution Hub", "City Center", (40.7614, -73.9776)),
    ("Emergency Backup Site", "Suburban Zone", (40.6782, -73.9442)),
    ("Coastal Monitor Alpha", "Beachfront", (40.7831, -73.9712)),
    ("Mountain Spring Source", "Highland Area", (40.8176, -73.9482)),
    ("Valley Stream Point", "Agricultural District", (40.6643, -73.7085)),
]

# parameter -> (base, spread, threshold, unit); value = base + U(0, 1) * spread
PARAMETER_PROFILES = {
    "ph": (6.5, 2.0, (6.5, 8.5), "pH"),
    "temperature": (15.0, 15.0, (10.0, 25.0), "°C"),
    "conductivity": (200.0, 800.0, (100.0, 1000.0), "µS/cm"),
    "salinity": (0.0, 35.0, (0.0, 30.0), "ppt"),
    "turbidity": (0.0, 10.0, (0.0, 5.0), "NTU"),
    "dissolved_oxygen": (5.0, 10.0, (6.0, 14.0), "mg/L"),
    "water_level": (1.0, 4.0, (0.5, 4.0), "m"),
    "orp": (200.0, 400.0, (200.0, 500.0), "mV"),
}

HISTORY_HOURS = 24
MAX_UPDATE_AGE_SECONDS = 300


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _pick_status(rng: random.Random) -> str:
    # ~10% offline; of the rest ~20% warning
    if rng.random() > 0.1:
        return "warning" if rng.random() > 0.8 else "online"
    return "offline"


def generate_readings(rng: random.Random, now: datetime) -> List[SensorReading]:
    """One full generation of readings for every monitoring site."""
    readings = []
    for index, (name, location, coordinates) in enumerate(SENSOR_SITES):
        parameters = {
            parameter: SensorParameter(
                value=base + rng.random() * spread,
                threshold=threshold,
                unit=unit,
            )
            for parameter, (base, spread, threshold, unit) in PARAMETER_PROFILES.items()
        }
        readings.append(SensorReading(
            id=f"sensor-{index + 1}",
            name=name,
            location=location,
            coordinates=coordinates,
            last_update=now - timedelta(seconds=rng.random() * MAX_UPDATE_AGE_SECONDS),
            status=_pick_status(rng),
            parameters=parameters,
        ))
    return readings


def generate_history(current_value: float, rng: random.Random) -> List[HistoryPoint]:
    """Hourly series for the detail chart, oldest first, jittered around the current value."""
    return [
        HistoryPoint(time=f"{hours_ago}h ago", value=current_value + (rng.random() - 0.5) * 2)
        for hours_ago in range(HISTORY_HOURS - 1, -1, -1)
    ]


@dataclass(frozen=True)
class Snapshot:
    sensors: List[SensorReading]
    refreshed_at: datetime


class SensorFeed:
    """Holds the base snapshot plus one snapshot per open dashboard view."""

    JOB_PREFIX = "sensor-refresh-"

    def __init__(
        self,
        scheduler: BaseScheduler,
        refresh_seconds: int,
        rng: Optional[random.Random] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.scheduler = scheduler
        self.refresh_seconds = refresh_seconds
        self.rng = rng or random.Random()
        self.clock = clock
        self._base = self._generate()
        self._views: Dict[str, Snapshot] = {}
        self._lock = threading.Lock()

    def _generate(self) -> Snapshot:
        now = self.clock()
        return Snapshot(sensors=generate_readings(self.rng, now), refreshed_at=now)

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def snapshot(self, view_id: Optional[str] = None) -> Snapshot:
        if view_id is None:
            return self._base
        with self._lock:
            snapshot = self._views.get(view_id)
        if snapshot is None:
            raise ViewNotFoundError(f"Dashboard view '{view_id}' is not open")
        return snapshot

    def get_sensor(self, sensor_id: str, view_id: Optional[str] = None) -> Optional[SensorReading]:
        for sensor in self.snapshot(view_id).sensors:
            if sensor.id == sensor_id:
                return sensor
        return None

    def history(self, current_value: float) -> List[HistoryPoint]:
        return generate_history(current_value, self.rng)

    @property
    def open_views(self) -> List[str]:
        with self._lock:
            return list(self._views)

    # -------------------------------------------------------------------------
    # View lifecycle
    # -------------------------------------------------------------------------

    def open_view(self) -> str:
        """Start auto-refresh for a new dashboard view and return its id."""
        view_id = uuid4().hex
        with self._lock:
            self._views[view_id] = self._generate()

        self.scheduler.add_job(
            self._tick,
            IntervalTrigger(seconds=self.refresh_seconds),
            args=[view_id],
            id=self.JOB_PREFIX + view_id,
            name=f"Sensor refresh {view_id[:8]}",
            replace_existing=True,
        )
        logger.info(f"[SensorFeed] View {view_id} opened (refresh every {self.refresh_seconds}s)")
        return view_id

    def refresh(self, view_id: Optional[str] = None) -> Snapshot:
        """Replace a view's snapshot (or the base snapshot) with a new generation."""
        snapshot = self._generate()
        if view_id is None:
            self._base = snapshot
            return snapshot
        with self._lock:
            if view_id not in self._views:
                raise ViewNotFoundError(f"Dashboard view '{view_id}' is not open")
            self._views[view_id] = snapshot
        return snapshot

    async def _tick(self, view_id: str):
        try:
            self.refresh(view_id)
            logger.debug(f"[SensorFeed] View {view_id} refreshed")
        except ViewNotFoundError:
            # Closed between the trigger firing and the job running
            logger.debug(f"[SensorFeed] Skipped refresh for closed view {view_id}")

    def close_view(self, view_id: str) -> None:
        with self._lock:
            if self._views.pop(view_id, None) is None:
                raise ViewNotFoundError(f"Dashboard view '{view_id}' is not open")
        self._remove_job(view_id)
        logger.info(f"[SensorFeed] View {view_id} closed")

    def close_all(self) -> None:
        with self._lock:
            view_ids = list(self._views)
            self._views.clear()
        for view_id in view_ids:
            self._remove_job(view_id)
        if view_ids:
            logger.info(f"[SensorFeed] Closed {len(view_ids)} open view(s)")

    def _remove_job(self, view_id: str) -> None:
        try:
            self.scheduler.remove_job(self.JOB_PREFIX + view_id)
        except JobLookupError:
            logger.warning(f"[SensorFeed] No refresh job found for view {view_id}")
