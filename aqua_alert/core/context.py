"""
Application context.

One AppContext is created at startup (FastAPI lifespan), stored on
app.state and handed to routers through get_context(). It owns the auth
holder, the notification dispatcher, the sensor feed and its scheduler, the
report service and the seeded collections. shutdown() tears all of it down.
"""
import asyncio
import logging
from datetime import datetime, timezone
from typing import List, Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from fastapi import Request

from .config import Settings
from ..domain import seed
from ..domain.models import EmergencyAlert
from ..domain.services.auth_service import AuthStateHolder
from ..domain.services.notification_service import NotificationDispatcher
from ..domain.services.report_service import ReportService
from ..domain.services.sensor_feed import SensorFeed
from ..infrastructure.local_storage import LocalStorage

logger = logging.getLogger(__name__)


class AppContext:
    def __init__(self, settings: Settings, loop: Optional[asyncio.AbstractEventLoop] = None):
        self.settings = settings
        self.started_at = datetime.now(timezone.utc)

        self.storage = LocalStorage(settings.STORAGE_URL)
        self.auth = AuthStateHolder(self.storage, settings.AUTH_STORAGE_KEY)
        self.notifications = NotificationDispatcher(settings.NOTIFICATION_TIMEOUT_SECONDS, loop=loop)

        self.scheduler = AsyncIOScheduler()
        self.sensors = SensorFeed(self.scheduler, settings.SENSOR_REFRESH_SECONDS)
        self.reports = ReportService(
            submission_delay=settings.REPORT_SUBMISSION_DELAY_SECONDS,
            transcription_delay=settings.TRANSCRIPTION_DELAY_SECONDS,
            failure_rate=settings.SUBMISSION_FAILURE_RATE,
        )

        self.hazards = list(seed.HAZARDS)
        self.alerts: List[EmergencyAlert] = seed.build_alerts(self.started_at)
        self.forum_posts = list(seed.FORUM_POSTS)
        self.events = list(seed.CLEANUP_EVENTS)
        self.resources = list(seed.EDUCATION_RESOURCES)

    def start(self) -> None:
        """Start background scheduling. Needs a running event loop."""
        self.scheduler.start()
        logger.info("Sensor refresh scheduler started")

    def shutdown(self) -> None:
        self.sensors.close_all()
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)
            logger.info("Sensor refresh scheduler stopped")
        self.reports.cancel_all()
        self.notifications.clear()
        self.storage.close()


def get_context(request: Request) -> AppContext:
    """FastAPI dependency returning the context created in the lifespan."""
    return request.app.state.context
