from fastapi import APIRouter, Depends

from ..core.context import AppContext, get_context
from ..domain.models import HomeSummary

router = APIRouter()


@router.get("/summary", response_model=HomeSummary)
def get_summary(context: AppContext = Depends(get_context)):
    """Headline counts for the landing page."""
    sensors = context.sensors.snapshot().sensors
    return HomeSummary(
        active_hazards=sum(1 for hazard in context.hazards if hazard.status == "active"),
        active_alerts=sum(1 for alert in context.alerts if alert.status == "active"),
        sensors_online=sum(1 for sensor in sensors if sensor.status == "online"),
        sensors_total=len(sensors),
        upcoming_events=sum(1 for event in context.events if event.status == "upcoming"),
    )
