"""
Emergency alerts API.

time_remaining is recomputed from the wall clock on every request.
"""
from fastapi import APIRouter, HTTPException, Depends, Query
from datetime import datetime, timezone
from typing import Literal
import logging

from ..core.context import AppContext, get_context
from ..domain.models import AlertListResponse, AlertResponse, AlertStats, EmergencyAlert
from ..domain.services.alert_expiry import alert_stats, filter_alerts, format_time_remaining

router = APIRouter()
logger = logging.getLogger(__name__)


def _with_remaining(alert: EmergencyAlert, now: datetime) -> AlertResponse:
    return AlertResponse(**alert.model_dump(), time_remaining=format_time_remaining(alert.expires_at, now))


@router.get("/", response_model=AlertListResponse)
def list_alerts(
    filter: Literal["all", "active", "watch", "warning", "emergency"] = Query(
        "all", description="all, active (by status), or a severity: watch, warning, emergency"
    ),
    context: AppContext = Depends(get_context)
):
    now = datetime.now(timezone.utc)
    alerts = filter_alerts(context.alerts, filter)
    return AlertListResponse(
        alerts=[_with_remaining(alert, now) for alert in alerts],
        filter=filter,
        total=len(alerts),
        stats=alert_stats(context.alerts),
    )


@router.get("/stats", response_model=AlertStats)
def get_alert_stats(context: AppContext = Depends(get_context)):
    """Active alerts, and active alerts per severity."""
    return alert_stats(context.alerts)


@router.get("/{alert_id}", response_model=AlertResponse)
def get_alert(alert_id: str, context: AppContext = Depends(get_context)):
    for alert in context.alerts:
        if alert.id == alert_id:
            return _with_remaining(alert, datetime.now(timezone.utc))
    raise HTTPException(status_code=404, detail="Alert not found")
