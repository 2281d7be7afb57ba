"""
Emergency alert expiry and list helpers.

format_time_remaining() depends on wall-clock time, so callers compute it
per response and never store the result.
"""
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from ..models import AlertStats, EmergencyAlert

ALERT_FILTERS = ("all", "active", "watch", "warning", "emergency")


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def format_time_remaining(expires_at: datetime, now: Optional[datetime] = None) -> str:
    """
    Human string for the time left before an alert expires.

    Returns "Expired" once expires_at is reached, "{h}h {m}m remaining" when
    at least an hour is left, otherwise "{m}m remaining". Both parts floor.
    Naive datetimes are treated as UTC.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    diff = (_as_utc(expires_at) - _as_utc(now)).total_seconds()

    if diff <= 0:
        return "Expired"

    hours = int(diff // 3600)
    minutes = int((diff % 3600) // 60)

    if hours > 0:
        return f"{hours}h {minutes}m remaining"
    return f"{minutes}m remaining"


def filter_alerts(alerts: Iterable[EmergencyAlert], alert_filter: str = "all") -> List[EmergencyAlert]:
    """"active" matches on status; a severity name matches on severity."""
    if alert_filter not in ALERT_FILTERS:
        raise ValueError(f"Unknown alert filter '{alert_filter}'")
    if alert_filter == "all":
        return list(alerts)
    if alert_filter == "active":
        return [alert for alert in alerts if alert.status == "active"]
    return [alert for alert in alerts if alert.severity == alert_filter]


def alert_stats(alerts: Iterable[EmergencyAlert]) -> AlertStats:
    active = [alert for alert in alerts if alert.status == "active"]
    return AlertStats(
        active=len(active),
        emergency=sum(1 for alert in active if alert.severity == "emergency"),
        warning=sum(1 for alert in active if alert.severity == "warning"),
        watch=sum(1 for alert in active if alert.severity == "watch"),
    )
