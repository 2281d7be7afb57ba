"""
Hazard map filtering.

filter_hazards() keeps every report matching all non-"all" criteria, in
the order given. HazardFilter.date_range is intentionally not applied: the
map's filter panel carries it, but reports are never cut by age.
"""
from typing import Dict, Iterable, List

from ..models import HazardFilter, HazardReport

MARKER_COLORS = {
    "critical": "#dc2626",
    "high": "#ea580c",
    "medium": "#d97706",
    "low": "#65a30d",
}
DEFAULT_MARKER_COLOR = "#6b7280"

# Criteria compared against the report attribute of the same name.
FILTERED_FIELDS = ("type", "severity", "status")


def matches(report: HazardReport, criteria: HazardFilter) -> bool:
    for field in FILTERED_FIELDS:
        wanted = getattr(criteria, field)
        if wanted != "all" and getattr(report, field) != wanted:
            return False
    return True


def filter_hazards(reports: Iterable[HazardReport], criteria: HazardFilter) -> List[HazardReport]:
    """Stable filter. Never re-sorts and never raises."""
    return [report for report in reports if matches(report, criteria)]


def marker_color(severity: str) -> str:
    return MARKER_COLORS.get(severity, DEFAULT_MARKER_COLOR)


def count_by_severity(reports: Iterable[HazardReport]) -> Dict[str, int]:
    counts = {severity: 0 for severity in MARKER_COLORS}
    for report in reports:
        counts[report.severity] = counts.get(report.severity, 0) + 1
    return counts
