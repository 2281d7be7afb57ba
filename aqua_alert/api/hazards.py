from fastapi import APIRouter, Depends, HTTPException
import logging

from ..core.context import AppContext, get_context
from ..domain.models import HazardFilter, HazardListResponse, HazardReport
from ..domain.services.hazard_filter import filter_hazards, count_by_severity, MARKER_COLORS

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/", response_model=HazardListResponse)
def list_hazards(
    criteria: HazardFilter = Depends(),
    context: AppContext = Depends(get_context)
):
    """
    Hazard reports for the map, filtered by type, severity and status.

    - Each criterion defaults to "all" (no filtering on that field)
    - Original report order is preserved
    - date_range is echoed back but not applied
    """
    hazards = filter_hazards(context.hazards, criteria)
    return HazardListResponse(
        hazards=hazards,
        filters=criteria,
        total=len(hazards),
        counts_by_severity=count_by_severity(hazards),
        marker_colors=MARKER_COLORS,
    )


@router.get("/{hazard_id}", response_model=HazardReport)
def get_hazard(hazard_id: str, context: AppContext = Depends(get_context)):
    for hazard in context.hazards:
        if hazard.id == hazard_id:
            return hazard
    raise HTTPException(status_code=404, detail="Hazard report not found")
