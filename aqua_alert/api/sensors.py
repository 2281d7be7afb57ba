from fastapi import APIRouter, HTTPException, Depends, Query
from typing import List, Optional
import logging

from ..core.context import AppContext, get_context
from ..domain.models import (
    HistoryPoint,
    SensorOverview,
    SensorReading,
    SensorResponse,
    SensorViewResponse,
    SENSOR_PARAMETERS,
)
from ..domain.services.sensor_feed import Snapshot, ViewNotFoundError
from ..domain.services.sensor_thresholds import count_by_status, count_out_of_range, evaluate_sensor

router = APIRouter()
logger = logging.getLogger(__name__)


def _snapshot(context: AppContext, view_id: Optional[str]) -> Snapshot:
    try:
        return context.sensors.snapshot(view_id)
    except ViewNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


def _to_response(sensor: SensorReading) -> SensorResponse:
    evaluations = evaluate_sensor(sensor)
    return SensorResponse(
        **sensor.model_dump(),
        evaluations=evaluations,
        out_of_range_count=sum(1 for e in evaluations if e.out_of_range),
    )


def _overview(snapshot: Snapshot) -> SensorOverview:
    sensors = snapshot.sensors
    return SensorOverview(
        total=len(sensors),
        online=count_by_status(sensors, "online"),
        warning=count_by_status(sensors, "warning"),
        offline=count_by_status(sensors, "offline"),
        out_of_range_parameters=count_out_of_range(sensors),
        last_refresh=snapshot.refreshed_at,
    )


@router.get("/", response_model=List[SensorResponse])
def list_sensors(
    view_id: Optional[str] = Query(None, description="Dashboard view to read; omit for the base snapshot"),
    context: AppContext = Depends(get_context)
):
    """All monitoring sites with per-parameter threshold evaluation."""
    return [_to_response(sensor) for sensor in _snapshot(context, view_id).sensors]


@router.get("/overview", response_model=SensorOverview)
def get_overview(
    view_id: Optional[str] = Query(None),
    context: AppContext = Depends(get_context)
):
    """Online / warning / offline counts and the number of out-of-range parameters."""
    return _overview(_snapshot(context, view_id))


@router.post("/views", response_model=SensorViewResponse, status_code=201)
def open_view(context: AppContext = Depends(get_context)):
    """
    Open a dashboard view with auto-refresh.

    The view's readings are regenerated every SENSOR_REFRESH_SECONDS until
    the view is closed with DELETE /views/{view_id}.
    """
    view_id = context.sensors.open_view()
    return SensorViewResponse(view_id=view_id, refresh_seconds=context.sensors.refresh_seconds)


@router.post("/views/{view_id}/refresh", response_model=SensorOverview)
def refresh_view(view_id: str, context: AppContext = Depends(get_context)):
    """Regenerate a view's readings now, outside the auto-refresh schedule."""
    try:
        snapshot = context.sensors.refresh(view_id)
    except ViewNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return _overview(snapshot)


@router.delete("/views/{view_id}")
def close_view(view_id: str, context: AppContext = Depends(get_context)):
    """Close a dashboard view and cancel its auto-refresh."""
    try:
        context.sensors.close_view(view_id)
    except ViewNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"message": "View closed", "view_id": view_id}


@router.get("/{sensor_id}", response_model=SensorResponse)
def get_sensor(
    sensor_id: str,
    view_id: Optional[str] = Query(None),
    context: AppContext = Depends(get_context)
):
    _snapshot(context, view_id)
    sensor = context.sensors.get_sensor(sensor_id, view_id)
    if sensor is None:
        raise HTTPException(status_code=404, detail="Sensor not found")
    return _to_response(sensor)


@router.get("/{sensor_id}/history/{parameter}", response_model=List[HistoryPoint])
def get_parameter_history(
    sensor_id: str,
    parameter: str,
    view_id: Optional[str] = Query(None),
    context: AppContext = Depends(get_context)
):
    """24 hourly points around the current value, for the detail chart."""
    if parameter not in SENSOR_PARAMETERS:
        raise HTTPException(status_code=404, detail=f"Unknown parameter '{parameter}'")
    _snapshot(context, view_id)
    sensor = context.sensors.get_sensor(sensor_id, view_id)
    if sensor is None:
        raise HTTPException(status_code=404, detail="Sensor not found")
    return context.sensors.history(sensor.parameters[parameter].value)
