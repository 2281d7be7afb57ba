"""
Sensor threshold evaluation.

Pure functions over a reading value and its acceptable (min, max) range.
Threshold pairs are well-formed by construction, so nothing here raises.
"""
from typing import Iterable, List

from ..models import ParameterEvaluation, SensorReading, SensorStatus, Threshold, Trend


def is_out_of_range(value: float, threshold: Threshold) -> bool:
    low, high = threshold
    return value < low or value > high


def classify_trend(value: float, threshold: Threshold) -> Trend:
    low, high = threshold
    if value < low:
        return "below"
    if value > high:
        return "above"
    return "nominal"


def evaluate_sensor(sensor: SensorReading) -> List[ParameterEvaluation]:
    """Evaluate every parameter of a sensor in its declared order."""
    return [
        ParameterEvaluation(
            name=name,
            value=parameter.value,
            threshold=parameter.threshold,
            unit=parameter.unit,
            out_of_range=is_out_of_range(parameter.value, parameter.threshold),
            trend=classify_trend(parameter.value, parameter.threshold),
        )
        for name, parameter in sensor.parameters.items()
    ]


def count_out_of_range(sensors: Iterable[SensorReading]) -> int:
    return sum(
        1
        for sensor in sensors
        for parameter in sensor.parameters.values()
        if is_out_of_range(parameter.value, parameter.threshold)
    )


def count_by_status(sensors: Iterable[SensorReading], status: SensorStatus) -> int:
    return sum(1 for sensor in sensors if sensor.status == status)
