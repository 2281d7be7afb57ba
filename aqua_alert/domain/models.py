from pydantic import BaseModel, Field, ConfigDict, model_validator
from typing import Optional, List, Dict, Tuple, Literal
from datetime import datetime, date, timezone
from uuid import uuid4

HazardType = Literal["contamination", "flooding", "chemical", "temperature", "other"]
HazardSeverity = Literal["low", "medium", "high", "critical"]
HazardStatus = Literal["active", "investigating", "resolved"]

AlertType = Literal["tsunami", "flood", "storm", "chemical", "infrastructure"]
AlertSeverity = Literal["watch", "warning", "emergency"]
AlertStatus = Literal["active", "expired", "cancelled"]

SensorStatus = Literal["online", "warning", "offline"]
Trend = Literal["below", "above", "nominal"]

NotificationType = Literal["success", "error", "info"]

Coordinates = Tuple[float, float]  # (lat, lng)
Threshold = Tuple[float, float]    # (min, max)

SENSOR_PARAMETERS = (
    "ph",
    "temperature",
    "conductivity",
    "salinity",
    "turbidity",
    "dissolved_oxygen",
    "water_level",
    "orp",
)

# ============================================================================
# BASE MODELS
# ============================================================================

class User(BaseModel):
    """Placeholder identity. No password, no server-side validation."""
    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)


class HazardReport(BaseModel):
    """Community hazard report shown on the map. Immutable once seeded."""
    id: str
    type: HazardType
    severity: HazardSeverity
    location: Coordinates
    title: str
    description: str
    reported_by: str
    reported_at: datetime
    status: HazardStatus

    model_config = ConfigDict(frozen=True)


class EmergencyAlert(BaseModel):
    """Authority-issued, time-bounded warning"""
    id: str
    type: AlertType
    severity: AlertSeverity
    title: str
    description: str
    location: str
    coordinates: Coordinates
    issued_at: datetime
    expires_at: datetime
    source: str
    instructions: List[str] = Field(default_factory=list)
    affected_areas: List[str] = Field(default_factory=list)
    status: AlertStatus

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def check_expiry_after_issue(self):
        if self.expires_at <= self.issued_at:
            raise ValueError("expires_at must be later than issued_at")
        return self


class SensorParameter(BaseModel):
    value: float
    threshold: Threshold
    unit: str


class SensorReading(BaseModel):
    """Snapshot of all water-quality parameters for one monitoring location"""
    id: str
    name: str
    location: str
    coordinates: Coordinates
    last_update: datetime
    status: SensorStatus
    parameters: Dict[str, SensorParameter]

    @model_validator(mode="after")
    def check_parameter_set(self):
        if set(self.parameters) != set(SENSOR_PARAMETERS):
            raise ValueError(f"parameters must be exactly {', '.join(SENSOR_PARAMETERS)}")
        return self


class Notification(BaseModel):
    """Transient UI notification"""
    id: str = Field(default_factory=lambda: uuid4().hex)
    type: NotificationType
    title: str
    message: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    expires_at: Optional[datetime] = None


class ForumPost(BaseModel):
    id: str
    title: str
    content: str
    author: str
    author_avatar: Optional[str] = None
    created_at: datetime
    replies: int = 0
    likes: int = 0
    category: str
    tags: List[str] = Field(default_factory=list)


class CleanupEvent(BaseModel):
    id: str
    title: str
    description: str
    date: date
    time: str
    location: str
    organizer: str
    participants: int = 0
    max_participants: int
    status: Literal["upcoming", "ongoing", "completed"]


class EducationalResource(BaseModel):
    id: str
    title: str
    description: str
    type: Literal["article", "video", "guide", "infographic"]
    category: str
    duration: Optional[str] = None
    author: str
    published_at: date
    download_url: Optional[str] = None
    video_url: Optional[str] = None
    thumbnail: str
    tags: List[str] = Field(default_factory=list)


class Category(BaseModel):
    value: str
    label: str


# ============================================================================
# REQUEST DTOs
# ============================================================================

class Credentials(BaseModel):
    """Request DTO for login and register. Both take the same shape."""
    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., pattern=r"^[\w\.\+-]+@[\w\.-]+\.\w+$")


class NotificationCreate(BaseModel):
    type: NotificationType = "info"
    title: str = Field(..., min_length=1, max_length=200)
    message: str = Field("", max_length=1000)


class HazardFilter(BaseModel):
    """
    Hazard map filter criteria.

    date_range is carried for the client's filter panel but is not applied
    when filtering; see filter_hazards.
    """
    type: Literal["all", "contamination", "flooding", "chemical", "temperature", "other"] = "all"
    severity: Literal["all", "low", "medium", "high", "critical"] = "all"
    status: Literal["all", "active", "investigating", "resolved"] = "all"
    date_range: str = "7"


class HazardReportForm(BaseModel):
    """
    Raw hazard report form. Fields are optional here so that missing
    values surface as field-level messages instead of a schema error.
    """
    type: Optional[str] = None
    severity: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    contact_info: Optional[str] = None
    anonymous: bool = False


class GeolocationResult(BaseModel):
    """What the host platform returned for a location request."""
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    error: Optional[Literal["permission_denied", "position_unavailable", "timeout"]] = None


# ============================================================================
# RESPONSE DTOs
# ============================================================================

class AuthState(BaseModel):
    authenticated: bool
    user: Optional[User] = None


class HazardListResponse(BaseModel):
    hazards: List[HazardReport]
    filters: HazardFilter
    total: int
    counts_by_severity: Dict[str, int]
    marker_colors: Dict[str, str]


class ParameterEvaluation(BaseModel):
    name: str
    value: float
    threshold: Threshold
    unit: str
    out_of_range: bool
    trend: Trend


class SensorResponse(SensorReading):
    evaluations: List[ParameterEvaluation]
    out_of_range_count: int


class SensorOverview(BaseModel):
    total: int
    online: int
    warning: int
    offline: int
    out_of_range_parameters: int
    last_refresh: datetime


class HistoryPoint(BaseModel):
    time: str
    value: float


class SensorViewResponse(BaseModel):
    view_id: str
    refresh_seconds: int


class AlertResponse(EmergencyAlert):
    time_remaining: str


class AlertStats(BaseModel):
    active: int
    emergency: int
    warning: int
    watch: int


class AlertListResponse(BaseModel):
    alerts: List[AlertResponse]
    filter: str
    total: int
    stats: AlertStats


class FieldErrors(BaseModel):
    errors: Dict[str, str]


class ReportReceipt(BaseModel):
    report_id: str
    submitted_at: datetime
    anonymous: bool
    message: str


class LocationPrefill(BaseModel):
    latitude: float
    longitude: float
    location: str


class AttachmentPreview(BaseModel):
    filename: str
    content_type: Optional[str] = None
    size_bytes: int
    format: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None


class TranscriptionStatus(BaseModel):
    id: str
    state: Literal["recording", "completed", "cancelled", "failed"]
    transcript: Optional[str] = None


class ProfileResponse(BaseModel):
    name: str
    email: str
    phone: str
    location: str
    bio: str
    joined_date: date
    saved_locations: List[dict]
    notification_settings: Dict[str, bool]
    stats: dict
    recent_activity: List[dict]


class HomeSummary(BaseModel):
    active_hazards: int
    active_alerts: int
    sensors_online: int
    sensors_total: int
    upcoming_events: int
