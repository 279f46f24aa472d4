# terralink/models.py
# ------------------------------------------------------------
# Core domain models for the TerraLink farm monitoring backend
#
# Python attributes are snake_case; JSON in/out uses the
# camelCase names the dashboard frontend expects.
# ------------------------------------------------------------

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import Optional, Literal, List, Tuple
from datetime import datetime, timezone
import uuid


# -------------------------------
# Shared helpers & enums
# -------------------------------
Region = Literal["North", "Center", "South"]
Crop = Literal["Olives", "Cereals", "Dates", "Other"]
AlertType = Literal["drought", "water_stress", "flood", "irrigation_failure"]
Severity = Literal["low", "medium", "high"]
MicroinsuranceStatus = Literal["none", "pending", "approved", "rejected"]
StatusLevel = Literal["normal", "warning", "critical"]

REGIONS: Tuple[str, ...] = ("North", "Center", "South")


def uid(prefix: str) -> str:
    """
    Short, readable IDs for UI/debugging.
    Example: alr_a3f91c2b1e
    """
    return f"{prefix}_{uuid.uuid4().hex[:10]}"


def utcnow() -> datetime:
    """
    Always return timezone-aware UTC datetime.
    """
    return datetime.now(timezone.utc)


def iso_utc(dt: datetime) -> str:
    """
    Always return UTC ISO string with 'Z' suffix.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def parse_instant(value: str) -> datetime:
    """
    Parse an ISO-8601 timestamp into an aware UTC datetime.

    Accepts any form datetime.fromisoformat reads on Python 3.11+ (fractional
    seconds, "Z" suffix, numeric offsets). Naive values are taken as UTC.
    Raises ValueError when unparseable.
    """
    s = value.strip()
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    dt = datetime.fromisoformat(s)
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


# -------------------------------
# Sensor reading
# -------------------------------
class SensorReading(CamelModel):
    """
    One timestamped sensor sample for a farm.
    """

    model_config = ConfigDict(allow_inf_nan=False)

    id: str
    farm_id: str
    timestamp: str

    temperature: float      # °C
    soil_moisture: float    # %
    rainfall: float         # mm

    region: Region
    crop: Crop

    @field_validator("timestamp")
    @classmethod
    def _timestamp_is_iso(cls, v: str) -> str:
        parse_instant(v)
        return v

    @property
    def instant(self) -> datetime:
        return parse_instant(self.timestamp)


# -------------------------------
# Thresholds
# -------------------------------
class Thresholds(CamelModel):
    """
    Rule thresholds consumed by the detection engine.
    """

    model_config = ConfigDict(allow_inf_nan=False)

    drought_soil_pct: float = 12
    high_temp_c: float = 32
    flood_rain_mm_day: float = 40


DEFAULT_THRESHOLDS = Thresholds()


# -------------------------------
# Alert
# -------------------------------
class Alert(CamelModel):
    """
    A detected anomaly event derived from one or more readings.
    """

    id: str = Field(default_factory=lambda: uid("alr"))
    farm_id: str

    type: AlertType
    severity: Severity

    # timestamp of the reading that caused the trigger
    triggered_at: str

    resolved: bool = False
    microinsurance_status: MicroinsuranceStatus = "none"


# -------------------------------
# Derived dashboard views
# -------------------------------
class KPI(CamelModel):
    avg_soil_moisture: float
    avg_temp: float
    total_rainfall: float
    active_alerts: int


class FarmStatus(CamelModel):
    status: StatusLevel
    status_text: str


class IrrigationAdvice(CamelModel):
    main: str
    extra: List[str] = Field(default_factory=list)


class DayAggregate(CamelModel):
    day: str
    soil_moisture: float
    temperature: float
    rainfall: float


class RegionAverage(CamelModel):
    region: Region
    soil_moisture: int


class NotificationSummary(CamelModel):
    total: int
    high_count: int
    latest: Optional[Alert] = None
    message: str


class LiveReading(CamelModel):
    """
    Latest value of the live single-farm simulation.
    """

    farm_id: str
    timestamp: str
    temperature: float
    soil_moisture: float
    rainfall: float
    status: FarmStatus


class FarmSummary(CamelModel):
    farm_id: str
    name: Optional[str] = None
    region: Region
    crop: Crop
    position: Optional[Tuple[float, float]] = None    # (lat, lon)
    latest: SensorReading
    status: FarmStatus
    alert_count: int
