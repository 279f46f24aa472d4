# terralink/insights.py
# ------------------------------------------------------------
# Derived dashboard views computed from readings and alerts:
# KPIs, farm status, irrigation advice, daily/regional
# aggregates and the notification bell summary.
# ------------------------------------------------------------

from __future__ import annotations

from typing import Dict, List, Sequence

from .models import (
    Alert,
    DayAggregate,
    FarmStatus,
    IrrigationAdvice,
    KPI,
    NotificationSummary,
    REGIONS,
    RegionAverage,
    SensorReading,
)

# Status thresholds (latest reading of a farm)
CRITICAL_SOIL_PCT = 12
CRITICAL_TEMP_C = 32
WARNING_SOIL_PCT = 16
WET_SOIL_PCT = 30
WET_RAIN_MM = 5

STATUS_TEXT = {
    "normal": "Normal",
    "warning": "Water stress",
    "critical": "Drought risk",
}

MICROINSURANCE_LABELS = {
    "pending": "Pending partner response",
    "approved": "Compensation approved",
    "rejected": "Claim rejected",
}


def compute_kpi(readings: Sequence[SensorReading], alerts: Sequence[Alert]) -> KPI:
    n = len(readings) or 1
    return KPI(
        avg_soil_moisture=round(sum(r.soil_moisture for r in readings) / n, 1),
        avg_temp=round(sum(r.temperature for r in readings) / n, 1),
        total_rainfall=round(sum(r.rainfall for r in readings), 1),
        active_alerts=sum(1 for a in alerts if not a.resolved),
    )


def _is_critical(r: SensorReading) -> bool:
    return r.soil_moisture < CRITICAL_SOIL_PCT and r.temperature > CRITICAL_TEMP_C


def farm_status(latest: SensorReading) -> FarmStatus:
    """
    Traffic-light status from a farm's most recent reading.
    """
    if _is_critical(latest):
        status = "critical"
    elif latest.soil_moisture < WARNING_SOIL_PCT:
        status = "warning"
    else:
        status = "normal"
    return FarmStatus(status=status, status_text=STATUS_TEXT[status])


def irrigation_advice(latest: SensorReading) -> IrrigationAdvice:
    if _is_critical(latest):
        return IrrigationAdvice(
            main=(
                "Critical drought risk detected. Irrigation is strongly recommended "
                "as soon as possible, if water is available."
            ),
            extra=[
                "Prioritize this plot in your irrigation schedule.",
                "If you are covered, microinsurance partners are notified to support potential yield loss.",
            ],
        )

    if latest.soil_moisture < WARNING_SOIL_PCT:
        return IrrigationAdvice(
            main=(
                "Soil moisture is low. Plan irrigation within the next 24 hours, "
                "especially during cooler morning or evening hours."
            ),
            extra=[
                "Avoid mid-day irrigation to reduce evaporation.",
                "Monitor the dashboard to see if moisture continues to fall.",
            ],
        )

    if latest.soil_moisture > WET_SOIL_PCT and latest.rainfall > WET_RAIN_MM:
        return IrrigationAdvice(
            main=(
                "Soil is currently well supplied with water. Irrigation is not needed "
                "now and over-irrigation could damage roots."
            ),
            extra=[
                "Wait and re-check soil moisture before scheduling new irrigation cycles.",
            ],
        )

    return IrrigationAdvice(
        main=(
            "Conditions are stable. No immediate irrigation is required, but keep "
            "monitoring forecasts and soil moisture trends."
        ),
        extra=[
            "Irrigate only if several days of high temperature and no rainfall are expected.",
        ],
    )


def daily_aggregates(readings: Sequence[SensorReading]) -> List[DayAggregate]:
    """
    Per-day sums across all farms, keyed on the date part of the timestamp.
    """
    by_day: Dict[str, List[float]] = {}
    for r in readings:
        acc = by_day.setdefault(r.timestamp[:10], [0.0, 0.0, 0.0])
        acc[0] += r.soil_moisture
        acc[1] += r.temperature
        acc[2] += r.rainfall

    return [
        DayAggregate(
            day=day,
            soil_moisture=round(acc[0], 1),
            temperature=round(acc[1], 1),
            rainfall=round(acc[2], 1),
        )
        for day, acc in sorted(by_day.items())
    ]


def region_averages(readings: Sequence[SensorReading]) -> List[RegionAverage]:
    out: List[RegionAverage] = []
    for region in REGIONS:
        values = [r.soil_moisture for r in readings if r.region == region]
        avg = sum(values) / len(values) if values else 0
        out.append(RegionAverage(region=region, soil_moisture=round(avg)))
    return out


def microinsurance_label(status: str) -> str:
    return MICROINSURANCE_LABELS.get(status, "Not triggered")


def notification_summary(alerts: Sequence[Alert]) -> NotificationSummary:
    """
    Bell summary: counts plus the most recently appended alert.
    """
    if not alerts:
        return NotificationSummary(
            total=0,
            high_count=0,
            message="No active alerts. All farms are stable",
        )

    latest = alerts[-1]
    high = sum(1 for a in alerts if a.severity == "high")
    return NotificationSummary(
        total=len(alerts),
        high_count=high,
        latest=latest,
        message=(
            f"Currently {len(alerts)} active alerts ({high} high). "
            f"Latest: {latest.type} on {latest.farm_id}."
        ),
    )
