# terralink/detection.py
# ------------------------------------------------------------
# Alert detection engine.
#
# Scans each farm's reading series chronologically and emits
# typed alerts:
# - drought             2 consecutive low soil-moisture readings
# - water_stress        rapid moisture drop + heat + no rain
# - flood               heavy rain on already wet soil
# - irrigation_failure  moisture not rising after rain
#
# Pure computation: no I/O, no shared state.
# ------------------------------------------------------------

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Sequence

from .models import Alert, SensorReading, Thresholds, DEFAULT_THRESHOLDS

logger = logging.getLogger(__name__)

# Rule constants that are not part of the configurable thresholds
STRESS_MIN_DROP = 2        # soil-moisture points between readings
STRESS_HIGH_DROP = 5
FLOOD_MIN_SOIL = 30        # %
IRRIGATION_MIN_RAIN = 5    # mm on the previous reading
DROUGHT_STREAK = 2


# -------------------------------
# Preprocessing
# -------------------------------
def group_by_farm(readings: Iterable[SensorReading]) -> Dict[str, List[SensorReading]]:
    """
    Partition readings by farm (first-seen order) and sort each
    series chronologically.
    """
    by_farm: Dict[str, List[SensorReading]] = {}
    for r in readings:
        by_farm.setdefault(r.farm_id, []).append(r)

    for series in by_farm.values():
        series.sort(key=lambda r: r.instant)
    return by_farm


# -------------------------------
# Rules (one full scan each)
# -------------------------------
def _drought_onset(farm_id: str, series: Sequence[SensorReading], t: Thresholds) -> List[Alert]:
    out: List[Alert] = []
    streak = 0
    for r in series:
        if r.soil_moisture < t.drought_soil_pct:
            streak += 1
            # fires once per run, at the transition point only
            if streak == DROUGHT_STREAK:
                out.append(Alert(
                    farm_id=farm_id,
                    type="drought",
                    severity="medium",
                    triggered_at=r.timestamp,
                    microinsurance_status="pending",
                ))
        else:
            streak = 0
    return out


def _water_stress(farm_id: str, series: Sequence[SensorReading], t: Thresholds) -> List[Alert]:
    out: List[Alert] = []
    for prev, cur in zip(series, series[1:]):
        drop = prev.soil_moisture - cur.soil_moisture
        if drop >= STRESS_MIN_DROP and cur.temperature >= t.high_temp_c and cur.rainfall == 0:
            out.append(Alert(
                farm_id=farm_id,
                type="water_stress",
                severity="high" if drop >= STRESS_HIGH_DROP else "medium",
                triggered_at=cur.timestamp,
                microinsurance_status="pending",
            ))
    return out


def _flood(farm_id: str, series: Sequence[SensorReading], t: Thresholds) -> List[Alert]:
    # no dedup: every qualifying reading raises its own alert
    return [
        Alert(
            farm_id=farm_id,
            type="flood",
            severity="medium",
            triggered_at=r.timestamp,
            microinsurance_status="pending",
        )
        for r in series
        if r.rainfall >= t.flood_rain_mm_day and r.soil_moisture >= FLOOD_MIN_SOIL
    ]


def _irrigation_failure(farm_id: str, series: Sequence[SensorReading], t: Thresholds) -> List[Alert]:
    out: List[Alert] = []
    for prev, cur in zip(series, series[1:]):
        if prev.rainfall > IRRIGATION_MIN_RAIN and cur.soil_moisture <= prev.soil_moisture:
            out.append(Alert(
                farm_id=farm_id,
                type="irrigation_failure",
                severity="low",
                triggered_at=cur.timestamp,
                microinsurance_status="none",   # monitor only
            ))
    return out


RULES = (_drought_onset, _water_stress, _flood, _irrigation_failure)


# -------------------------------
# Public API
# -------------------------------
def detect_alerts(
    readings: Iterable[SensorReading],
    thresholds: Thresholds = DEFAULT_THRESHOLDS,
) -> List[Alert]:
    """
    Run every rule over every farm's series.

    Output order: farms in first-seen order; within a farm, all
    drought alerts, then water stress, flood, irrigation failure,
    each in chronological order. The result is not re-sorted.
    """
    by_farm = group_by_farm(readings)

    alerts: List[Alert] = []
    for farm_id, series in by_farm.items():
        for rule in RULES:
            alerts.extend(rule(farm_id, series, thresholds))

    logger.debug("Scanned %d farms, %d alerts raised", len(by_farm), len(alerts))
    return alerts
