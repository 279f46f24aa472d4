# terralink/generators.py
# ------------------------------------------------------------
# Synthetic data generators (demo/testing):
# - A pilot dataset: one reading per farm per day, following a
#   bounded random walk tuned per region (south hotter/drier)
# - A live single-farm simulation that advances on each tick
#
# Both accept a seed / random.Random so tests are reproducible.
# ------------------------------------------------------------

from __future__ import annotations

from datetime import datetime, timedelta, timezone
import random
from typing import Any, Dict, List, Optional

from .models import LiveReading, SensorReading, iso_utc, utcnow
from .insights import farm_status


# -------------------------------
# Pilot farms
# -------------------------------
DEFAULT_FARMS: Dict[str, Dict[str, Any]] = {
    "f-tn-01": {
        "name": "Farm TN-01 (Olives)",
        "region": "Center",
        "crop": "Olives",
        "position": (35.55, 10.75),     # near Sousse
    },
    "f-tn-02": {
        "name": "Farm TN-02 (Dates)",
        "region": "South",
        "crop": "Dates",
        "position": (33.88, 10.1),      # near Gabès
    },
    "f-tn-03": {
        "name": "Farm TN-03 (Cereals)",
        "region": "North",
        "crop": "Cereals",
        "position": (36.8, 10.17),      # near Tunis
    },
}

# baseline climate per region: soil %, temp °C, daily rain probability
REGION_CLIMATE: Dict[str, Dict[str, float]] = {
    "North": {"soil": 26.0, "temp": 26.0, "rain_p": 0.30},
    "Center": {"soil": 18.0, "temp": 30.0, "rain_p": 0.18},
    "South": {"soil": 12.0, "temp": 34.0, "rain_p": 0.08},
}

SAMPLE_START = datetime(2025, 6, 1, 6, 0, tzinfo=timezone.utc)

SOIL_RANGE = (5.0, 40.0)
TEMP_RANGE = (15.0, 40.0)


# -------------------------------
# Helpers
# -------------------------------
def clamp(v: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, v))


def _farm_series(
    rng: random.Random,
    farm_id: str,
    profile: Dict[str, Any],
    days: int,
    start: datetime,
) -> List[SensorReading]:
    climate = REGION_CLIMATE[profile["region"]]
    soil = climate["soil"] + rng.uniform(-3, 3)
    temp = climate["temp"] + rng.uniform(-2, 2)

    out: List[SensorReading] = []
    for day in range(days):
        # occasional storm on top of ordinary rain days
        roll = rng.random()
        if roll < 0.04:
            rain = rng.uniform(40, 60)
        elif roll < climate["rain_p"]:
            rain = rng.uniform(1, 15)
        else:
            rain = 0.0

        # drift back towards the regional baseline
        temp += (climate["temp"] - temp) * 0.2 + rng.uniform(-2.5, 2.5)
        temp = clamp(temp, *TEMP_RANGE)

        if rain > 0:
            soil += rain * rng.uniform(0.2, 0.5)
        else:
            soil -= rng.uniform(0.5, 3.5) * (1.3 if temp >= 32 else 1.0)
        soil = clamp(soil, *SOIL_RANGE)

        out.append(SensorReading(
            id=f"r_{farm_id}_{day:03d}",
            farm_id=farm_id,
            timestamp=iso_utc(start + timedelta(days=day)),
            temperature=round(temp, 1),
            soil_moisture=round(soil, 1),
            rainfall=round(rain, 1),
            region=profile["region"],
            crop=profile["crop"],
        ))
    return out


# -------------------------------
# Public API used by the app
# -------------------------------
def sample_dataset(
    farms: Optional[Dict[str, Dict[str, Any]]] = None,
    days: int = 14,
    seed: Optional[int] = None,
    start: datetime = SAMPLE_START,
) -> List[SensorReading]:
    """
    Build a pilot dataset: one reading per farm per day at 06:00 UTC.

    Readings are grouped by farm, in `farms` order.
    """
    rng = random.Random(seed)
    farms = DEFAULT_FARMS if farms is None else farms

    out: List[SensorReading] = []
    for farm_id, profile in farms.items():
        out.extend(_farm_series(rng, farm_id, profile, days, start))
    return out


class LiveFarmSimulation:
    """
    Simulates one farm's sensors changing every few seconds:
    moisture drops while it is dry, rises after rain, and the
    derived status follows.
    """

    def __init__(
        self,
        farm_id: str = "f-live",
        soil_moisture: float = 22,
        temperature: float = 28,
        rainfall: float = 0,
        rng: Optional[random.Random] = None,
    ):
        self.farm_id = farm_id
        self.soil_moisture = soil_moisture
        self.temperature = temperature
        self.rainfall = rainfall
        self._rng = rng or random.Random()
        self._last = self._snapshot(utcnow())

    def _snapshot(self, now: datetime) -> LiveReading:
        reading = SensorReading(
            id="live",
            farm_id=self.farm_id,
            timestamp=iso_utc(now),
            temperature=self.temperature,
            soil_moisture=self.soil_moisture,
            rainfall=self.rainfall,
            region="Center",
            crop="Other",
        )
        return LiveReading(
            farm_id=self.farm_id,
            timestamp=reading.timestamp,
            temperature=self.temperature,
            soil_moisture=self.soil_moisture,
            rainfall=self.rainfall,
            status=farm_status(reading),
        )

    @property
    def latest(self) -> LiveReading:
        return self._last

    def tick(self, now: Optional[datetime] = None) -> LiveReading:
        rng = self._rng

        # sometimes it rains a bit
        rain = rng.random() * 10 if rng.random() < 0.2 else 0.0
        self.rainfall = round(rain, 1)

        # small random temp variation
        delta_t = (rng.random() - 0.5) * 1.5
        self.temperature = round(clamp(self.temperature + delta_t, *TEMP_RANGE), 1)

        # wet spell raises moisture, otherwise it slowly dries out
        if rng.random() < 0.2:
            delta_s = round(rng.random() * 4, 1)
        else:
            delta_s = -round(rng.random() * 2, 1)
        self.soil_moisture = round(clamp(self.soil_moisture + delta_s, *SOIL_RANGE), 1)

        self._last = self._snapshot(now or utcnow())
        return self._last
