# terralink/store.py
# ------------------------------------------------------------
# In-memory reading dataset.
#
# Using a single accessor (get_store) ensures:
# - The dataset is loaded and validated once per process
# - Routes share one immutable snapshot
# - Tests can swap it via reset_store()
#
# The live single-farm simulation is held here the same way.
# Nothing is written back: the dataset lives only in memory.
# ------------------------------------------------------------

from __future__ import annotations

import json
import logging
from typing import List, Optional, Tuple

from pydantic import ValidationError

from .config import settings
from .detection import detect_alerts
from .exceptions import DatasetError
from .generators import LiveFarmSimulation, sample_dataset
from .models import Alert, SensorReading, Thresholds, DEFAULT_THRESHOLDS

logger = logging.getLogger(__name__)


def load_readings(path: str) -> List[SensorReading]:
    """
    Read a JSON array of readings (camelCase keys) and validate each.

    Raises DatasetError on unreadable files, bad JSON or invalid rows.
    """
    try:
        with open(path, encoding="utf-8") as fh:
            raw = json.load(fh)
    except OSError as exc:
        raise DatasetError(f"Cannot read dataset {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise DatasetError(f"Dataset {path} is not valid JSON: {exc}") from exc

    if not isinstance(raw, list):
        raise DatasetError(f"Dataset {path} must be a JSON array of readings")

    out: List[SensorReading] = []
    for idx, row in enumerate(raw):
        try:
            out.append(SensorReading.model_validate(row))
        except ValidationError as exc:
            raise DatasetError(f"Dataset {path}: invalid reading at index {idx}: {exc}") from exc
    return out


class ReadingStore:
    """
    Immutable snapshot of the reading dataset plus lookup helpers.
    """

    def __init__(self, readings, source: str = "memory"):
        self.readings: Tuple[SensorReading, ...] = tuple(readings)
        self.source = source

    def __len__(self) -> int:
        return len(self.readings)

    def alerts(self, thresholds: Thresholds = DEFAULT_THRESHOLDS) -> List[Alert]:
        return detect_alerts(self.readings, thresholds)

    def farm_ids(self) -> List[str]:
        # dict keeps first-seen order
        return list(dict.fromkeys(r.farm_id for r in self.readings))

    def farm_series(self, farm_id: str) -> Tuple[SensorReading, ...]:
        series = [r for r in self.readings if r.farm_id == farm_id]
        series.sort(key=lambda r: r.instant)
        return tuple(series)

    def filter(
        self,
        region: Optional[str] = None,
        crop: Optional[str] = None,
        farm_id: Optional[str] = None,
    ) -> List[SensorReading]:
        return [
            r for r in self.readings
            if (region is None or r.region == region)
            and (crop is None or r.crop == crop)
            and (farm_id is None or r.farm_id == farm_id)
        ]


def build_store() -> ReadingStore:
    """
    Load the configured dataset, or generate the synthetic pilot sample.
    """
    if settings.data_path:
        readings = load_readings(settings.data_path)
        source = settings.data_path
    else:
        readings = sample_dataset(days=settings.sample_days, seed=settings.sample_seed)
        source = "synthetic"

    logger.info("Loaded %d readings from %s", len(readings), source)
    return ReadingStore(readings, source=source)


_store: Optional[ReadingStore] = None


def get_store() -> ReadingStore:
    global _store
    if _store is None:
        _store = build_store()
    return _store


def reset_store(store: Optional[ReadingStore] = None) -> None:
    """
    Replace (or drop, when None) the process-wide store.
    """
    global _store
    _store = store


# -------------------------------
# Live simulation
# -------------------------------
_live: Optional[LiveFarmSimulation] = None


def get_live_simulation() -> LiveFarmSimulation:
    global _live
    if _live is None:
        _live = LiveFarmSimulation()
    return _live


def reset_live_simulation(sim: Optional[LiveFarmSimulation] = None) -> None:
    global _live
    _live = sim
