"""
Shared fixtures for the TerraLink backend tests.
"""

import pytest

from terralink.models import SensorReading
from terralink.store import ReadingStore, reset_store, reset_live_simulation


@pytest.fixture
def make_reading():
    """Factory for readings with neutral defaults (no rule fires)."""
    counter = {"n": 0}

    def _make(farm_id="f-1", day=1, hour=6, **overrides):
        counter["n"] += 1
        fields = {
            "id": f"r{counter['n']}",
            "farm_id": farm_id,
            "timestamp": f"2025-06-{day:02d}T{hour:02d}:00:00Z",
            "temperature": 25.0,
            "soil_moisture": 20.0,
            "rainfall": 0.0,
            "region": "Center",
            "crop": "Olives",
        }
        fields.update(overrides)
        return SensorReading(**fields)

    return _make


@pytest.fixture
def series(make_reading):
    """Build one farm's daily series from a list of soil-moisture values."""

    def _series(soil_values, farm_id="f-1", **overrides):
        return [
            make_reading(farm_id=farm_id, day=i + 1, soil_moisture=v, **overrides)
            for i, v in enumerate(soil_values)
        ]

    return _series


@pytest.fixture
def demo_store(make_reading):
    """
    Two farms:
    - f-tn-01: soil 20, 10, 8, 15 -> one drought alert (day 3)
    - f-tn-02: one heavy-rain reading on wet soil -> one flood alert
    """
    readings = [
        make_reading(farm_id="f-tn-01", day=d, soil_moisture=s, region="Center", crop="Olives")
        for d, s in [(1, 20), (2, 10), (3, 8), (4, 15)]
    ]
    readings.append(make_reading(
        farm_id="f-tn-02", day=2, soil_moisture=32, rainfall=45, region="South", crop="Dates",
    ))
    store = ReadingStore(readings, source="test")
    reset_store(store)
    yield store
    reset_store(None)
    reset_live_simulation(None)
