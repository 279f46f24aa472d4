"""
Tests for dataset loading, validation and the in-memory store.
"""

import json

import pytest

from terralink.config import settings
from terralink.exceptions import DatasetError, TerraLinkError
from terralink.models import SensorReading
from terralink.store import ReadingStore, build_store, load_readings


def _row(**overrides):
    row = {
        "id": "r1",
        "farmId": "f-tn-01",
        "timestamp": "2025-06-01T06:00:00Z",
        "temperature": 28.5,
        "soilMoisture": 18.2,
        "rainfall": 0,
        "region": "Center",
        "crop": "Olives",
    }
    row.update(overrides)
    return row


def _write(tmp_path, payload, name="readings.json"):
    path = tmp_path / name
    path.write_text(payload if isinstance(payload, str) else json.dumps(payload), encoding="utf-8")
    return str(path)


class TestLoadReadings:
    def test_loads_camel_case_rows(self, tmp_path):
        path = _write(tmp_path, [_row(), _row(id="r2", timestamp="2025-06-02T06:00:00Z")])
        rows = load_readings(path)
        assert len(rows) == 2
        assert rows[0].farm_id == "f-tn-01"
        assert rows[0].soil_moisture == 18.2

    def test_missing_file(self, tmp_path):
        with pytest.raises(DatasetError, match="Cannot read"):
            load_readings(str(tmp_path / "nope.json"))

    def test_bad_json(self, tmp_path):
        with pytest.raises(DatasetError, match="not valid JSON"):
            load_readings(_write(tmp_path, "[{"))

    def test_not_a_list(self, tmp_path):
        with pytest.raises(DatasetError, match="JSON array"):
            load_readings(_write(tmp_path, {"readings": []}))

    def test_invalid_region_names_index(self, tmp_path):
        path = _write(tmp_path, [_row(), _row(id="r2", region="East")])
        with pytest.raises(DatasetError, match="index 1"):
            load_readings(path)

    def test_non_finite_number_rejected(self, tmp_path):
        path = _write(tmp_path, '[{"id": "r1", "farmId": "f", "timestamp": "2025-06-01T06:00:00Z", '
                                '"temperature": NaN, "soilMoisture": 10, "rainfall": 0, '
                                '"region": "North", "crop": "Other"}]')
        with pytest.raises(DatasetError):
            load_readings(path)

    def test_unparseable_timestamp_rejected(self, tmp_path):
        with pytest.raises(DatasetError):
            load_readings(_write(tmp_path, [_row(timestamp="yesterday")]))

    def test_dataset_error_is_terralink_error(self):
        assert issubclass(DatasetError, TerraLinkError)


class TestSensorReading:
    def test_instant_is_utc(self):
        r = SensorReading.model_validate(_row(timestamp="2025-06-01T08:00:00+02:00"))
        assert r.instant.isoformat() == "2025-06-01T06:00:00+00:00"
        assert r.timestamp == "2025-06-01T08:00:00+02:00"

    def test_fractional_seconds_with_z(self):
        r = SensorReading.model_validate(_row(timestamp="2025-06-01T06:00:00.5Z"))
        assert r.instant.microsecond == 500000

    def test_naive_timestamp_taken_as_utc(self):
        r = SensorReading.model_validate(_row(timestamp="2025-06-01T06:00:00"))
        assert r.instant.utcoffset().total_seconds() == 0

    def test_dumps_camel_case(self):
        data = SensorReading.model_validate(_row()).model_dump(by_alias=True)
        assert "soilMoisture" in data and "farmId" in data


class TestReadingStore:
    def test_farm_ids_first_seen(self, make_reading):
        store = ReadingStore([
            make_reading(farm_id="b"), make_reading(farm_id="a"), make_reading(farm_id="b"),
        ])
        assert store.farm_ids() == ["b", "a"]
        assert len(store) == 3

    def test_farm_series_sorted(self, make_reading):
        store = ReadingStore([make_reading(day=3), make_reading(day=1), make_reading(day=2)])
        assert [r.timestamp[8:10] for r in store.farm_series("f-1")] == ["01", "02", "03"]
        assert store.farm_series("missing") == ()

    def test_filter(self, make_reading):
        store = ReadingStore([
            make_reading(farm_id="a", region="North", crop="Cereals"),
            make_reading(farm_id="b", region="South", crop="Dates"),
            make_reading(farm_id="c", region="South", crop="Other"),
        ])
        assert [r.farm_id for r in store.filter(region="South")] == ["b", "c"]
        assert [r.farm_id for r in store.filter(region="South", crop="Dates")] == ["b"]
        assert [r.farm_id for r in store.filter(farm_id="a")] == ["a"]
        assert len(store.filter()) == 3

    def test_alerts_runs_engine(self, demo_store):
        assert [a.type for a in demo_store.alerts()] == ["drought", "flood"]


class TestBuildStore:
    def test_from_file(self, tmp_path, monkeypatch):
        monkeypatch.setattr(settings, "data_path", _write(tmp_path, [_row()]))
        store = build_store()
        assert len(store) == 1
        assert store.source.endswith("readings.json")

    def test_synthetic(self, monkeypatch):
        monkeypatch.setattr(settings, "data_path", None)
        monkeypatch.setattr(settings, "sample_days", 5)
        store = build_store()
        assert store.source == "synthetic"
        assert len(store) == 15
