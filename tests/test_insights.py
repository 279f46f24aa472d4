"""
Tests for the derived dashboard views.
"""

import pytest

from terralink.detection import detect_alerts
from terralink.insights import (
    compute_kpi,
    daily_aggregates,
    farm_status,
    irrigation_advice,
    microinsurance_label,
    notification_summary,
    region_averages,
)
from terralink.models import Alert


class TestKPI:
    def test_empty_dataset(self):
        kpi = compute_kpi([], [])
        assert kpi.avg_soil_moisture == 0
        assert kpi.avg_temp == 0
        assert kpi.total_rainfall == 0
        assert kpi.active_alerts == 0

    def test_averages_and_totals(self, make_reading):
        rows = [
            make_reading(day=1, soil_moisture=10, temperature=25, rainfall=0),
            make_reading(day=2, soil_moisture=20, temperature=26, rainfall=1.5),
            make_reading(day=3, soil_moisture=30, temperature=30, rainfall=2.5),
        ]
        kpi = compute_kpi(rows, detect_alerts(rows))
        assert kpi.avg_soil_moisture == 20.0
        assert kpi.avg_temp == 27.0
        assert kpi.total_rainfall == 4.0

    def test_counts_unresolved_alerts_only(self):
        alerts = [
            Alert(farm_id="f", type="flood", severity="medium", triggered_at="2025-06-01T00:00:00Z"),
            Alert(farm_id="f", type="flood", severity="medium", triggered_at="2025-06-02T00:00:00Z",
                  resolved=True),
        ]
        assert compute_kpi([], alerts).active_alerts == 1

    def test_camel_case_output(self):
        data = compute_kpi([], []).model_dump(by_alias=True)
        assert set(data) == {"avgSoilMoisture", "avgTemp", "totalRainfall", "activeAlerts"}


class TestFarmStatus:
    @pytest.mark.parametrize("soil, temp, expected", [
        (11.9, 32.1, "critical"),
        (11, 32, "warning"),        # heat must exceed 32
        (15.9, 20, "warning"),
        (12, 35, "warning"),
        (16, 35, "normal"),
    ])
    def test_levels(self, make_reading, soil, temp, expected):
        status = farm_status(make_reading(soil_moisture=soil, temperature=temp))
        assert status.status == expected

    def test_text(self, make_reading):
        assert farm_status(make_reading(soil_moisture=25)).status_text == "Normal"
        assert farm_status(make_reading(soil_moisture=14)).status_text == "Water stress"
        assert farm_status(make_reading(soil_moisture=5, temperature=38)).status_text == "Drought risk"


class TestIrrigationAdvice:
    def test_critical(self, make_reading):
        advice = irrigation_advice(make_reading(soil_moisture=8, temperature=36))
        assert advice.main.startswith("Critical drought risk")
        assert len(advice.extra) == 2

    def test_low_moisture(self, make_reading):
        advice = irrigation_advice(make_reading(soil_moisture=14))
        assert advice.main.startswith("Soil moisture is low")

    def test_well_supplied(self, make_reading):
        advice = irrigation_advice(make_reading(soil_moisture=32, rainfall=8))
        assert advice.main.startswith("Soil is currently well supplied")

    def test_stable(self, make_reading):
        advice = irrigation_advice(make_reading(soil_moisture=32, rainfall=5))
        assert advice.main.startswith("Conditions are stable")


class TestAggregates:
    def test_daily_sums_sorted_by_day(self, make_reading):
        rows = [
            make_reading(farm_id="a", day=2, soil_moisture=10, temperature=20, rainfall=1),
            make_reading(farm_id="b", day=2, soil_moisture=20, temperature=30, rainfall=2),
            make_reading(farm_id="a", day=1, soil_moisture=5, temperature=25, rainfall=0),
        ]
        days = daily_aggregates(rows)
        assert [d.day for d in days] == ["2025-06-01", "2025-06-02"]
        assert days[1].soil_moisture == 30.0
        assert days[1].temperature == 50.0
        assert days[1].rainfall == 3.0

    def test_region_averages(self, make_reading):
        rows = [
            make_reading(region="North", soil_moisture=10),
            make_reading(region="North", soil_moisture=20),
            make_reading(region="Center", soil_moisture=11),
        ]
        out = region_averages(rows)
        assert [(r.region, r.soil_moisture) for r in out] == [
            ("North", 15), ("Center", 11), ("South", 0),
        ]


class TestNotifications:
    def test_labels(self):
        assert microinsurance_label("pending") == "Pending partner response"
        assert microinsurance_label("approved") == "Compensation approved"
        assert microinsurance_label("rejected") == "Claim rejected"
        assert microinsurance_label("none") == "Not triggered"

    def test_empty(self):
        summary = notification_summary([])
        assert summary.total == 0
        assert summary.latest is None
        assert summary.message == "No active alerts. All farms are stable"

    def test_latest_is_last_appended(self):
        alerts = [
            Alert(farm_id="a", type="water_stress", severity="high", triggered_at="2025-06-05T00:00:00Z"),
            Alert(farm_id="b", type="flood", severity="medium", triggered_at="2025-06-01T00:00:00Z"),
        ]
        summary = notification_summary(alerts)
        assert summary.total == 2
        assert summary.high_count == 1
        assert summary.latest == alerts[-1]
        assert summary.message == "Currently 2 active alerts (1 high). Latest: flood on b."
