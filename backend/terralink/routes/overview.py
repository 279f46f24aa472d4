# terralink/routes/overview.py
# ------------------------------------------------------------
# Overview, analytics and notification bell endpoints.
#
# All values are derived on request from the dataset and the
# detected alerts; nothing is cached.
# ------------------------------------------------------------

from fastapi import APIRouter, Depends

from ..insights import compute_kpi, daily_aggregates, notification_summary, region_averages
from ..models import Thresholds
from ..store import get_store
from ._common import dump, dump_all, threshold_params

router = APIRouter(tags=["overview"])


@router.get("/api/overview")
def overview(thresholds: Thresholds = Depends(threshold_params)):
    """
    KPI cards: average soil moisture / temperature, total rainfall,
    active alert count.
    """
    store = get_store()
    return dump(compute_kpi(store.readings, store.alerts(thresholds)))


@router.get("/api/analytics/daily")
def analytics_daily():
    return {"items": dump_all(daily_aggregates(get_store().readings))}


@router.get("/api/analytics/regions")
def analytics_regions():
    return {"items": dump_all(region_averages(get_store().readings))}


@router.get("/api/notifications")
def notifications(thresholds: Thresholds = Depends(threshold_params)):
    return dump(notification_summary(get_store().alerts(thresholds)))
