# terralink/routes/farms.py
# ------------------------------------------------------------
# Farms API
#
# Used by:
# - Map markers (summary list with position + status)
# - Farm details page (latest reading, advice, series, alerts)
# ------------------------------------------------------------

from fastapi import APIRouter, Depends

from ..exceptions import FarmNotFoundError
from ..generators import DEFAULT_FARMS
from ..insights import farm_status, irrigation_advice, microinsurance_label
from ..models import FarmSummary, Thresholds
from ..store import get_store
from ._common import dump, dump_all, threshold_params

router = APIRouter(tags=["farms"])


@router.get("/api/farms")
def list_farms(thresholds: Thresholds = Depends(threshold_params)):
    """
    One summary per farm, in first-seen dataset order.
    """
    store = get_store()
    alerts = store.alerts(thresholds)

    counts = {}
    for a in alerts:
        counts[a.farm_id] = counts.get(a.farm_id, 0) + 1

    out = []
    for farm_id in store.farm_ids():
        latest = store.farm_series(farm_id)[-1]
        profile = DEFAULT_FARMS.get(farm_id, {})
        out.append(FarmSummary(
            farm_id=farm_id,
            name=profile.get("name"),
            region=latest.region,
            crop=latest.crop,
            position=profile.get("position"),
            latest=latest,
            status=farm_status(latest),
            alert_count=counts.get(farm_id, 0),
        ))
    return {"items": dump_all(out)}


@router.get("/api/farms/{farm_id}")
def farm_detail(farm_id: str, thresholds: Thresholds = Depends(threshold_params)):
    """
    Detail view for one farm. Unknown farms -> 404.
    """
    store = get_store()
    series = store.farm_series(farm_id)
    if not series:
        raise FarmNotFoundError(farm_id)

    latest = series[-1]
    farm_alerts = []
    for a in store.alerts(thresholds):
        if a.farm_id != farm_id:
            continue
        item = dump(a)
        item["microinsuranceLabel"] = microinsurance_label(a.microinsurance_status)
        farm_alerts.append(item)

    return {
        "farmId": farm_id,
        "region": latest.region,
        "crop": latest.crop,
        "latest": dump(latest),
        "status": dump(farm_status(latest)),
        "advice": dump(irrigation_advice(latest)),
        "series": dump_all(series),
        "alerts": farm_alerts,
    }
