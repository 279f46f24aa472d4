# terralink/routes/alerts.py
# ------------------------------------------------------------
# Alerts API
#
# Alerts are not stored: each request runs the detection
# engine over the in-memory dataset with the request's
# thresholds, then filters the result.
# ------------------------------------------------------------

from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..insights import microinsurance_label
from ..models import AlertType, Severity, Thresholds
from ..store import get_store
from ._common import dump, threshold_params

router = APIRouter(tags=["alerts"])


@router.get("/api/alerts")
def list_alerts(
    farm_id: Optional[str] = None,
    type: Optional[AlertType] = None,
    severity: Optional[Severity] = None,
    limit: int = Query(500, ge=1, le=5000),
    thresholds: Thresholds = Depends(threshold_params),
):
    """
    List detected alerts in engine order (per farm, rule by rule).

    Each item also carries a human-readable microinsurance label.
    """
    alerts = get_store().alerts(thresholds)

    out = []
    for a in alerts:
        if farm_id is not None and a.farm_id != farm_id:
            continue
        if type is not None and a.type != type:
            continue
        if severity is not None and a.severity != severity:
            continue
        item = dump(a)
        item["microinsuranceLabel"] = microinsurance_label(a.microinsurance_status)
        out.append(item)
        if len(out) >= limit:
            break

    return {"items": out, "thresholds": dump(thresholds)}
