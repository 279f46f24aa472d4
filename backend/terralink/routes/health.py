# terralink/routes/health.py
# ------------------------------------------------------------
# Health endpoint
#
# Purpose:
# - quick liveness check
# - dataset counts for UI chips
# ------------------------------------------------------------

from fastapi import APIRouter

import time

from ..config import settings
from ..models import iso_utc, utcnow
from ..store import get_store

router = APIRouter(tags=["health"])

# server start reference (module load time)
STARTED_AT = utcnow()


@router.get("/api/health")
def health():
    """
    Returns:
    - ok, utc
    - started_at, uptime_seconds
    - counts (readings, farms, alerts at configured thresholds)
    - source of the dataset
    - latency_ms (server-measured for this handler)
    """
    t0 = time.perf_counter()
    store = get_store()

    counts = {
        "readings": len(store),
        "farms": len(store.farm_ids()),
        "alerts": len(store.alerts(settings.thresholds())),
    }

    now = utcnow()
    uptime_seconds = int((now - STARTED_AT).total_seconds())
    latency_ms = round((time.perf_counter() - t0) * 1000, 2)

    return {
        "ok": True,
        "utc": iso_utc(now),
        "started_at": iso_utc(STARTED_AT),
        "uptime_seconds": uptime_seconds,
        "counts": counts,
        "source": store.source,
        "latency_ms": latency_ms,
    }
