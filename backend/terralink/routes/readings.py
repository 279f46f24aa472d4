# terralink/routes/readings.py
# ------------------------------------------------------------
# Readings API
#
# Returns the raw sensor readings in dataset order, with the
# dashboard's region / crop / farm filters.
# ------------------------------------------------------------

from typing import Optional

from fastapi import APIRouter, Query

from ..models import Crop, Region
from ..store import get_store
from ._common import dump_all

router = APIRouter(tags=["readings"])


@router.get("/api/readings")
def list_readings(
    region: Optional[Region] = None,
    crop: Optional[Crop] = None,
    farm_id: Optional[str] = None,
    limit: int = Query(1000, ge=1, le=10000),
):
    rows = get_store().filter(region=region, crop=crop, farm_id=farm_id)
    return {"items": dump_all(rows[:limit])}
