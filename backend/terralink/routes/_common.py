# terralink/routes/_common.py
# ------------------------------------------------------------
# Shared helpers for the dataset-backed endpoints.
# Keeps route files small and consistent.
# ------------------------------------------------------------

from typing import Any, Dict, Iterable, List, Optional

from fastapi import HTTPException, Query
from pydantic import BaseModel, ValidationError

from ..config import settings
from ..models import Thresholds


def dump(obj: BaseModel) -> Dict[str, Any]:
    """
    JSON-ready dict using the camelCase wire names.
    """
    return obj.model_dump(mode="json", by_alias=True)


def dump_all(objs: Iterable[BaseModel]) -> List[Dict[str, Any]]:
    return [dump(o) for o in objs]


def threshold_params(
    drought_soil_pct: Optional[float] = Query(None),
    high_temp_c: Optional[float] = Query(None),
    flood_rain_mm_day: Optional[float] = Query(None),
) -> Thresholds:
    """
    Thresholds for this request: settings defaults, overridden per field
    by any query parameter given.
    """
    base = settings.thresholds()
    overrides = {
        k: v
        for k, v in {
            "drought_soil_pct": drought_soil_pct,
            "high_temp_c": high_temp_c,
            "flood_rain_mm_day": flood_rain_mm_day,
        }.items()
        if v is not None
    }
    try:
        return Thresholds.model_validate({**base.model_dump(), **overrides})
    except ValidationError as exc:
        # thresholds must be finite
        raise HTTPException(
            status_code=422,
            detail=[
                {"loc": ["query", *e["loc"]], "msg": e["msg"], "type": e["type"]}
                for e in exc.errors()
            ],
        )
