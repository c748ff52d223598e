# app/routes/kitchen.py
"""
Lunchbox API - Kitchen Routes.

Weekly roll-up of everyone's picks for the kitchen.
"""

from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import AuthorizedUser, require_catering
from app.schemas.kitchen import KitchenWeekResponse
from app.services import kitchen

router = APIRouter()


@router.get("", response_model=KitchenWeekResponse, response_model_exclude_none=True)
def kitchen_week(
    start: date = Query(..., alias="from"),
    end: date = Query(..., alias="to"),
    location_id: str = Query(..., alias="locationId", min_length=1, max_length=36),
    details: bool = Query(True),
    include_empty: bool = Query(False, alias="includeEmpty"),
    db: Session = Depends(get_db),
    user: AuthorizedUser = Depends(require_catering),
):
    """
    Quantities per date, lunch session and item.

    ``details=0`` drops the per-item name rosters; ``includeEmpty=1`` lists
    every session bucket even when nobody picked anything for it.
    """
    by_date = kitchen.summarize(
        db,
        location_id,
        start,
        end,
        include_details=details,
        include_empty=include_empty,
    )
    return {"byDate": by_date}
