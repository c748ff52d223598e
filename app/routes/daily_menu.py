# app/routes/daily_menu.py
"""
Lunchbox API - Daily Menu Routes.

Catering/admin assign which catalog items are offered per location and day.
"""

from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import AuthorizedUser, require_catering
from app.schemas.daily_menu import DailyMenuResponse, DailyMenuSave
from app.schemas.profile import OkResponse
from app.services import daily_options

router = APIRouter()


@router.get("", response_model=DailyMenuResponse)
def get_daily_menu(
    start: date = Query(..., alias="from"),
    end: date = Query(..., alias="to"),
    location_id: str = Query(..., alias="locationId", min_length=1, max_length=36),
    db: Session = Depends(get_db),
    user: AuthorizedUser = Depends(require_catering),
):
    """Assigned item ids for each date in the range."""
    return {"days": daily_options.get_range(db, location_id, start, end)}


@router.post("", response_model=OkResponse, response_model_exclude_none=True)
def save_daily_menu(
    payload: DailyMenuSave,
    db: Session = Depends(get_db),
    user: AuthorizedUser = Depends(require_catering),
):
    """Replace the options of every date in the body; other dates are untouched."""
    daily_options.set_range(
        db,
        payload.locationId,
        [(day.date, day.itemIds) for day in payload.days],
    )
    return OkResponse()
