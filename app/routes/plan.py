# app/routes/plan.py
"""
Lunchbox API - Plan Routes.

A signed-in user's own lunch picks. The user id always comes from the
resolved principal, never from the request.
"""

from datetime import date
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_current_principal
from app.schemas.plan import (
    PlanDayOut,
    PlanDaySave,
    PlanItemOut,
    PlanResponse,
    parse_plan_payload,
)
from app.schemas.profile import OkResponse
from app.services import plan_store
from app.services.identity import Principal

router = APIRouter()


@router.get("", response_model=PlanResponse)
def get_my_plan(
    start: date = Query(..., alias="from"),
    end: date = Query(..., alias="to"),
    location_id: str = Query(..., alias="locationId", min_length=1, max_length=36),
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    """The caller's selections for each date in the range."""
    days = plan_store.get_mine(db, principal.id, location_id, start, end)
    return PlanResponse(days=[
        PlanDayOut(date=d["date"], items=[PlanItemOut.model_validate(i) for i in d["items"]])
        for d in days
    ])


@router.post("", response_model=OkResponse, response_model_exclude_none=True)
def save_my_plan(
    body: Dict[str, Any] = Body(...),
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    """
    Save one day (hot item or cold bundle) or a batch of lines.

    Day body: ``{date, locationId, hotItemId}`` or
    ``{date, locationId, cold: {mainId, sideId, extraId}}``.
    Batch body: ``{locationId, month?, lines: [{date, itemId}]}``.
    """
    payload = parse_plan_payload(body)

    if isinstance(payload, PlanDaySave):
        plan_store.save_day(
            db,
            principal.id,
            payload.locationId,
            payload.date,
            payload.to_selection(),
        )
    else:
        plan_store.save_month(
            db,
            principal.id,
            payload.locationId,
            payload.lines,
            month=payload.month,
        )
    return OkResponse()
