"""
Lunchbox API - Plan Schemas.

The ``/plan`` POST body comes in two shapes: a single day (hot item or
cold bundle) or a month batch of ``{date, itemId}`` lines.
"""

from datetime import date
from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.common import validate_body
from app.services.plan_store import Selection, build_selection
from app.utils.errors import ValidationError


class ColdBundle(BaseModel):
    mainId: Optional[str] = None
    sideId: Optional[str] = None
    extraId: Optional[str] = None


class PlanDaySave(BaseModel):
    """
    One day's pick: either ``hotItemId`` or a complete ``cold`` bundle.

    Attributes:
        date: Day being ordered.
        locationId: Location the order is for.
        hotItemId: Hot dish id.
        cold: Cold bundle ids (main, side, extra).
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "date": "2024-06-03",
                "locationId": "cdfad621-d9d1-4801-942e-eab2e07d94e4",
                "cold": {"mainId": "m1", "sideId": "s1", "extraId": "e1"}
            }
        }
    )

    date: date
    locationId: str = Field(..., min_length=1, max_length=36)
    hotItemId: Optional[str] = None
    cold: Optional[ColdBundle] = None

    def to_selection(self) -> Selection:
        cold = self.cold or ColdBundle()
        return build_selection(
            hot_item_id=self.hotItemId,
            main_id=cold.mainId,
            side_id=cold.sideId,
            extra_id=cold.extraId,
        )


class PlanMonthSave(BaseModel):
    """
    Batch of ``{date, itemId}`` lines, optionally scoped to a ``YYYY-MM`` month.

    Lines are kept loosely typed so malformed entries can be skipped
    individually instead of rejecting the whole batch.
    """

    locationId: str = Field(..., min_length=1, max_length=36)
    month: Optional[str] = Field(None, pattern=r"^\d{4}-\d{2}$")
    lines: List[Any]


def parse_plan_payload(body: Any) -> Union[PlanDaySave, PlanMonthSave]:
    """
    Pick the body shape: month batch when ``lines`` is present, else a day.

    Raises:
        ValidationError: If the body matches neither shape.
    """
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    if "lines" in body:
        return validate_body(PlanMonthSave, body)
    return validate_body(PlanDaySave, body)


class PlanItemOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    category: str


class PlanDayOut(BaseModel):
    date: date
    items: List[PlanItemOut]


class PlanResponse(BaseModel):
    days: List[PlanDayOut]
