"""
Lunchbox API - Daily Menu Schemas.

Pydantic schemas for assigning catalog items to dates.
"""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class DayOptions(BaseModel):
    """Items offered on one date; blank ids are ignored."""

    date: date
    itemIds: List[Optional[str]] = Field(default_factory=list)


class DailyMenuSave(BaseModel):
    """
    Schema for replacing the options of one or more dates.

    Attributes:
        locationId: Location the options apply to.
        days: Dates to replace; other dates are left untouched.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "locationId": "cdfad621-d9d1-4801-942e-eab2e07d94e4",
                "days": [{"date": "2024-06-03", "itemIds": ["item-1", "item-2"]}]
            }
        }
    )

    locationId: str = Field(..., min_length=1, max_length=36)
    days: List[DayOptions]


class DailyMenuDay(BaseModel):
    date: date
    itemIds: List[str]


class DailyMenuResponse(BaseModel):
    days: List[DailyMenuDay]
