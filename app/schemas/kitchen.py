"""
Lunchbox API - Kitchen Schemas.

Response shapes for the kitchen's weekly roll-up.
"""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel


class KitchenItem(BaseModel):
    itemId: str
    name: str
    qty: int


class KitchenDetail(BaseModel):
    itemId: str
    name: str
    people: List[str]


class KitchenSession(BaseModel):
    """One lunch sitting: ``12:30``, ``13:00`` or ``unassigned``."""
    session: str
    items: List[KitchenItem]
    details: Optional[List[KitchenDetail]] = None


class KitchenDay(BaseModel):
    date: date
    sessions: List[KitchenSession]


class KitchenWeekResponse(BaseModel):
    byDate: List[KitchenDay]
