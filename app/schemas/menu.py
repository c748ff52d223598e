"""
Lunchbox API - Menu Schemas.

Pydantic schemas for the dish catalog endpoints.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

Category = Literal["hot", "cold_main", "cold_side", "cold_extra", "snack_crisps", "snack_fruit"]


class MenuItemOut(BaseModel):
    """Catalog entry as returned to clients."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    category: str
    active: bool


class MenuListResponse(BaseModel):
    items: List[MenuItemOut]


class MenuItemCreate(BaseModel):
    """
    Schema for creating (or, with ``id``, updating) a catalog item.

    Attributes:
        id: Existing item to update instead of creating.
        name: Dish name; surrounding whitespace is ignored.
        category: Item category, ``hot`` when omitted on create.
        active: Only ``false`` is meaningful on update (archive).
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"name": "Chicken curry", "category": "hot"}
        }
    )

    id: Optional[str] = None
    name: str = Field(..., max_length=200, description="Dish name")
    category: Optional[Category] = None
    active: Optional[bool] = None


class MenuItemPatch(BaseModel):
    """Partial update; only supplied fields change."""

    id: str = Field(..., min_length=1)
    name: Optional[str] = Field(None, max_length=200)
    category: Optional[Category] = None
    active: Optional[bool] = None


class MenuWriteResponse(BaseModel):
    ok: bool = True
    id: Optional[str] = None


class MenuDeleteResponse(BaseModel):
    ok: bool = True
    archived: Optional[bool] = None
    deleted: Optional[bool] = None
