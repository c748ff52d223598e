"""Lunchbox API - Pydantic Schemas Package."""

from app.schemas.common import format_validation_errors, validate_body
from app.schemas.menu import (
    MenuItemOut,
    MenuListResponse,
    MenuItemCreate,
    MenuItemPatch,
    MenuWriteResponse,
    MenuDeleteResponse,
)
from app.schemas.daily_menu import (
    DayOptions,
    DailyMenuSave,
    DailyMenuResponse,
)
from app.schemas.plan import (
    ColdBundle,
    PlanDaySave,
    PlanMonthSave,
    PlanResponse,
    parse_plan_payload,
)
from app.schemas.kitchen import KitchenWeekResponse
from app.schemas.profile import (
    ProfileUpdate,
    RoleUpdate,
    ProfileResponse,
    UserListResponse,
    OkResponse,
)

__all__ = [
    "format_validation_errors",
    "validate_body",
    # Menu
    "MenuItemOut",
    "MenuListResponse",
    "MenuItemCreate",
    "MenuItemPatch",
    "MenuWriteResponse",
    "MenuDeleteResponse",
    # Daily menu
    "DayOptions",
    "DailyMenuSave",
    "DailyMenuResponse",
    # Plan
    "ColdBundle",
    "PlanDaySave",
    "PlanMonthSave",
    "PlanResponse",
    "parse_plan_payload",
    # Kitchen
    "KitchenWeekResponse",
    # Profile
    "ProfileUpdate",
    "RoleUpdate",
    "ProfileResponse",
    "UserListResponse",
    "OkResponse",
]
