"""
Lunchbox API - ORM Models Package.

Export all SQLAlchemy models so they register on Base.metadata.
"""

from app.models.profile import Profile, ROLES, LUNCH_SESSIONS
from app.models.menu_item import MenuItem, CATEGORIES
from app.models.daily_option import DailyOption
from app.models.plan import Plan, PlanLine

__all__ = [
    "Profile",
    "MenuItem",
    "DailyOption",
    "Plan",
    "PlanLine",
    "ROLES",
    "LUNCH_SESSIONS",
    "CATEGORIES",
]
