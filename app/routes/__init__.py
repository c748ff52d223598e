"""Lunchbox API - Routes Package."""

from app.routes import (
    auth,
    menu,
    daily_menu,
    plan,
    kitchen,
    profile,
    admin,
)

__all__ = [
    "auth",
    "menu",
    "daily_menu",
    "plan",
    "kitchen",
    "profile",
    "admin",
]
