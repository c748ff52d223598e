"""Lunchbox API - Services Package."""

from . import daily_options, kitchen, menu_catalog, plan_store, profiles
from .identity import (
    IdentityProvider,
    Principal,
    identity_provider,
    get_identity_provider,
)

__all__ = [
    "daily_options",
    "kitchen",
    "menu_catalog",
    "plan_store",
    "profiles",
    "IdentityProvider",
    "Principal",
    "identity_provider",
    "get_identity_provider",
]
