"""
Lunchbox API - Menu Catalog Service.

CRUD over the dish catalog. Archiving is the normal way to remove an item;
hard deletes only succeed for items nothing references.
"""

from typing import Any, List, Mapping, Optional
import logging

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models import CATEGORIES, MenuItem
from app.utils.errors import ConflictError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

IN_USE_MESSAGE = "Cannot delete: item is referenced by existing plans/options."


def _clean_name(name: Optional[str]) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError("name is required")
    return cleaned


def _check_category(category: str) -> str:
    if category not in CATEGORIES:
        raise ValidationError(f"category must be one of: {', '.join(CATEGORIES)}")
    return category


def _find_by_name(db: Session, name: str, active_only: bool = False) -> Optional[MenuItem]:
    stmt = select(MenuItem).where(func.lower(MenuItem.name) == name.lower())
    if active_only:
        stmt = stmt.where(MenuItem.active.is_(True))
    # Prefer an active row if several spellings exist
    stmt = stmt.order_by(MenuItem.active.desc(), MenuItem.created_at)
    return db.scalars(stmt).first()


def _get_or_404(db: Session, item_id: str) -> MenuItem:
    item = db.get(MenuItem, item_id)
    if item is None:
        raise NotFoundError("Menu item not found")
    return item


def list_items(db: Session, include_inactive: bool = False) -> List[MenuItem]:
    """List catalog items sorted by (category, name)."""
    stmt = select(MenuItem).order_by(MenuItem.category, MenuItem.name)
    if not include_inactive:
        stmt = stmt.where(MenuItem.active.is_(True))
    return list(db.scalars(stmt).all())


def create_item(db: Session, name: str, category: Optional[str] = None) -> MenuItem:
    """
    Create a catalog item, or reactivate one with the same name.

    Names match case-insensitively. A match (active or archived) is
    reactivated with the new spelling instead of inserting a duplicate.

    Args:
        db: Database session.
        name: Dish name, trimmed before use.
        category: Item category; defaults to ``hot`` for new items.

    Returns:
        MenuItem: The created or reactivated item.

    Raises:
        ValidationError: Empty name or unknown category.
    """
    cleaned = _clean_name(name)
    if category is not None:
        _check_category(category)

    existing = _find_by_name(db, cleaned)
    if existing is not None:
        was_active = existing.active
        existing.name = cleaned
        existing.active = True
        if category is not None:
            existing.category = category
        db.commit()
        if not was_active:
            logger.info(f"Reactivated menu item {existing.id} ({cleaned})")
        return existing

    item = MenuItem(name=cleaned, category=category or "hot", active=True)
    db.add(item)
    db.commit()
    logger.info(f"Created menu item {item.id} ({cleaned}, {item.category})")
    return item


def update_item(db: Session, item_id: str, patch: Mapping[str, Any]) -> MenuItem:
    """
    Apply a partial update; only supplied keys change.

    An empty patch is a successful no-op. Archived items cannot be
    switched back on here; creating the name again reactivates it.

    Raises:
        NotFoundError: Unknown id.
        ValidationError: Unarchive attempt, empty name, name clash or
            unknown category.
    """
    item = _get_or_404(db, item_id)
    if not patch:
        return item

    if patch.get("active") is True and not item.active:
        raise ValidationError("Archived items cannot be restored; create a new item instead")

    if "name" in patch:
        cleaned = _clean_name(patch["name"])
        clash = _find_by_name(db, cleaned, active_only=True)
        if clash is not None and clash.id != item.id:
            raise ValidationError(f"An active item named '{cleaned}' already exists")
        item.name = cleaned

    if "category" in patch:
        item.category = _check_category(patch["category"])

    if patch.get("active") is False:
        item.active = False

    db.commit()
    logger.info(f"Updated menu item {item.id}: {sorted(patch)}")
    return item


def archive_item(db: Session, item_id: str) -> MenuItem:
    """Soft-delete an item by marking it inactive."""
    item = _get_or_404(db, item_id)
    item.active = False
    db.commit()
    logger.info(f"Archived menu item {item.id}")
    return item


def _is_foreign_key_violation(exc: IntegrityError) -> bool:
    orig = exc.orig
    if getattr(orig, "pgcode", None) == "23503":
        return True
    return "foreign key" in str(orig).lower()


def hard_delete_item(db: Session, item_id: str) -> None:
    """
    Physically delete an item.

    Raises:
        NotFoundError: Unknown id.
        ConflictError: The item is still referenced by plan lines or daily
            options.
        ValidationError: Any other integrity failure from the store.
    """
    _get_or_404(db, item_id)
    try:
        db.execute(delete(MenuItem).where(MenuItem.id == item_id))
        db.commit()
    except IntegrityError as e:
        db.rollback()
        if _is_foreign_key_violation(e):
            raise ConflictError(IN_USE_MESSAGE)
        raise ValidationError(str(e.orig))
    logger.info(f"Hard-deleted menu item {item_id}")
