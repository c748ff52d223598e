# app/routes/menu.py
"""
Lunchbox API - Menu Routes.

Catalog listing is open to everyone; changes need catering or admin.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import AuthorizedUser, require_catering
from app.schemas.menu import (
    MenuDeleteResponse,
    MenuItemCreate,
    MenuItemOut,
    MenuItemPatch,
    MenuListResponse,
    MenuWriteResponse,
)
from app.services import menu_catalog

router = APIRouter()


@router.get("", response_model=MenuListResponse)
def list_menu(
    all_items: bool = Query(False, alias="all"),
    db: Session = Depends(get_db),
):
    """List catalog items (active only unless ``?all=1``)."""
    items = menu_catalog.list_items(db, include_inactive=all_items)
    return MenuListResponse(items=[MenuItemOut.model_validate(i) for i in items])


@router.post("", response_model=MenuWriteResponse, response_model_exclude_none=True)
def create_menu_item(
    payload: MenuItemCreate,
    db: Session = Depends(get_db),
    user: AuthorizedUser = Depends(require_catering),
):
    """
    Create an item, or update it when ``id`` is supplied.

    Re-creating an archived name reactivates that item.
    """
    if payload.id:
        patch = payload.model_dump(exclude_unset=True, exclude={"id"})
        item = menu_catalog.update_item(db, payload.id, patch)
    else:
        item = menu_catalog.create_item(db, payload.name, payload.category)
        if payload.active is False:
            item = menu_catalog.archive_item(db, item.id)
    return MenuWriteResponse(id=item.id)


@router.patch("", response_model=MenuWriteResponse, response_model_exclude_none=True)
def update_menu_item(
    payload: MenuItemPatch,
    db: Session = Depends(get_db),
    user: AuthorizedUser = Depends(require_catering),
):
    """Partially update an item. Archived items cannot be switched back on."""
    patch = payload.model_dump(exclude_unset=True, exclude={"id"})
    menu_catalog.update_item(db, payload.id, patch)
    return MenuWriteResponse()


@router.delete("", response_model=MenuDeleteResponse, response_model_exclude_none=True)
def delete_menu_item(
    item_id: str = Query(..., alias="id", min_length=1),
    hard: bool = Query(False),
    db: Session = Depends(get_db),
    user: AuthorizedUser = Depends(require_catering),
):
    """Archive an item, or physically delete it with ``?hard=true``."""
    if not hard:
        menu_catalog.archive_item(db, item_id)
        return MenuDeleteResponse(archived=True)

    menu_catalog.hard_delete_item(db, item_id)
    return MenuDeleteResponse(deleted=True)
