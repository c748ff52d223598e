"""
Lunchbox API - Personal Plan Service.

Stores each user's lunch picks. A day is either one hot item or a complete
cold bundle (main + side + extra); every save replaces the day's lines.
"""

from collections import OrderedDict
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union
import logging

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from app.models import MenuItem, Plan, PlanLine
from app.utils.dates import parse_month, try_parse_date, validate_range
from app.utils.errors import ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HotSelection:
    hot_item_id: str

    def slots(self) -> List[Tuple[str, str]]:
        return [(self.hot_item_id, "hot")]


@dataclass(frozen=True)
class ColdSelection:
    main_id: str
    side_id: str
    extra_id: str

    def slots(self) -> List[Tuple[str, str]]:
        return [
            (self.main_id, "cold_main"),
            (self.side_id, "cold_side"),
            (self.extra_id, "cold_extra"),
        ]


Selection = Union[HotSelection, ColdSelection]

EXACTLY_ONE_MESSAGE = "Choose exactly one: hot OR cold bundle"


def build_selection(
    hot_item_id: Optional[str] = None,
    main_id: Optional[str] = None,
    side_id: Optional[str] = None,
    extra_id: Optional[str] = None,
) -> Selection:
    """
    Turn raw request fields into a hot or cold selection.

    Raises:
        ValidationError: Both forms present, neither present, or a cold
            bundle missing one of its three parts.
    """
    cold_parts = [main_id, side_id, extra_id]
    picked_hot = bool(hot_item_id)
    any_cold = any(cold_parts)

    if picked_hot and any_cold:
        raise ValidationError(EXACTLY_ONE_MESSAGE)
    if picked_hot:
        return HotSelection(hot_item_id)
    if not any_cold:
        raise ValidationError(EXACTLY_ONE_MESSAGE)
    if not all(cold_parts):
        raise ValidationError("Cold bundle needs a main, a side and an extra")
    return ColdSelection(main_id, side_id, extra_id)


def _check_selection(db: Session, selection: Selection) -> None:
    slots = selection.slots()
    ids = [item_id for item_id, _ in slots]
    items = {
        item.id: item
        for item in db.scalars(select(MenuItem).where(MenuItem.id.in_(ids))).all()
    }

    for item_id, expected in slots:
        item = items.get(item_id)
        if item is None:
            raise ValidationError(f"Unknown menu item: {item_id}")
        if not item.active:
            raise ValidationError(f"'{item.name}' is no longer on the menu")
        if item.category != expected:
            if isinstance(selection, ColdSelection):
                raise ValidationError("Cold bundle must be Main + Side + Extra")
            raise ValidationError("hotItemId must be a hot menu item")


def _load_items(db: Session, item_ids: Iterable[str]) -> Dict[str, MenuItem]:
    wanted = set(item_ids)
    if not wanted:
        return {}
    items = {
        item.id: item
        for item in db.scalars(select(MenuItem).where(MenuItem.id.in_(wanted))).all()
    }
    missing = wanted - set(items)
    if missing:
        raise ValidationError(f"Unknown menu item(s): {', '.join(sorted(missing))}")
    return items


def _is_complete_day(items: List[MenuItem]) -> bool:
    """One active hot item, or exactly one active item per cold slot."""
    if not all(item.active for item in items):
        return False
    categories = sorted(item.category for item in items)
    return categories in (["hot"], ["cold_extra", "cold_main", "cold_side"])


def _upsert_plan(db: Session, user_id: str, day: date, location_id: str) -> Plan:
    plan = db.scalars(
        select(Plan).where(
            Plan.user_id == user_id,
            Plan.date == day,
            Plan.location_id == location_id,
        )
    ).first()
    if plan is None:
        plan = Plan(user_id=user_id, date=day, location_id=location_id)
        db.add(plan)
        db.flush()
    return plan


def _replace_lines(db: Session, plan: Plan, day: date, item_ids: Iterable[str]) -> int:
    db.execute(delete(PlanLine).where(PlanLine.plan_id == plan.id, PlanLine.date == day))
    lines = [PlanLine(plan_id=plan.id, date=day, item_id=item_id) for item_id in item_ids]
    db.add_all(lines)
    db.flush()
    return len(lines)


def get_mine(db: Session, user_id: str, location_id: str, start: date, end: date) -> List[Dict[str, Any]]:
    """
    The caller's selections between two dates.

    Only rows owned by ``user_id`` are ever returned.

    Returns:
        List[Dict]: ``[{"date": date, "items": [MenuItem, ...]}]``, dates
        ascending and items sorted by name.
    """
    validate_range(start, end)
    rows = db.execute(
        select(PlanLine.date, MenuItem)
        .join(Plan, Plan.id == PlanLine.plan_id)
        .join(MenuItem, MenuItem.id == PlanLine.item_id)
        .where(
            Plan.user_id == user_id,
            Plan.location_id == location_id,
            PlanLine.date >= start,
            PlanLine.date <= end,
        )
        .order_by(PlanLine.date, MenuItem.name)
    ).all()

    by_date: Dict[date, List[MenuItem]] = OrderedDict()
    for day, item in rows:
        by_date.setdefault(day, []).append(item)
    return [{"date": day, "items": items} for day, items in by_date.items()]


def save_day(db: Session, user_id: str, location_id: str, day: date, selection: Selection) -> int:
    """
    Replace the caller's picks for one day.

    Every id is checked against its slot's category before anything is
    written.

    Returns:
        int: Number of lines written (1 for hot, 3 for cold).

    Raises:
        ValidationError: Unknown, archived or wrong-category items.
    """
    if not location_id:
        raise ValidationError("date, locationId required")

    _check_selection(db, selection)

    plan = _upsert_plan(db, user_id, day, location_id)
    written = _replace_lines(db, plan, day, [item_id for item_id, _ in selection.slots()])
    db.commit()

    kind = "hot" if isinstance(selection, HotSelection) else "cold"
    logger.info(f"Saved {kind} plan for user {user_id} on {day.isoformat()} at {location_id}")
    return written


def _group_lines(raw_lines: Iterable[Any], bounds: Optional[Tuple[date, date]]) -> Dict[date, List[str]]:
    """Group well-formed ``{date, itemId}`` entries, dropping the rest."""
    by_date: Dict[date, "OrderedDict[str, None]"] = OrderedDict()
    for entry in raw_lines:
        if not isinstance(entry, dict):
            continue
        day = try_parse_date(entry.get("date"))
        item_id = entry.get("itemId")
        if day is None or not item_id or not isinstance(item_id, str):
            continue
        if bounds and not (bounds[0] <= day <= bounds[1]):
            continue
        by_date.setdefault(day, OrderedDict())[item_id] = None
    return {day: list(ids) for day, ids in by_date.items()}


def save_month(
    db: Session,
    user_id: str,
    location_id: str,
    raw_lines: Iterable[Any],
    month: Optional[str] = None,
) -> int:
    """
    Batch-save many days at once.

    Malformed entries are skipped rather than failing the batch and
    duplicate (date, itemId) pairs collapse. A day is only written when it
    holds one active hot item or a complete active cold bundle; any other
    day is dropped like a malformed line. With ``month`` the caller's
    whole month at this location is cleared first; without it only the
    dates present in ``raw_lines`` are replaced.

    Returns:
        int: Number of days written.

    Raises:
        ValidationError: Missing location, bad month or unknown item ids.
    """
    if not location_id:
        raise ValidationError("locationId required")

    bounds = parse_month(month) if month else None
    grouped = _group_lines(raw_lines, bounds)
    items = _load_items(db, (i for ids in grouped.values() for i in ids))

    by_date = {
        day: ids for day, ids in grouped.items()
        if _is_complete_day([items[i] for i in ids])
    }
    if len(by_date) < len(grouped):
        logger.info(f"Dropped {len(grouped) - len(by_date)} incomplete day(s) for user {user_id}")

    if bounds:
        plan_ids = select(Plan.id).where(
            Plan.user_id == user_id,
            Plan.location_id == location_id,
            Plan.date >= bounds[0],
            Plan.date <= bounds[1],
        )
        db.execute(
            delete(PlanLine)
            .where(PlanLine.plan_id.in_(plan_ids))
            .execution_options(synchronize_session=False)
        )
        db.execute(
            delete(Plan)
            .where(Plan.id.in_(plan_ids))
            .execution_options(synchronize_session=False)
        )

    for day, item_ids in by_date.items():
        plan = _upsert_plan(db, user_id, day, location_id)
        _replace_lines(db, plan, day, item_ids)
    db.commit()

    logger.info(f"Saved {len(by_date)} day(s) for user {user_id} at {location_id}")
    return len(by_date)
