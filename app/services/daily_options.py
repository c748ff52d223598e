"""
Lunchbox API - Daily Option Service.

Per-location, per-date allow-list of offered catalog items. Each write
replaces a date's options wholesale.
"""

from collections import OrderedDict
from datetime import date
from typing import Dict, Iterable, List, Sequence, Tuple
import logging

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from app.models import DailyOption, MenuItem
from app.utils.dates import validate_range
from app.utils.errors import ValidationError

logger = logging.getLogger(__name__)


def _clean_ids(item_ids: Iterable[str]) -> List[str]:
    """Drop falsy ids and duplicates, keeping first-seen order."""
    return list(OrderedDict.fromkeys(i for i in item_ids if i))


def get_range(db: Session, location_id: str, start: date, end: date) -> List[Dict]:
    """
    Options for each date in [start, end] that has any.

    Returns:
        List[Dict]: ``[{"date": date, "itemIds": [...]}, ...]`` ordered by date.
    """
    validate_range(start, end)
    rows = db.execute(
        select(DailyOption.date, DailyOption.item_id)
        .where(
            DailyOption.location_id == location_id,
            DailyOption.date >= start,
            DailyOption.date <= end,
        )
        .order_by(DailyOption.date, DailyOption.item_id)
    ).all()

    by_date: Dict[date, List[str]] = OrderedDict()
    for day, item_id in rows:
        by_date.setdefault(day, []).append(item_id)
    return [{"date": day, "itemIds": ids} for day, ids in by_date.items()]


def set_range(db: Session, location_id: str, days: Sequence[Tuple[date, Iterable[str]]]) -> int:
    """
    Replace the options of every supplied date.

    Dates not supplied are left untouched. All dates commit together.

    Args:
        db: Database session.
        location_id: Location the options belong to.
        days: (date, item ids) pairs; ids are de-duplicated and falsy ones
            dropped.

    Returns:
        int: Number of option rows written.

    Raises:
        ValidationError: If any item id is not in the catalog.
    """
    if not location_id:
        raise ValidationError("locationId is required")

    cleaned = [(day, _clean_ids(ids)) for day, ids in days]

    wanted = {i for _, ids in cleaned for i in ids}
    if wanted:
        known = set(db.scalars(select(MenuItem.id).where(MenuItem.id.in_(wanted))).all())
        missing = wanted - known
        if missing:
            raise ValidationError(f"Unknown menu item(s): {', '.join(sorted(missing))}")

    written = 0
    for day, ids in cleaned:
        db.execute(
            delete(DailyOption).where(
                DailyOption.location_id == location_id,
                DailyOption.date == day,
            )
        )
        db.add_all(DailyOption(date=day, location_id=location_id, item_id=i) for i in ids)
        # Sessions don't autoflush; a repeated date must see these rows
        db.flush()
        written += len(ids)
    db.commit()

    logger.info(f"Daily options set for location {location_id}: {len(cleaned)} day(s), {written} row(s)")
    return written
