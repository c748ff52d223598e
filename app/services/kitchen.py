"""
Lunchbox API - Kitchen Aggregation Service.

Rolls individual plan lines up into what the kitchen has to cook: counts per
date, per lunch session, per item, with an optional roster of names.
"""

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Iterable, List, Optional
import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models import LUNCH_SESSIONS, MenuItem, Plan, PlanLine, Profile
from app.utils.dates import validate_range

logger = logging.getLogger(__name__)

UNASSIGNED = "unassigned"
SESSION_ORDER = (*LUNCH_SESSIONS, UNASSIGNED)
UNKNOWN_PERSON = "Unknown"


@dataclass(frozen=True)
class KitchenRow:
    """One plan line joined with its item name and owner's profile."""
    date: date
    item_id: str
    item_name: str
    lunch_session: Optional[str] = None
    person: Optional[str] = None


def session_key(raw: Optional[str]) -> str:
    """Map a stored lunch session onto a bucket; anything odd is unassigned."""
    return raw if raw in LUNCH_SESSIONS else UNASSIGNED


def summarize_rows(
    rows: Iterable[KitchenRow],
    include_details: bool = True,
    include_empty: bool = False,
) -> List[Dict[str, Any]]:
    """
    Group flat rows by date, then session, then item.

    Args:
        rows: Joined plan lines.
        include_details: Attach the per-item roster of names.
        include_empty: Emit all three session buckets for every date even
            when a bucket has no items.

    Returns:
        List[Dict]: ``[{"date", "sessions": [{"session", "items", "details"}]}]``
        with dates ascending, sessions in SESSION_ORDER and items by name.
    """
    by_date: Dict[date, Dict[str, Dict[str, Dict[str, Any]]]] = {}

    for row in rows:
        sessions = by_date.setdefault(row.date, {s: {} for s in SESSION_ORDER})
        bucket = sessions[session_key(row.lunch_session)]
        entry = bucket.setdefault(row.item_id, {
            "itemId": row.item_id,
            "name": row.item_name,
            "qty": 0,
            "people": [],
        })
        entry["qty"] += 1
        entry["people"].append(row.person or UNKNOWN_PERSON)

    out = []
    for day in sorted(by_date):
        sessions_out = []
        for session in SESSION_ORDER:
            bucket = by_date[day][session]
            if not bucket and not include_empty:
                continue

            entries = sorted(
                bucket.values(),
                key=lambda e: (e["name"].lower(), e["name"], e["itemId"]),
            )
            session_out: Dict[str, Any] = {
                "session": session,
                "items": [
                    {"itemId": e["itemId"], "name": e["name"], "qty": e["qty"]}
                    for e in entries
                ],
            }
            if include_details:
                session_out["details"] = [
                    {
                        "itemId": e["itemId"],
                        "name": e["name"],
                        "people": sorted(e["people"], key=lambda p: (p.lower(), p)),
                    }
                    for e in entries
                ]
            sessions_out.append(session_out)
        out.append({"date": day, "sessions": sessions_out})
    return out


def fetch_rows(db: Session, location_id: str, start: date, end: date) -> List[KitchenRow]:
    """Load plan lines for a location and date range, flattened for grouping."""
    result = db.execute(
        select(
            PlanLine.date,
            PlanLine.item_id,
            MenuItem.name,
            Profile.lunch_session,
            Profile.name,
        )
        .join(Plan, Plan.id == PlanLine.plan_id)
        .join(MenuItem, MenuItem.id == PlanLine.item_id)
        .outerjoin(Profile, Profile.id == Plan.user_id)
        .where(
            Plan.location_id == location_id,
            PlanLine.date >= start,
            PlanLine.date <= end,
        )
    ).all()

    return [
        KitchenRow(
            date=day,
            item_id=item_id,
            item_name=item_name,
            lunch_session=lunch_session,
            person=person,
        )
        for day, item_id, item_name, lunch_session, person in result
    ]


def summarize(
    db: Session,
    location_id: str,
    start: date,
    end: date,
    include_details: bool = True,
    include_empty: bool = False,
) -> List[Dict[str, Any]]:
    """Kitchen summary for a location between two dates."""
    validate_range(start, end)
    rows = fetch_rows(db, location_id, start, end)
    logger.info(f"Kitchen summary for {location_id} {start}..{end}: {len(rows)} line(s)")
    return summarize_rows(rows, include_details=include_details, include_empty=include_empty)
