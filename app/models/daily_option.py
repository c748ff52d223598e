"""
Lunchbox API - DailyOption ORM Model.

Which catalog items are offered at a location on a given date.
"""

from sqlalchemy import Column, Date, ForeignKey, Index, String

from app.database import Base


class DailyOption(Base):
    """
    Association of one MenuItem to one (location, date).

    No synthetic id: the (date, location_id, item_id) triple is the key.
    Rows for a date are always replaced wholesale.
    """

    __tablename__ = "daily_menu"
    __table_args__ = (
        Index("ix_daily_menu_location_date", "location_id", "date"),
    )

    date = Column(Date, primary_key=True)
    location_id = Column(String(36), primary_key=True)
    item_id = Column(
        String(36),
        ForeignKey("menu_items.id", ondelete="RESTRICT"),
        primary_key=True
    )

    def __repr__(self) -> str:
        return f"<DailyOption(date={self.date}, location={self.location_id}, item={self.item_id})>"
