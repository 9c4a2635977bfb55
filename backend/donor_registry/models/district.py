"""District ORM — top level of the location reference hierarchy.

Invariants:
    - name is stored trimmed, with the casing it was first seen with
    - name_key = location_key(name) is unique: "Chennai" and "chennai" are the same district
    - Rows are created lazily by the normalizer and never updated or deleted

Design Decisions:
    - Comparison key computed in Python and stored, not lower() in SQL: the bulk
      planner, single-record lookups and the unique constraint all fold case with the
      same function, whatever the store's lower() does with non-ASCII text
"""

from datetime import datetime, timezone

from sqlalchemy import Integer, String, DateTime, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from donor_registry.db.base import Base


class District(Base):
    """District reference row."""
    __tablename__ = "districts"
    __table_args__ = (
        UniqueConstraint("name_key", name="uq_districts_name_key"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    name_key: Mapped[str] = mapped_column(String(120), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    taluks: Mapped[list["Taluk"]] = relationship(
        "Taluk", back_populates="district", order_by="Taluk.name",
    )
