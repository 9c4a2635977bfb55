"""Taluk ORM — sub-district level of the location reference hierarchy.

Invariants:
    - Always belongs to a District (district_id FK)
    - (name_key, district_id) is unique: taluk names only collide within a district
    - Rows are created lazily by the normalizer and never updated or deleted
"""

from datetime import datetime, timezone

from sqlalchemy import ForeignKey, Integer, String, DateTime, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from donor_registry.db.base import Base


class Taluk(Base):
    """Taluk reference row, scoped to its district."""
    __tablename__ = "taluks"
    __table_args__ = (
        UniqueConstraint(
            "name_key", "district_id", name="uq_taluks_name_key_district",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    name_key: Mapped[str] = mapped_column(String(120), nullable=False)
    district_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("districts.id"), nullable=False, index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    district: Mapped["District"] = relationship(
        "District", back_populates="taluks",
    )
