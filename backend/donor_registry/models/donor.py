"""Donor ORM — a registered blood donor.

Invariants:
    - name, contact_number, blood_group are non-nullable
    - district/taluk are denormalized text copies, NOT foreign keys to the reference tables
    - last_donated drives eligibility (90-day cooldown); NULL means never donated
    - Every column a search can filter on is indexed (blood_group, district, taluk,
      name, last_donated)

Design Decisions:
    - Denormalized location text: searches filter without JOINs; reference tables
      exist for dropdown listings and may drift from donor text values
    - date_of_birth kept as free text: imported form data is not reliably ISO formatted
"""

from datetime import date, datetime, timezone

from sqlalchemy import Integer, String, Date, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from donor_registry.db.base import Base


class Donor(Base):
    """Donor record."""
    __tablename__ = "donors"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    email: Mapped[str | None] = mapped_column(String(254), nullable=True)
    contact_number: Mapped[str] = mapped_column(String(32), nullable=False)
    blood_group: Mapped[str] = mapped_column(
        String(10), nullable=False, index=True,
    )
    weight: Mapped[int | None] = mapped_column(Integer, nullable=True)
    date_of_birth: Mapped[str | None] = mapped_column(String(32), nullable=True)
    batch: Mapped[str | None] = mapped_column(String(64), nullable=True)
    district: Mapped[str] = mapped_column(
        String(120), nullable=False, index=True,
    )
    taluk: Mapped[str] = mapped_column(String(120), nullable=False, index=True)
    village_municipality_corporation: Mapped[str | None] = mapped_column(
        String(200), nullable=True,
    )
    last_donated: Mapped[date | None] = mapped_column(
        Date, nullable=True, index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
