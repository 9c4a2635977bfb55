"""Donor Registry — insert, sparse update and last-donated update for donor rows.

Invariants:
    - add_donor commits the donor row first, then ensures the district/taluk
      reference rows (single-record path of the normalizer)
    - update_donor applies only the fields the patch explicitly carries; id is never patched
    - An empty patch is a ValidationError raised before any statement is issued
    - Unknown donor ids raise NotFoundError
    - update_last_donated accepts any calendar date (no past-date check)
    - Reference upkeep follows the bulk import rules: a blank district registers
      nothing, a blank taluk registers only its district. Imported donors may carry
      blank locations, so a later patch never fails on them

Design Decisions:
    - Donor id captured before the normalizer runs: a rolled-back reference insert
      expires every instance in the session
    - Location-changing patches re-run the normalizer so reference tables learn new
      districts/taluks the same way inserts do; donor text stays the source of truth
"""

import logging
from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession

from donor_registry.core.domain_types import DonorId
from donor_registry.core.errors import ErrorContext, NotFoundError, ValidationError
from donor_registry.models.donor import Donor
from donor_registry.schemas.donor import DonorCreate, DonorPatch
from donor_registry.services.location_normalizer import LocationNormalizer

logger = logging.getLogger(__name__)


class DonorRegistry:
    """Donor write operations plus single-donor reads."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.locations = LocationNormalizer(db)

    async def get_donor(self, donor_id: int) -> Donor:
        donor = await self.db.get(Donor, donor_id)
        if donor is None:
            raise NotFoundError("Donor", donor_id, ErrorContext(donor_id=donor_id))
        return donor

    async def add_donor(self, data: DonorCreate) -> DonorId:
        """Insert a donor and register its location in the reference tables."""
        donor = Donor(**data.model_dump())
        self.db.add(donor)
        await self.db.commit()
        donor_id = DonorId(donor.id)
        logger.info("Donor added", extra={"donor_id": donor_id})

        await self._ensure_location(data.district, data.taluk)
        return donor_id

    async def update_donor(self, donor_id: int, patch: DonorPatch) -> None:
        """Apply a sparse patch to an existing donor."""
        changes = patch.changes()
        if not changes:
            raise ValidationError(
                "No fields to update", "body", ErrorContext(donor_id=donor_id),
            )

        donor = await self.get_donor(donor_id)
        for column, value in changes.items():
            setattr(donor, column, value)
        district, taluk = donor.district, donor.taluk
        await self.db.commit()
        logger.info(
            f"Donor updated: {', '.join(sorted(changes))}",
            extra={"donor_id": donor_id},
        )

        if "district" in changes or "taluk" in changes:
            await self._ensure_location(district, taluk)

    async def update_last_donated(self, donor_id: int, donation_date: date) -> None:
        donor = await self.get_donor(donor_id)
        donor.last_donated = donation_date
        await self.db.commit()
        logger.info(
            f"Last donation recorded as {donation_date.isoformat()}",
            extra={"donor_id": donor_id},
        )

    async def _ensure_location(self, district: str, taluk: str) -> None:
        """Register whichever of district/taluk is present; blanks register nothing."""
        if not district.strip():
            return
        district_id = await self.locations.ensure_district(district)
        if taluk.strip():
            await self.locations.ensure_taluk(taluk, district_id)
