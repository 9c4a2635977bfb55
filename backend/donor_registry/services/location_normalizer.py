"""Location Normalizer — idempotent get-or-create for district/taluk reference rows.

Invariants:
    - Lookups compare name_key = location_key(name), the column the unique constraints cover,
      so single-record and bulk paths resolve a name to the same row
    - ensure_* never creates a second row for a name that differs only in case/whitespace
    - A unique-constraint violation on insert means another writer won the race:
      the failed insert is rolled back and the lookup re-run; only if the row is
      still missing is ConflictError raised
    - bulk_normalize writes each distinct district once, then each distinct taluk once

Design Decisions:
    - Commit per created row: each insert is its own unit, so rolling back a lost race
      never discards earlier work in the same session
    - No transaction spans insert-donor + ensure-references (callers commit the donor
      first); a crash in between leaves the donor without reference rows
"""

import logging
from dataclasses import dataclass, field

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from donor_registry.core.domain_types import DistrictId, TalukId
from donor_registry.core.errors import ConflictError, ErrorContext
from donor_registry.core.location_names import (
    LocationKey, TalukKey, location_key, normalize_location_name,
    plan_locations, taluk_key,
)
from donor_registry.models.district import District
from donor_registry.models.taluk import Taluk

logger = logging.getLogger(__name__)


@dataclass
class BulkNormalizeResult:
    """Identifier maps produced by bulk_normalize, plus how many rows were new."""
    district_ids: dict[LocationKey, DistrictId] = field(default_factory=dict)
    taluk_ids: dict[TalukKey, TalukId] = field(default_factory=dict)
    districts_created: int = 0
    taluks_created: int = 0


class LocationNormalizer:
    """Maintains the district/taluk reference tables."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def ensure_district(self, name: str) -> DistrictId:
        """Return the id of the district named `name`, creating it if absent."""
        district_id, _ = await self._get_or_create_district(
            normalize_location_name(name, "district"),
        )
        return district_id

    async def ensure_taluk(self, name: str, district_id: DistrictId) -> TalukId:
        """Return the id of taluk `name` under `district_id`, creating it if absent."""
        taluk_id, _ = await self._get_or_create_taluk(
            normalize_location_name(name, "taluk"), district_id,
        )
        return taluk_id

    async def bulk_normalize(
        self, records: list[tuple[str | None, str | None]],
    ) -> BulkNormalizeResult:
        """Register every distinct district, then every distinct taluk, in `records`."""
        plan = plan_locations(records)
        result = BulkNormalizeResult()

        for d_key, d_name in plan.districts.items():
            district_id, created = await self._get_or_create_district(d_name)
            result.district_ids[d_key] = district_id
            result.districts_created += created

        for d_key, taluks in plan.taluks.items():
            d_name = plan.districts[d_key]
            district_id = result.district_ids[d_key]
            for t_name in taluks.values():
                taluk_id, created = await self._get_or_create_taluk(
                    t_name, district_id,
                )
                result.taluk_ids[taluk_key(d_name, t_name)] = taluk_id
                result.taluks_created += created

        logger.info(
            f"Normalized {len(plan.districts)} districts and "
            f"{plan.taluk_count} taluks from {len(records)} records",
            extra={
                "districts_created": result.districts_created,
                "taluks_created": result.taluks_created,
            },
        )
        return result

    async def list_districts(self) -> list[District]:
        result = await self.db.execute(select(District).order_by(District.name))
        return list(result.scalars().all())

    async def list_taluks_by_district(self, district_id: int) -> list[Taluk]:
        result = await self.db.execute(
            select(Taluk)
            .where(Taluk.district_id == district_id)
            .order_by(Taluk.name)
        )
        return list(result.scalars().all())

    # ─── get-or-create ──────────────────────────────────────────

    async def _find_district(self, name: str) -> DistrictId | None:
        result = await self.db.execute(
            select(District.id).where(District.name_key == location_key(name))
        )
        found = result.scalar_one_or_none()
        return DistrictId(found) if found is not None else None

    async def _find_taluk(self, name: str, district_id: int) -> TalukId | None:
        result = await self.db.execute(
            select(Taluk.id)
            .where(Taluk.district_id == district_id)
            .where(Taluk.name_key == location_key(name))
        )
        found = result.scalar_one_or_none()
        return TalukId(found) if found is not None else None

    async def _get_or_create_district(self, name: str) -> tuple[DistrictId, bool]:
        existing = await self._find_district(name)
        if existing is not None:
            return existing, False

        district = District(name=name, name_key=location_key(name))
        self.db.add(district)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            existing = await self._find_district(name)
            if existing is None:
                raise ConflictError(f"District '{name}' could not be created or found")
            logger.info(
                f"District '{name}' created concurrently, reusing it",
                extra={"district_id": existing},
            )
            return existing, False

        logger.info(f"Created district '{name}'", extra={"district_id": district.id})
        return DistrictId(district.id), True

    async def _get_or_create_taluk(
        self, name: str, district_id: DistrictId,
    ) -> tuple[TalukId, bool]:
        existing = await self._find_taluk(name, district_id)
        if existing is not None:
            return existing, False

        taluk = Taluk(
            name=name, name_key=location_key(name), district_id=district_id,
        )
        self.db.add(taluk)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            existing = await self._find_taluk(name, district_id)
            if existing is None:
                raise ConflictError(
                    f"Taluk '{name}' could not be created or found",
                    ErrorContext(district_id=district_id),
                )
            logger.info(
                f"Taluk '{name}' created concurrently, reusing it",
                extra={"taluk_id": existing, "district_id": district_id},
            )
            return existing, False

        logger.info(
            f"Created taluk '{name}'",
            extra={"taluk_id": taluk.id, "district_id": district_id},
        )
        return TalukId(taluk.id), True
