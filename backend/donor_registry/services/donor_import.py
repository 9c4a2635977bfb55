"""Donor Import — one-shot bulk load of form-export rows into the registry.

Invariants:
    - Reference rows are normalized first (two-pass, O(distinct) writes), donors second
    - Donor district/taluk text is stored trimmed; blank optional text is stored as NULL
    - All donor rows are committed together at the end of the batch
    - Re-running an import is safe for reference rows (get-or-create) but duplicates donors

Design Decisions:
    - No checkpointing: a failure aborts the batch and the whole file is re-run
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from donor_registry.models.donor import Donor
from donor_registry.schemas.donor_import import ImportRecord, ImportSummary
from donor_registry.services.location_normalizer import LocationNormalizer

logger = logging.getLogger(__name__)


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def record_to_donor(record: ImportRecord) -> Donor:
    """Map one form-export row onto a Donor row."""
    email = record.email_address.email if record.email_address else None
    contact = record.contact_number
    return Donor(
        name=record.name.strip(),
        email=_blank_to_none(email),
        contact_number="" if contact is None else str(contact).strip(),
        blood_group=record.blood_group.strip(),
        weight=round(record.weight) if record.weight else None,
        date_of_birth=_blank_to_none(record.date_of_birth),
        batch=_blank_to_none(record.batch),
        district=(record.district or "").strip(),
        taluk=(record.taluk or "").strip(),
        village_municipality_corporation=_blank_to_none(
            record.village_municipality_corporation,
        ),
    )


async def import_donors(
    db: AsyncSession, records: list[ImportRecord],
) -> ImportSummary:
    """Normalize locations for `records`, then insert one donor per record."""
    normalized = await LocationNormalizer(db).bulk_normalize(
        [(r.district, r.taluk) for r in records],
    )

    db.add_all([record_to_donor(r) for r in records])
    await db.commit()

    summary = ImportSummary(
        districts_created=normalized.districts_created,
        taluks_created=normalized.taluks_created,
        donors_created=len(records),
    )
    logger.info(
        "Bulk import finished",
        extra=summary.model_dump(),
    )
    return summary
