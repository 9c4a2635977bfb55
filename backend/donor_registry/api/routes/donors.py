"""Donor Routes — search, registration, updates and bulk import.

Invariants:
    - Routes only parse/serialize; filtering, validation rules and normalization live
      in core/ and services/
    - Pagination bounds are NOT range-checked here: negative offset/limit flow into
      search_donors, which rejects them with ValidationError before querying
    - isEligible accepts exactly "true" / "false"; anything else means no eligibility filter

Design Decisions:
    - /import registered before /{donor_id} so the literal path wins
    - Response envelopes ({data, pagination}, {message, id}) match the mobile client
"""

import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from donor_registry.config import Settings, get_settings
from donor_registry.core.donor_filters import DonorSearchCriteria
from donor_registry.infrastructure.database import get_db
from donor_registry.schemas.donor import (
    DonorCreate, DonorCreated, DonorListResponse, DonorPatch, DonorResponse,
    LastDonatedUpdate, Pagination,
)
from donor_registry.schemas.donor_import import ImportRecord, ImportSummary
from donor_registry.services.donor_import import import_donors
from donor_registry.services.donor_registry import DonorRegistry
from donor_registry.services.donor_search import search_donors

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/donors", tags=["donors"])


def _parse_eligibility(raw: str | None) -> bool | None:
    if raw == "true":
        return True
    if raw == "false":
        return False
    return None


@router.get("", response_model=DonorListResponse)
async def list_donors(
    blood_group: str | None = Query(None, alias="bloodGroup"),
    district: str | None = None,
    taluk: str | None = None,
    name: str | None = None,
    is_eligible: str | None = Query(None, alias="isEligible"),
    offset: int = 0,
    limit: int | None = None,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Search donors with optional filters and offset pagination."""
    criteria = DonorSearchCriteria(
        blood_group=blood_group,
        district=district,
        taluk=taluk,
        name=name,
        is_eligible=_parse_eligibility(is_eligible),
        offset=offset,
        limit=settings.default_page_limit if limit is None else limit,
    )
    page = await search_donors(
        db, criteria,
        cooldown_days=settings.eligibility_cooldown_days,
        max_limit=settings.max_page_limit,
    )
    return DonorListResponse(
        data=[DonorResponse.model_validate(d) for d in page.donors],
        pagination=Pagination(
            total=page.total,
            limit=criteria.limit,
            offset=criteria.offset,
            has_more=page.has_more,
        ),
    )


@router.post(
    "", response_model=DonorCreated, status_code=status.HTTP_201_CREATED,
)
async def create_donor(body: DonorCreate, db: AsyncSession = Depends(get_db)):
    """Register a new donor."""
    donor_id = await DonorRegistry(db).add_donor(body)
    return DonorCreated(id=donor_id)


@router.post(
    "/import", response_model=ImportSummary, status_code=status.HTTP_201_CREATED,
)
async def bulk_import(
    body: list[ImportRecord], db: AsyncSession = Depends(get_db),
):
    """Load a batch of form-export rows. Not idempotent for donor rows."""
    return await import_donors(db, body)


@router.get("/{donor_id}", response_model=DonorResponse)
async def get_donor(donor_id: int, db: AsyncSession = Depends(get_db)):
    donor = await DonorRegistry(db).get_donor(donor_id)
    return DonorResponse.model_validate(donor)


@router.put("/{donor_id}")
async def update_donor(
    donor_id: int, body: DonorPatch, db: AsyncSession = Depends(get_db),
):
    """Apply a partial update; only fields present in the body change."""
    await DonorRegistry(db).update_donor(donor_id, body)
    return {"message": "Donor updated successfully"}


@router.put("/{donor_id}/last-donated")
async def update_last_donated(
    donor_id: int, body: LastDonatedUpdate, db: AsyncSession = Depends(get_db),
):
    await DonorRegistry(db).update_last_donated(donor_id, body.donation_date)
    return {"message": "Last donated date updated successfully"}
