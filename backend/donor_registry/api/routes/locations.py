"""Location Routes — read-only listings of the district/taluk reference tables.

Invariants:
    - Both listings are ordered by name
    - An unknown district id yields an empty taluk list, not 404
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from donor_registry.infrastructure.database import get_db
from donor_registry.schemas.location import (
    DistrictListResponse, DistrictResponse, TalukListResponse, TalukResponse,
)
from donor_registry.services.location_normalizer import LocationNormalizer

router = APIRouter(prefix="/api/v1/districts", tags=["locations"])


@router.get("", response_model=DistrictListResponse)
async def list_districts(db: AsyncSession = Depends(get_db)):
    districts = await LocationNormalizer(db).list_districts()
    return DistrictListResponse(
        data=[DistrictResponse.model_validate(d) for d in districts],
    )


@router.get("/{district_id}/taluks", response_model=TalukListResponse)
async def list_taluks(district_id: int, db: AsyncSession = Depends(get_db)):
    taluks = await LocationNormalizer(db).list_taluks_by_district(district_id)
    return TalukListResponse(
        data=[TalukResponse.model_validate(t) for t in taluks],
    )
