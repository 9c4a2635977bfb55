"""Location Schemas — read models for the district/taluk reference listings."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class DistrictResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    created_at: datetime | None = None


class TalukResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    district_id: int
    created_at: datetime | None = None


class DistrictListResponse(BaseModel):
    data: list[DistrictResponse]


class TalukListResponse(BaseModel):
    data: list[TalukResponse]
