"""Donor Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - DonorCreate: name, contact_number, blood_group, district, taluk are stripped and non-empty
    - DonorPatch: every field optional; only fields the caller actually sent are applied
      (model_dump(exclude_unset=True)), so "absent" and "explicitly null" never blur
    - DonorPatch rejects explicit null for columns that are NOT NULL in the store
    - id is never part of a patch (extra fields forbidden)

Design Decisions:
    - Wire names stay snake_case to match the stored columns and the mobile client
    - LastDonatedUpdate keeps the camelCase donationDate key the client already sends
    - No past-date check on donationDate: back-dating and pre-recording are both allowed
"""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

_REQUIRED_TEXT = ("name", "contact_number", "blood_group", "district", "taluk")


class DonorCreate(BaseModel):
    """New donor registration."""
    name: str = Field(max_length=200)
    email: str | None = Field(None, max_length=254)
    contact_number: str = Field(max_length=32)
    blood_group: str = Field(max_length=10)
    weight: int | None = Field(None, gt=0, lt=500)
    date_of_birth: str | None = Field(None, max_length=32)
    batch: str | None = Field(None, max_length=64)
    district: str = Field(max_length=120)
    taluk: str = Field(max_length=120)
    village_municipality_corporation: str | None = Field(None, max_length=200)

    @field_validator("contact_number", mode="before")
    @classmethod
    def coerce_contact_number(cls, v):
        return str(v) if isinstance(v, int) else v

    @field_validator(*_REQUIRED_TEXT)
    @classmethod
    def strip_required(cls, v: str, info) -> str:
        v = v.strip()
        if not v:
            raise ValueError(f"{info.field_name} cannot be empty or whitespace")
        return v


class DonorPatch(BaseModel):
    """Sparse donor update — unset fields are left untouched."""
    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(None, max_length=200)
    email: str | None = Field(None, max_length=254)
    contact_number: str | None = Field(None, max_length=32)
    blood_group: str | None = Field(None, max_length=10)
    weight: int | None = Field(None, gt=0, lt=500)
    date_of_birth: str | None = Field(None, max_length=32)
    batch: str | None = Field(None, max_length=64)
    district: str | None = Field(None, max_length=120)
    taluk: str | None = Field(None, max_length=120)
    village_municipality_corporation: str | None = Field(None, max_length=200)
    last_donated: date | None = None

    @field_validator("contact_number", mode="before")
    @classmethod
    def coerce_contact_number(cls, v):
        return str(v) if isinstance(v, int) else v

    @field_validator(*_REQUIRED_TEXT)
    @classmethod
    def strip_required(cls, v: str | None, info) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError(f"{info.field_name} cannot be empty or whitespace")
        return v

    @model_validator(mode="after")
    def reject_null_required(self):
        for name in _REQUIRED_TEXT:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be cleared")
        return self

    def changes(self) -> dict:
        """Fields the caller explicitly set, with their values."""
        return self.model_dump(exclude_unset=True)


class LastDonatedUpdate(BaseModel):
    """Body for PUT /donors/{id}/last-donated."""
    donation_date: date = Field(alias="donationDate")


class DonorResponse(BaseModel):
    """Donor as returned to clients."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str | None = None
    contact_number: str
    blood_group: str
    weight: int | None = None
    date_of_birth: str | None = None
    batch: str | None = None
    district: str
    taluk: str
    village_municipality_corporation: str | None = None
    last_donated: date | None = None
    created_at: datetime | None = None


class Pagination(BaseModel):
    total: int
    limit: int
    offset: int
    has_more: bool = Field(serialization_alias="hasMore")


class DonorListResponse(BaseModel):
    """Search response — {data, pagination} envelope."""
    data: list[DonorResponse]
    pagination: Pagination


class DonorCreated(BaseModel):
    message: str = "Donor added successfully"
    id: int
