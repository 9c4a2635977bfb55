"""Import Schemas — raw donor records as exported from the registration form.

Invariants:
    - Every field except name and blood_group may be missing or empty
    - contact_number arrives as a number or a string; it is always stored as text
    - load_import_records() validates the whole batch before anything is written

Design Decisions:
    - Mirrors the form export shape (email nested under email_address) rather than
      DonorCreate: import is lenient, single insert is strict
"""

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator


class ImportEmail(BaseModel):
    email: str | None = None


class ImportRecord(BaseModel):
    """One row of the form export."""
    model_config = ConfigDict(extra="ignore")

    timestamp: str | None = None
    email_address: ImportEmail | None = None
    name: str = ""
    batch: str | None = None
    date_of_birth: str | None = None
    weight: float | None = None
    blood_group: str = ""
    district: str | None = None
    taluk: str | None = None
    village_municipality_corporation: str | None = None
    contact_number: int | str | None = None

    @field_validator("weight", mode="before")
    @classmethod
    def blank_weight(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class ImportSummary(BaseModel):
    """Counts reported after a bulk import."""
    districts_created: int = Field(ge=0)
    taluks_created: int = Field(ge=0)
    donors_created: int = Field(ge=0)


_records_adapter = TypeAdapter(list[ImportRecord])


def load_import_records(raw_json: str | bytes) -> list[ImportRecord]:
    """Parse and validate a JSON array of form-export rows."""
    return _records_adapter.validate_json(raw_json)
