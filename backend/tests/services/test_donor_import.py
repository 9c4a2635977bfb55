"""Donor Import — form-export rows into donors plus normalized reference rows.

Invariants:
    - one donor per record; reference rows deduped across the batch
    - district/taluk text trimmed on donors; blank optional text stored as NULL
    - re-running reuses reference rows but duplicates donors
"""

from sqlalchemy import func, select

from donor_registry.models.district import District
from donor_registry.models.donor import Donor
from donor_registry.models.taluk import Taluk
from donor_registry.schemas.donor_import import ImportRecord, load_import_records
from donor_registry.services.donor_import import import_donors, record_to_donor

RAW = b"""[
  {"timestamp": "2024-01-01 10:00:00", "email_address": {"email": "jane@example.com"},
   "name": "Jane Doe", "batch": "2019", "date_of_birth": "2001-05-04", "weight": 55,
   "blood_group": "A+", "district": " Chennai ", "taluk": "T1",
   "village_municipality_corporation": "Corporation", "contact_number": 9876543210},
  {"name": "John", "blood_group": "O+", "district": "chennai", "taluk": "t1",
   "contact_number": "9000000001", "weight": ""},
  {"name": "Ravi", "blood_group": "B+", "district": "Chennai", "taluk": "T2",
   "contact_number": 9000000002, "weight": 61.6},
  {"name": "Nowhere", "blood_group": "AB+", "district": "  ", "taluk": "Lost",
   "contact_number": "9000000003"}
]"""


async def _count(db, model) -> int:
    return (await db.execute(select(func.count()).select_from(model))).scalar_one()


def test_load_import_records_parses_form_export():
    records = load_import_records(RAW)
    assert len(records) == 4
    assert records[0].email_address.email == "jane@example.com"
    assert records[1].weight is None
    assert records[3].email_address is None


def test_record_to_donor_maps_and_cleans_fields():
    donor = record_to_donor(load_import_records(RAW)[0])
    assert donor.email == "jane@example.com"
    assert donor.contact_number == "9876543210"
    assert donor.district == "Chennai"
    assert donor.weight == 55


def test_record_to_donor_blank_optionals_become_null():
    donor = record_to_donor(ImportRecord(
        name=" Asha ", blood_group="O-", batch=" ", contact_number=None,
        email_address={"email": ""},
    ))
    assert donor.name == "Asha"
    assert donor.batch is None
    assert donor.email is None
    assert donor.contact_number == ""
    assert donor.district == ""


def test_record_to_donor_rounds_fractional_weight():
    assert record_to_donor(load_import_records(RAW)[2]).weight == 62


async def test_import_counts_and_dedup(test_db):
    summary = await import_donors(test_db, load_import_records(RAW))

    assert summary.donors_created == 4
    assert summary.districts_created == 1
    assert summary.taluks_created == 2
    assert await _count(test_db, Donor) == 4
    assert await _count(test_db, District) == 1
    assert await _count(test_db, Taluk) == 2


async def test_import_keeps_donor_with_blank_district(test_db):
    await import_donors(test_db, load_import_records(RAW))
    result = await test_db.execute(select(Donor).where(Donor.name == "Nowhere"))
    donor = result.scalar_one()
    assert donor.district == ""
    assert donor.taluk == "Lost"


async def test_rerun_reuses_reference_rows_but_duplicates_donors(test_db):
    await import_donors(test_db, load_import_records(RAW))
    summary = await import_donors(test_db, load_import_records(RAW))

    assert summary.districts_created == 0
    assert summary.taluks_created == 0
    assert await _count(test_db, Donor) == 8
    assert await _count(test_db, District) == 1


async def test_empty_batch_is_a_no_op(test_db):
    summary = await import_donors(test_db, [])
    assert summary.model_dump() == {
        "districts_created": 0, "taluks_created": 0, "donors_created": 0,
    }
