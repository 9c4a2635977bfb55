"""HTTP Routes — the thin layer relays parsed input to services and typed errors to JSON.

Invariants:
    - GET /donors returns {data, pagination{total, limit, offset, hasMore}}
    - domain errors surface as {error: {code, ...}} with their http_status
    - malformed bodies are 400 VALIDATION_ERROR with field details
"""

from datetime import date, timedelta

import pytest


@pytest.fixture
async def seeded(make_donor):
    await make_donor("Jane Doe", blood_group="A+")
    await make_donor("John Smith", blood_group="O+", district="Madurai", taluk="Melur")
    await make_donor(
        "Recent", blood_group="A+", last_donated=date.today() - timedelta(days=5),
    )


async def test_search_envelope(client, seeded):
    res = await client.get("/api/v1/donors", params={"bloodGroup": "A+", "limit": 1})
    assert res.status_code == 200
    body = res.json()
    assert [d["name"] for d in body["data"]] == ["Jane Doe"]
    assert body["pagination"] == {
        "total": 2, "limit": 1, "offset": 0, "hasMore": True,
    }


async def test_search_defaults_to_twenty_per_page(client, seeded):
    res = await client.get("/api/v1/donors")
    assert res.json()["pagination"]["limit"] == 20


async def test_search_all_blood_groups(client, seeded):
    res = await client.get("/api/v1/donors", params={"bloodGroup": "all"})
    assert res.json()["pagination"]["total"] == 3


async def test_search_eligibility_flag(client, seeded):
    eligible = await client.get("/api/v1/donors", params={"isEligible": "true"})
    ineligible = await client.get("/api/v1/donors", params={"isEligible": "false"})
    ignored = await client.get("/api/v1/donors", params={"isEligible": "maybe"})

    assert [d["name"] for d in eligible.json()["data"]] == ["Jane Doe", "John Smith"]
    assert [d["name"] for d in ineligible.json()["data"]] == ["Recent"]
    assert ignored.json()["pagination"]["total"] == 3


async def test_search_negative_offset_is_400(client):
    res = await client.get("/api/v1/donors", params={"offset": -1})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"
    assert res.json()["error"]["field"] == "offset"


async def test_search_limit_over_maximum_is_400(client):
    res = await client.get("/api/v1/donors", params={"limit": 1000})
    assert res.status_code == 400


async def test_create_donor_and_fetch(client):
    res = await client.post("/api/v1/donors", json={
        "name": "Asha", "contact_number": 9123456789, "blood_group": "B+",
        "district": "Salem", "taluk": "Omalur",
    })
    assert res.status_code == 201
    donor_id = res.json()["id"]
    assert res.json()["message"] == "Donor added successfully"

    fetched = await client.get(f"/api/v1/donors/{donor_id}")
    assert fetched.status_code == 200
    assert fetched.json()["contact_number"] == "9123456789"
    assert fetched.json()["last_donated"] is None


async def test_create_donor_missing_name_is_400(client):
    res = await client.post("/api/v1/donors", json={
        "name": "   ", "contact_number": "1", "blood_group": "B+",
        "district": "Salem", "taluk": "Omalur",
    })
    assert res.status_code == 400
    assert res.json()["error"]["details"][0]["field"] == "body.name"
    assert res.json()["error"]["field"] == "name"
    assert res.json()["error"]["category"] == "validation"


async def test_malformed_query_param_names_the_parameter(client):
    res = await client.get("/api/v1/donors", params={"limit": "ten"})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"
    assert res.json()["error"]["field"] == "limit"
    assert res.json()["error"]["details"][0]["field"] == "query.limit"


async def test_create_donor_populates_reference_listings(client):
    await client.post("/api/v1/donors", json={
        "name": "Asha", "contact_number": "1", "blood_group": "B+",
        "district": "Salem", "taluk": "Omalur",
    })
    districts = (await client.get("/api/v1/districts")).json()["data"]
    assert [d["name"] for d in districts] == ["Salem"]

    taluks = await client.get(f"/api/v1/districts/{districts[0]['id']}/taluks")
    assert [t["name"] for t in taluks.json()["data"]] == ["Omalur"]


async def test_get_unknown_donor_is_404(client):
    res = await client.get("/api/v1/donors/999")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


async def test_partial_update(client, make_donor):
    donor = await make_donor("Jane Doe", weight=55)
    res = await client.put(f"/api/v1/donors/{donor.id}", json={"weight": 70})
    assert res.status_code == 200
    assert res.json() == {"message": "Donor updated successfully"}

    fetched = (await client.get(f"/api/v1/donors/{donor.id}")).json()
    assert fetched["weight"] == 70
    assert fetched["name"] == "Jane Doe"


async def test_empty_update_is_400(client, make_donor):
    donor = await make_donor("Jane Doe")
    res = await client.put(f"/api/v1/donors/{donor.id}", json={})
    assert res.status_code == 400
    assert res.json()["error"]["message"] == "No fields to update"


async def test_update_cannot_patch_id(client, make_donor):
    donor = await make_donor("Jane Doe")
    res = await client.put(f"/api/v1/donors/{donor.id}", json={"id": 5})
    assert res.status_code == 400


async def test_update_cannot_clear_required_field(client, make_donor):
    donor = await make_donor("Jane Doe")
    res = await client.put(f"/api/v1/donors/{donor.id}", json={"name": None})
    assert res.status_code == 400


async def test_update_unknown_donor_is_404(client):
    res = await client.put("/api/v1/donors/999", json={"weight": 70})
    assert res.status_code == 404


async def test_update_last_donated(client, make_donor):
    donor = await make_donor("Jane Doe")
    res = await client.put(
        f"/api/v1/donors/{donor.id}/last-donated",
        json={"donationDate": "2026-02-01"},
    )
    assert res.status_code == 200
    fetched = (await client.get(f"/api/v1/donors/{donor.id}")).json()
    assert fetched["last_donated"] == "2026-02-01"


async def test_update_last_donated_rejects_non_date(client, make_donor):
    donor = await make_donor("Jane Doe")
    res = await client.put(
        f"/api/v1/donors/{donor.id}/last-donated",
        json={"donationDate": "yesterday"},
    )
    assert res.status_code == 400


async def test_bulk_import_route(client):
    res = await client.post("/api/v1/donors/import", json=[
        {"name": "A", "blood_group": "O+", "district": "Chennai", "taluk": "T1",
         "contact_number": 1},
        {"name": "B", "blood_group": "O+", "district": "chennai", "taluk": "t1",
         "contact_number": 2},
    ])
    assert res.status_code == 201
    assert res.json() == {
        "districts_created": 1, "taluks_created": 1, "donors_created": 2,
    }


async def test_unknown_district_has_no_taluks(client):
    res = await client.get("/api/v1/districts/42/taluks")
    assert res.status_code == 200
    assert res.json() == {"data": []}


async def test_health_probes(client):
    live = await client.get("/api/v1/health/")
    ready = await client.get("/api/v1/health/ready")
    assert live.json()["status"] == "healthy"
    assert ready.json() == {"status": "ready", "checks": {"database": "healthy"}}
