"""Location Names — pure normalization and dedup planning for district/taluk reference data.

Invariants:
    - Names are trimmed of surrounding whitespace before storage and comparison
    - Comparison keys are case-insensitive (casefold); display names keep first-seen casing
    - A record with an empty/whitespace district contributes nothing, not even its taluk
    - A record with a district but an empty taluk still registers the district
    - No IO, no async, no DB; plan_locations() is deterministic over its input order

Design Decisions:
    - Two-pass import: this module is pass 1 (collect distinct names in memory);
      the normalizer service runs pass 2 (get-or-create), so a batch of N donors
      issues O(distinct districts + distinct taluks) reference writes, not O(N)
    - Taluk map keyed by (district_key, taluk_key) tuple: no separator collisions
"""

from dataclasses import dataclass, field
from typing import Iterable

from donor_registry.core.errors import ValidationError

LocationKey = str
TalukKey = tuple[LocationKey, LocationKey]


def normalize_location_name(raw: str | None, field_name: str = "name") -> str:
    """Trim a district/taluk name. Raises ValidationError when nothing is left."""
    name = (raw or "").strip()
    if not name:
        raise ValidationError(f"{field_name} cannot be empty or whitespace", field_name)
    return name


def location_key(name: str) -> LocationKey:
    """Case-insensitive comparison key for a (trimmed or raw) location name."""
    return name.strip().casefold()


def taluk_key(district: str, taluk: str) -> TalukKey:
    return (location_key(district), location_key(taluk))


@dataclass
class LocationPlan:
    """Distinct districts and per-district taluks found in a batch.

    districts maps district key -> display name (first spelling seen).
    taluks maps district key -> {taluk key -> display name}.
    Insertion order follows first appearance in the batch.
    """
    districts: dict[LocationKey, str] = field(default_factory=dict)
    taluks: dict[LocationKey, dict[LocationKey, str]] = field(default_factory=dict)

    @property
    def taluk_count(self) -> int:
        return sum(len(names) for names in self.taluks.values())


def plan_locations(
    records: Iterable[tuple[str | None, str | None]],
) -> LocationPlan:
    """Collect distinct trimmed districts and taluks from raw (district, taluk) pairs."""
    plan = LocationPlan()
    for raw_district, raw_taluk in records:
        district = (raw_district or "").strip()
        if not district:
            continue
        d_key = location_key(district)
        plan.districts.setdefault(d_key, district)

        taluk = (raw_taluk or "").strip()
        if taluk:
            plan.taluks.setdefault(d_key, {}).setdefault(location_key(taluk), taluk)
    return plan
