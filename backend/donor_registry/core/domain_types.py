"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - DonorId, DistrictId, TalukId wrap store integers; never mix them up in signatures
    - ALL_BLOOD_GROUPS is a pass-through sentinel, never stored on a donor
    - DonorColumn enumerates the only donor columns a search predicate may touch

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

DonorId = NewType("DonorId", int)
DistrictId = NewType("DistrictId", int)
TalukId = NewType("TalukId", int)


# ─── Sentinels ───────────────────────────────────────────────────

ALL_BLOOD_GROUPS = "all"


# ─── Enums ───────────────────────────────────────────────────────

class DonorColumn(str, Enum):
    """Donor columns that search predicates may reference (all indexed)."""
    BLOOD_GROUP = "blood_group"
    DISTRICT = "district"
    TALUK = "taluk"
    NAME = "name"
    LAST_DONATED = "last_donated"


class Operator(str, Enum):
    """Comparison operators available to search predicates.

    CONTAINS_CI is a case-insensitive substring match. ON_OR_BEFORE_OR_NULL also
    matches a NULL column; AFTER never does.
    """
    EQUALS = "eq"
    CONTAINS_CI = "icontains"
    ON_OR_BEFORE_OR_NULL = "le_or_null"
    AFTER = "gt"
