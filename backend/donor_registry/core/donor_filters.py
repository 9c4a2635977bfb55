"""Donor Filters — pure construction of search predicates and pagination metadata.

Invariants:
    - Every predicate is a typed Condition(column, operator, value) triple; columns come
      from the DonorColumn whitelist, so no caller text ever reaches SQL as an identifier
    - Conditions are AND-combined; an absent criterion contributes no condition
    - blood_group == "all" is a pass-through, identical to omitting blood_group
    - Eligible: last_donated is NULL or last_donated + cooldown <= today
    - Ineligible: last_donated is NOT NULL and last_donated + cooldown > today
    - offset >= 0 and 0 <= limit <= max_limit, checked before any query is built
    - has_more is derived from the requested window (offset + limit < total),
      not from how many rows the page fetch returned

Design Decisions:
    - "today" is a parameter: date arithmetic is deterministic and testable
    - Cooldown folded into a cutoff date (today - cooldown) so the store compares a
      bound date parameter against an indexed column instead of doing date math per row
    - Empty strings count as absent: query strings like ?district= mean "no filter"
"""

from dataclasses import dataclass
from datetime import date, timedelta

from donor_registry.core.domain_types import ALL_BLOOD_GROUPS, DonorColumn, Operator
from donor_registry.core.errors import ValidationError

DEFAULT_LIMIT = 20
DEFAULT_COOLDOWN_DAYS = 90


@dataclass(frozen=True)
class Condition:
    """One predicate over a donor column."""
    column: DonorColumn
    operator: Operator
    value: object


@dataclass(frozen=True)
class DonorSearchCriteria:
    """Optional search filters plus the pagination window."""
    blood_group: str | None = None
    district: str | None = None
    taluk: str | None = None
    name: str | None = None
    is_eligible: bool | None = None
    offset: int = 0
    limit: int = DEFAULT_LIMIT


def validate_window(offset: int, limit: int, max_limit: int | None = None) -> None:
    """Reject pagination bounds the store must never see."""
    if offset < 0:
        raise ValidationError("offset must be zero or positive", "offset")
    if limit < 0:
        raise ValidationError("limit must be zero or positive", "limit")
    if max_limit is not None and limit > max_limit:
        raise ValidationError(f"limit must not exceed {max_limit}", "limit")


def eligibility_cutoff(today: date, cooldown_days: int = DEFAULT_COOLDOWN_DAYS) -> date:
    """Latest last_donated date that still makes a donor eligible today."""
    return today - timedelta(days=cooldown_days)


def build_conditions(
    criteria: DonorSearchCriteria,
    today: date,
    cooldown_days: int = DEFAULT_COOLDOWN_DAYS,
) -> list[Condition]:
    """Translate search criteria into AND-combined conditions."""
    conditions: list[Condition] = []

    if criteria.blood_group and criteria.blood_group != ALL_BLOOD_GROUPS:
        conditions.append(
            Condition(DonorColumn.BLOOD_GROUP, Operator.EQUALS, criteria.blood_group),
        )
    if criteria.district:
        conditions.append(
            Condition(DonorColumn.DISTRICT, Operator.EQUALS, criteria.district),
        )
    if criteria.taluk:
        conditions.append(
            Condition(DonorColumn.TALUK, Operator.EQUALS, criteria.taluk),
        )
    if criteria.name:
        conditions.append(
            Condition(DonorColumn.NAME, Operator.CONTAINS_CI, criteria.name),
        )
    if criteria.is_eligible is not None:
        cutoff = eligibility_cutoff(today, cooldown_days)
        operator = (
            Operator.ON_OR_BEFORE_OR_NULL if criteria.is_eligible else Operator.AFTER
        )
        conditions.append(Condition(DonorColumn.LAST_DONATED, operator, cutoff))

    return conditions


def compute_has_more(offset: int, limit: int, total: int) -> bool:
    return offset + limit < total
