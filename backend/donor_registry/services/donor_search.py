"""Donor Search — compiles typed conditions into bound SQLAlchemy clauses and pages results.

Invariants:
    - Count and page use the exact same WHERE clause; pagination never affects total
    - Page ordering: name ascending, then id ascending (stable across calls)
    - Window bounds are validated before the first statement is issued
    - limit == 0 skips the page fetch entirely; total is still counted
    - Values only ever travel as bound parameters; LIKE wildcards in a name filter
      are escaped (autoescape) so "%" matches a literal percent sign

Design Decisions:
    - Condition → clause mapping lives here, at the persistence boundary; core/donor_filters
      stays free of SQLAlchemy
    - Column lookup goes through the DonorColumn whitelist, never getattr on caller input
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone

from sqlalchemy import ColumnElement, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from donor_registry.core.domain_types import DonorColumn, Operator
from donor_registry.core.donor_filters import (
    DEFAULT_COOLDOWN_DAYS, Condition, DonorSearchCriteria,
    build_conditions, compute_has_more, validate_window,
)
from donor_registry.models.donor import Donor

logger = logging.getLogger(__name__)

_COLUMNS = {
    DonorColumn.BLOOD_GROUP: Donor.blood_group,
    DonorColumn.DISTRICT: Donor.district,
    DonorColumn.TALUK: Donor.taluk,
    DonorColumn.NAME: Donor.name,
    DonorColumn.LAST_DONATED: Donor.last_donated,
}


@dataclass
class DonorPage:
    """One page of search results plus totals."""
    donors: list[Donor]
    total: int
    has_more: bool


def to_clause(condition: Condition) -> ColumnElement[bool]:
    """Compile one Condition into a SQLAlchemy boolean clause."""
    column = _COLUMNS[condition.column]
    if condition.operator is Operator.EQUALS:
        return column == condition.value
    if condition.operator is Operator.CONTAINS_CI:
        return column.icontains(condition.value, autoescape=True)
    if condition.operator is Operator.ON_OR_BEFORE_OR_NULL:
        return or_(column.is_(None), column <= condition.value)
    if condition.operator is Operator.AFTER:
        return column.is_not(None) & (column > condition.value)
    raise ValueError(f"Unsupported operator: {condition.operator}")


async def search_donors(
    db: AsyncSession,
    criteria: DonorSearchCriteria,
    *,
    today: date | None = None,
    cooldown_days: int = DEFAULT_COOLDOWN_DAYS,
    max_limit: int | None = None,
) -> DonorPage:
    """Count donors matching `criteria` and fetch the requested page."""
    validate_window(criteria.offset, criteria.limit, max_limit)
    today = today or datetime.now(timezone.utc).date()

    clauses = [
        to_clause(c) for c in build_conditions(criteria, today, cooldown_days)
    ]

    total = (
        await db.execute(
            select(func.count()).select_from(Donor).where(*clauses),
        )
    ).scalar_one()

    donors: list[Donor] = []
    if criteria.limit > 0:
        result = await db.execute(
            select(Donor)
            .where(*clauses)
            .order_by(Donor.name.asc(), Donor.id.asc())
            .offset(criteria.offset)
            .limit(criteria.limit)
        )
        donors = list(result.scalars().all())

    logger.debug(
        f"Donor search matched {total} rows, returned {len(donors)} "
        f"(offset={criteria.offset}, limit={criteria.limit})",
    )
    return DonorPage(
        donors=donors,
        total=total,
        has_more=compute_has_more(criteria.offset, criteria.limit, total),
    )
