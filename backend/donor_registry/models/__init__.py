"""ORM Models — SQLAlchemy declarative models for the registry tables.

Invariants:
    - All models inherit from Base (db/base.py)
    - District/Taluk are reference data; Donor carries denormalized location text

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from donor_registry.models.district import District  # noqa: F401
from donor_registry.models.taluk import Taluk  # noqa: F401
from donor_registry.models.donor import Donor  # noqa: F401
