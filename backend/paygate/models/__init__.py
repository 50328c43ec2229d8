"""ORM Models — SQLAlchemy declarative models for persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Every table carries user_id; access is always scoped by it

Design Decisions:
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from paygate.models.transfer import Transfer  # noqa: F401
from paygate.models.event import Event, EventMetadata  # noqa: F401
from paygate.models.parties import Customer, Depository, Originator  # noqa: F401
