"""Transfer ORM — one row per transfer, scoped to the owning user.

Invariants:
    - transfer_id is globally unique; user_id is an access filter, not part of the key
    - amount stored as (amount_currency, amount_minor_units): exact integers only
    - deleted_at marks a soft delete; every read filters deleted_at IS NULL
    - file_id is the ACH service handle returned when the record was submitted
"""

from datetime import datetime, timezone

from sqlalchemy import BigInteger, Boolean, DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from paygate.db.base import Base


class Transfer(Base):
    __tablename__ = "transfers"

    transfer_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    type: Mapped[str] = mapped_column(String(10), nullable=False)
    amount_currency: Mapped[str] = mapped_column(String(3), nullable=False)
    amount_minor_units: Mapped[int] = mapped_column(BigInteger, nullable=False)
    originator_id: Mapped[str] = mapped_column(String(64), nullable=False)
    originator_depository: Mapped[str] = mapped_column(String(64), nullable=False)
    customer: Mapped[str] = mapped_column(String(64), nullable=False)
    customer_depository: Mapped[str] = mapped_column(String(64), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    standard_entry_class_code: Mapped[str] = mapped_column(String(3), nullable=False)
    status: Mapped[str] = mapped_column(String(10), nullable=False, default="pending")
    same_day: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    file_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    transaction_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    deleted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
