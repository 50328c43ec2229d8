"""Party Repositories — SQL lookups for Customers, Originators and Depositories.

Invariants:
    - Lookups filter on (id, user_id) and deleted_at IS NULL; anything else is None
    - Stored enum text that is outside its set is handed through unparsed so the
      entity's validate() reports it
    - add() flushes but never commits
"""

from enum import Enum

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from paygate.core.domain_types import (
    AccountType,
    CustomerId,
    CustomerStatus,
    DepositoryId,
    DepositoryStatus,
    HolderType,
    OriginatorId,
    parse_enum,
)
from paygate.core.errors import InvalidEnumValueError
from paygate.core.parties import Customer, Depository, Originator
from paygate.models.parties import (
    Customer as CustomerModel,
    Depository as DepositoryModel,
    Originator as OriginatorModel,
)


def _enum_or_text(enum_cls: type[Enum], text: str):
    try:
        return parse_enum(enum_cls, text)
    except InvalidEnumValueError:
        return text


def _text(value) -> str:
    return value.value if isinstance(value, Enum) else str(value)


class SQLCustomerRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_user_customer(
        self, customer_id: CustomerId, user_id: str,
    ) -> Customer | None:
        result = await self.db.execute(
            select(CustomerModel)
            .where(CustomerModel.customer_id == str(customer_id))
            .where(CustomerModel.user_id == user_id)
            .where(CustomerModel.deleted_at.is_(None))
        )
        row = result.scalar_one_or_none()
        if row is None:
            return None
        return Customer(
            id=CustomerId(row.customer_id),
            email=row.email,
            default_depository=DepositoryId(row.default_depository),
            status=_enum_or_text(CustomerStatus, row.status),
            metadata=row.metadata_text,
        )

    async def add(self, user_id: str, customer: Customer) -> None:
        self.db.add(CustomerModel(
            customer_id=str(customer.id),
            user_id=user_id,
            email=customer.email,
            default_depository=str(customer.default_depository),
            status=_text(customer.status),
            metadata_text=customer.metadata,
        ))
        await self.db.flush()


class SQLOriginatorRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_user_originator(
        self, originator_id: OriginatorId, user_id: str,
    ) -> Originator | None:
        result = await self.db.execute(
            select(OriginatorModel)
            .where(OriginatorModel.originator_id == str(originator_id))
            .where(OriginatorModel.user_id == user_id)
            .where(OriginatorModel.deleted_at.is_(None))
        )
        row = result.scalar_one_or_none()
        if row is None:
            return None
        return Originator(
            id=OriginatorId(row.originator_id),
            default_depository=DepositoryId(row.default_depository),
            identification=row.identification,
            metadata=row.metadata_text,
        )

    async def add(self, user_id: str, originator: Originator) -> None:
        self.db.add(OriginatorModel(
            originator_id=str(originator.id),
            user_id=user_id,
            default_depository=str(originator.default_depository),
            identification=originator.identification,
            metadata_text=originator.metadata,
        ))
        await self.db.flush()


class SQLDepositoryRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_user_depository(
        self, depository_id: DepositoryId, user_id: str,
    ) -> Depository | None:
        result = await self.db.execute(
            select(DepositoryModel)
            .where(DepositoryModel.depository_id == str(depository_id))
            .where(DepositoryModel.user_id == user_id)
            .where(DepositoryModel.deleted_at.is_(None))
        )
        row = result.scalar_one_or_none()
        if row is None:
            return None
        return Depository(
            id=DepositoryId(row.depository_id),
            bank_name=row.bank_name,
            holder=row.holder,
            holder_type=_enum_or_text(HolderType, row.holder_type),
            type=_enum_or_text(AccountType, row.type),
            routing_number=row.routing_number,
            account_number=row.account_number,
            status=_enum_or_text(DepositoryStatus, row.status),
            metadata=row.metadata_text,
        )

    async def add(self, user_id: str, depository: Depository) -> None:
        self.db.add(DepositoryModel(
            depository_id=str(depository.id),
            user_id=user_id,
            bank_name=depository.bank_name,
            holder=depository.holder,
            holder_type=_text(depository.holder_type),
            type=_text(depository.type),
            routing_number=depository.routing_number,
            account_number=depository.account_number,
            status=_text(depository.status),
            metadata_text=depository.metadata,
        ))
        await self.db.flush()
