"""SQLAlchemy implementation of TransactionStore."""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from multifinance.domain.entities import Transaction
from multifinance.domain.exceptions import (
    DuplicateContractNumberException,
    PersistFailureException,
)
from multifinance.domain.interfaces import TransactionStore, UnitOfWork
from multifinance.infrastructure.database.models import TransactionModel

from .base import SqlAlchemyStore, is_duplicate_key_error


class SqlAlchemyTransactionStore(SqlAlchemyStore, TransactionStore):
    """Append-only transaction store backed by the transactions table."""

    async def append(
        self,
        transaction: Transaction,
        scope: Optional[UnitOfWork] = None,
    ) -> Transaction:
        try:
            async with self._session(scope, write=True) as session:
                existing = await session.get(
                    TransactionModel, transaction.contract_number
                )
                if existing is not None:
                    raise DuplicateContractNumberException(transaction.contract_number)

                session.add(
                    TransactionModel(
                        contract_number=transaction.contract_number,
                        customer_nik=transaction.customer_nik,
                        tenor=transaction.tenor,
                        otr=transaction.otr,
                        admin_fee=transaction.admin_fee,
                        installment=transaction.installment,
                        interest=transaction.interest,
                        asset_name=transaction.asset_name,
                        created_at=transaction.created_at,
                    )
                )
                await session.flush()
        except IntegrityError as exc:
            if is_duplicate_key_error(exc):
                raise DuplicateContractNumberException(
                    transaction.contract_number
                ) from exc
            raise PersistFailureException() from exc
        except SQLAlchemyError as exc:
            raise PersistFailureException() from exc

        return transaction

    async def get(self, contract_number: str) -> Optional[Transaction]:
        async with self._session() as session:
            model = await session.get(TransactionModel, contract_number)

        if model is None:
            return None

        return self._to_entity(model)

    async def list_for_customer(
        self,
        customer_nik: str,
        limit: int = 10,
        offset: int = 0,
    ) -> List[Transaction]:
        stmt = (
            select(TransactionModel)
            .where(TransactionModel.customer_nik == customer_nik)
            .order_by(
                TransactionModel.created_at.desc(),
                TransactionModel.contract_number.desc(),
            )
            .limit(limit)
            .offset(offset)
        )
        async with self._session() as session:
            result = await session.execute(stmt)
            models = result.scalars().all()

        return [self._to_entity(model) for model in models]

    def _to_entity(self, model: TransactionModel) -> Transaction:
        """Convert database model to domain entity."""
        return Transaction(
            contract_number=model.contract_number,
            customer_nik=model.customer_nik,
            tenor=model.tenor,
            otr=model.otr,
            admin_fee=model.admin_fee,
            installment=model.installment,
            interest=model.interest,
            asset_name=model.asset_name,
            created_at=model.created_at,
        )
