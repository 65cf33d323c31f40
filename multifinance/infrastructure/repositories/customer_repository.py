"""SQLAlchemy implementation of CustomerDirectory."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from multifinance.domain.entities import Customer
from multifinance.domain.exceptions import (
    CustomerAlreadyExistsException,
    LookupFailureException,
)
from multifinance.domain.interfaces import CustomerDirectory, UnitOfWork
from multifinance.infrastructure.database.models import CustomerModel

from .base import SqlAlchemyStore, is_duplicate_key_error


class SqlAlchemyCustomerDirectory(SqlAlchemyStore, CustomerDirectory):
    """Customer directory backed by the customers table."""

    async def exists(
        self,
        customer_nik: str,
        scope: Optional[UnitOfWork] = None,
    ) -> bool:
        stmt = select(CustomerModel.nik).where(CustomerModel.nik == customer_nik)
        try:
            async with self._session(scope) as session:
                result = await session.execute(stmt)
                return result.scalar_one_or_none() is not None
        except SQLAlchemyError as exc:
            raise LookupFailureException("Failed to look up customer") from exc

    async def get(self, customer_nik: str) -> Optional[Customer]:
        async with self._session() as session:
            model = await session.get(CustomerModel, customer_nik)

        if model is None:
            return None

        return self._to_entity(model)

    async def add(
        self,
        customer: Customer,
        scope: Optional[UnitOfWork] = None,
    ) -> Customer:
        try:
            async with self._session(scope, write=True) as session:
                if await session.get(CustomerModel, customer.nik) is not None:
                    raise CustomerAlreadyExistsException(customer.nik)

                session.add(
                    CustomerModel(
                        nik=customer.nik,
                        full_name=customer.full_name,
                        legal_name=customer.legal_name,
                        birth_place=customer.birth_place,
                        birth_date=customer.birth_date,
                        salary=customer.salary,
                        photo_ktp=customer.photo_ktp,
                        photo_selfie=customer.photo_selfie,
                    )
                )
                await session.flush()
        except IntegrityError as exc:
            if is_duplicate_key_error(exc):
                raise CustomerAlreadyExistsException(customer.nik) from exc
            raise

        return customer

    def _to_entity(self, model: CustomerModel) -> Customer:
        """Convert database model to domain entity."""
        return Customer(
            nik=model.nik,
            full_name=model.full_name,
            legal_name=model.legal_name,
            birth_place=model.birth_place,
            birth_date=model.birth_date,
            salary=model.salary,
            photo_ktp=model.photo_ktp,
            photo_selfie=model.photo_selfie,
        )
