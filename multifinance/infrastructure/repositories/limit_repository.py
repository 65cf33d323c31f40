"""SQLAlchemy implementation of LedgerStore."""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm.exc import StaleDataError

from multifinance.domain.entities import CreditLimit
from multifinance.domain.exceptions import (
    LedgerUpdateFailureException,
    LimitAlreadyProvisionedException,
    LimitConflictException,
    LookupFailureException,
)
from multifinance.domain.interfaces import LedgerStore, UnitOfWork
from multifinance.infrastructure.database.models import CreditLimitModel

from .base import SqlAlchemyStore, is_duplicate_key_error


class SqlAlchemyLedgerStore(SqlAlchemyStore, LedgerStore):
    """
    Ledger store backed by the customer_limits table.

    Inside a unit of work the limit row is read with SELECT ... FOR UPDATE,
    so concurrent scopes for the same (customer, tenor) queue behind each
    other. Every update also carries the row version loaded in the scope;
    a mismatch raises LimitConflictException instead of overwriting a
    newer amount.
    """

    async def get(
        self,
        customer_nik: str,
        tenor: int,
        scope: Optional[UnitOfWork] = None,
    ) -> Optional[CreditLimit]:
        stmt = (
            select(CreditLimitModel)
            .where(
                CreditLimitModel.customer_nik == customer_nik,
                CreditLimitModel.tenor == tenor,
            )
            .execution_options(populate_existing=True)
        )
        if scope is not None:
            stmt = stmt.with_for_update()

        try:
            async with self._session(scope) as session:
                result = await session.execute(stmt)
                model = result.scalar_one_or_none()
        except SQLAlchemyError as exc:
            raise LookupFailureException("Failed to read credit limit") from exc

        if model is None:
            return None

        return self._to_entity(model)

    async def set(
        self,
        customer_nik: str,
        tenor: int,
        new_amount: int,
        scope: Optional[UnitOfWork] = None,
    ) -> CreditLimit:
        if new_amount < 0:
            raise LedgerUpdateFailureException("Remaining amount cannot be negative")

        try:
            async with self._session(scope, write=True) as session:
                # Hits the identity map when the row was read in this scope,
                # so the UPDATE is checked against the version seen by get()
                model = await session.get(CreditLimitModel, (customer_nik, tenor))
                if model is None:
                    raise LedgerUpdateFailureException(
                        f"No credit limit to update for tenor {tenor}"
                    )

                model.remaining_amount = new_amount
                await session.flush()
                return self._to_entity(model)
        except StaleDataError as exc:
            raise LimitConflictException(customer_nik, tenor) from exc
        except SQLAlchemyError as exc:
            raise LedgerUpdateFailureException() from exc

    async def add(
        self,
        limit: CreditLimit,
        scope: Optional[UnitOfWork] = None,
    ) -> CreditLimit:
        try:
            async with self._session(scope, write=True) as session:
                existing = await session.get(
                    CreditLimitModel, (limit.customer_nik, limit.tenor)
                )
                if existing is not None:
                    raise LimitAlreadyProvisionedException(limit.customer_nik, limit.tenor)

                model = CreditLimitModel(
                    customer_nik=limit.customer_nik,
                    tenor=limit.tenor,
                    remaining_amount=limit.remaining_amount,
                )
                session.add(model)
                await session.flush()
                return self._to_entity(model)
        except IntegrityError as exc:
            # A concurrent provisioning inserted the tenor after the check
            if is_duplicate_key_error(exc):
                raise LimitAlreadyProvisionedException(
                    limit.customer_nik, limit.tenor
                ) from exc
            raise

    async def list_for_customer(self, customer_nik: str) -> List[CreditLimit]:
        stmt = (
            select(CreditLimitModel)
            .where(CreditLimitModel.customer_nik == customer_nik)
            .order_by(CreditLimitModel.tenor.asc())
        )
        async with self._session() as session:
            result = await session.execute(stmt)
            models = result.scalars().all()

        return [self._to_entity(model) for model in models]

    def _to_entity(self, model: CreditLimitModel) -> CreditLimit:
        """Convert database model to domain entity."""
        return CreditLimit(
            customer_nik=model.customer_nik,
            tenor=model.tenor,
            remaining_amount=model.remaining_amount,
            version=model.version,
        )
