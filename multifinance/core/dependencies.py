"""Dependency injection for FastAPI."""

from functools import partial
from typing import Annotated, Callable

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from multifinance.core.config import settings
from multifinance.infrastructure.database import (
    SqlAlchemyUnitOfWork,
    get_session_factory,
)
from multifinance.infrastructure.repositories import (
    SqlAlchemyCustomerDirectory,
    SqlAlchemyLedgerStore,
    SqlAlchemyTransactionStore,
)
from multifinance.application.services import CreditTransactionCoordinator, CustomerService
from multifinance.service.contract import ContractNumberGenerator

SessionFactory = Annotated[async_sessionmaker[AsyncSession], Depends(get_session_factory)]


# Unit of work and store dependencies
def get_unit_of_work_factory(
    session_factory: SessionFactory,
) -> Callable[[], SqlAlchemyUnitOfWork]:
    """Get a factory that opens a new unit of work per call."""
    return partial(SqlAlchemyUnitOfWork, session_factory)


def get_customer_directory(session_factory: SessionFactory) -> SqlAlchemyCustomerDirectory:
    """Get a CustomerDirectory instance."""
    return SqlAlchemyCustomerDirectory(session_factory)


def get_ledger_store(session_factory: SessionFactory) -> SqlAlchemyLedgerStore:
    """Get a LedgerStore instance."""
    return SqlAlchemyLedgerStore(session_factory)


def get_transaction_store(session_factory: SessionFactory) -> SqlAlchemyTransactionStore:
    """Get a TransactionStore instance."""
    return SqlAlchemyTransactionStore(session_factory)


def get_contract_number_generator() -> ContractNumberGenerator:
    """Get a ContractNumberGenerator instance."""
    return ContractNumberGenerator()


# Service dependencies
def get_credit_transaction_coordinator(
    unit_of_work_factory: Annotated[
        Callable[[], SqlAlchemyUnitOfWork], Depends(get_unit_of_work_factory)
    ],
    customer_directory: Annotated[SqlAlchemyCustomerDirectory, Depends(get_customer_directory)],
    ledger_store: Annotated[SqlAlchemyLedgerStore, Depends(get_ledger_store)],
    transaction_store: Annotated[SqlAlchemyTransactionStore, Depends(get_transaction_store)],
    contract_numbers: Annotated[ContractNumberGenerator, Depends(get_contract_number_generator)],
) -> CreditTransactionCoordinator:
    """Get a CreditTransactionCoordinator instance with all dependencies."""
    return CreditTransactionCoordinator(
        unit_of_work_factory=unit_of_work_factory,
        customer_directory=customer_directory,
        ledger_store=ledger_store,
        transaction_store=transaction_store,
        contract_numbers=contract_numbers,
        max_conflict_retries=settings.limit_conflict_max_retries,
        timeout=settings.record_timeout_seconds,
    )


def get_customer_service(
    unit_of_work_factory: Annotated[
        Callable[[], SqlAlchemyUnitOfWork], Depends(get_unit_of_work_factory)
    ],
    customer_directory: Annotated[SqlAlchemyCustomerDirectory, Depends(get_customer_directory)],
    ledger_store: Annotated[SqlAlchemyLedgerStore, Depends(get_ledger_store)],
    transaction_store: Annotated[SqlAlchemyTransactionStore, Depends(get_transaction_store)],
) -> CustomerService:
    """Get a CustomerService instance."""
    return CustomerService(
        unit_of_work_factory=unit_of_work_factory,
        customer_directory=customer_directory,
        ledger_store=ledger_store,
        transaction_store=transaction_store,
    )
