"""
Fixtures for integration tests.

Provides:
- A file-backed SQLite database per test (separate connections per
  session, so concurrent units of work really contend for the lock)
- Stores, unit of work factory and coordinator wired to that database
- A seeded customer with limits for tenors 1, 3 and 6
- Test client for the FastAPI app
"""

from datetime import date
from functools import partial
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from multifinance.main import app
from multifinance.application.services import CreditTransactionCoordinator, CustomerService
from multifinance.domain.entities import CreditLimit, Customer
from multifinance.infrastructure.database import (
    Base,
    SqlAlchemyUnitOfWork,
    create_engine,
    create_sessionmaker,
    get_session_factory,
)
from multifinance.infrastructure.repositories import (
    SqlAlchemyCustomerDirectory,
    SqlAlchemyLedgerStore,
    SqlAlchemyTransactionStore,
)


CUSTOMER_NIK = "3201011201900001"
SEEDED_LIMITS = {1: 100_000, 3: 500_000, 6: 10_000_000}


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def test_engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """Create a SQLite database file with all tables."""
    engine = create_engine(f"sqlite:///{tmp_path / 'multifinance.db'}")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine) -> async_sessionmaker[AsyncSession]:
    return create_sessionmaker(test_engine)


@pytest.fixture
def unit_of_work_factory(session_factory):
    return partial(SqlAlchemyUnitOfWork, session_factory)


@pytest.fixture
def customer_directory(session_factory) -> SqlAlchemyCustomerDirectory:
    return SqlAlchemyCustomerDirectory(session_factory)


@pytest.fixture
def ledger_store(session_factory) -> SqlAlchemyLedgerStore:
    return SqlAlchemyLedgerStore(session_factory)


@pytest.fixture
def transaction_store(session_factory) -> SqlAlchemyTransactionStore:
    return SqlAlchemyTransactionStore(session_factory)


@pytest.fixture
def coordinator(
    unit_of_work_factory,
    customer_directory,
    ledger_store,
    transaction_store,
) -> CreditTransactionCoordinator:
    return CreditTransactionCoordinator(
        unit_of_work_factory=unit_of_work_factory,
        customer_directory=customer_directory,
        ledger_store=ledger_store,
        transaction_store=transaction_store,
    )


@pytest.fixture
def customer_service(
    unit_of_work_factory,
    customer_directory,
    ledger_store,
    transaction_store,
) -> CustomerService:
    return CustomerService(
        unit_of_work_factory=unit_of_work_factory,
        customer_directory=customer_directory,
        ledger_store=ledger_store,
        transaction_store=transaction_store,
    )


# =============================================================================
# Seed Data
# =============================================================================

@pytest_asyncio.fixture
async def seeded_customer(
    unit_of_work_factory,
    customer_directory,
    ledger_store,
) -> str:
    """Customer approved for tenors 1, 3 and 6. Returns the NIK."""
    await customer_directory.add(
        Customer(
            nik=CUSTOMER_NIK,
            full_name="Budi Santoso",
            legal_name="Budi Santoso",
            birth_place="Bandung",
            birth_date=date(1990, 1, 12),
            salary=8_000_000,
        )
    )

    async with unit_of_work_factory() as scope:
        for tenor, amount in SEEDED_LIMITS.items():
            await ledger_store.add(CreditLimit(CUSTOMER_NIK, tenor, amount), scope=scope)
        await scope.commit()

    return CUSTOMER_NIK


# =============================================================================
# App Client Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client backed by the test database.

    Each request gets stores and units of work over the test session
    factory, exactly as in production.
    """
    app.dependency_overrides[get_session_factory] = lambda: session_factory

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# =============================================================================
# Helper Fixtures
# =============================================================================

@pytest.fixture
def transaction_request() -> dict:
    """Request body that fits the tenor 6 limit."""
    return {
        "customer_nik": CUSTOMER_NIK,
        "tenor": 6,
        "otr": 1_000_000,
        "admin_fee": 50_000,
        "installment": 180_000,
        "interest": 30_000,
        "asset_name": "Honda Beat",
    }


@pytest.fixture
def customer_request() -> dict:
    """Request body for onboarding a new customer."""
    return {
        "nik": "3174055505920002",
        "full_name": "Siti Rahmawati",
        "legal_name": "Siti Rahmawati",
        "birth_place": "Jakarta",
        "birth_date": "1992-05-15",
        "salary": 12_000_000,
        "photo_ktp": "ktp/3174055505920002.jpg",
        "photo_selfie": "selfie/3174055505920002.jpg",
    }
