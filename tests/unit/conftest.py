"""
Fixtures for unit tests.

Provides in-memory stores that follow the store contracts, including a
unit of work that stages writes until commit, so the coordinator can be
tested without a database.
"""

import asyncio
from datetime import date, datetime, timezone
from typing import Dict, List, Optional, Tuple

import pytest

from multifinance.application.services import CreditTransactionCoordinator
from multifinance.domain.entities import CreditLimit, Customer, Transaction
from multifinance.domain.exceptions import (
    CommitFailureException,
    CustomerAlreadyExistsException,
    DuplicateContractNumberException,
    LedgerUpdateFailureException,
    LimitAlreadyProvisionedException,
    LimitConflictException,
    LookupFailureException,
    PersistFailureException,
)
from multifinance.domain.interfaces import (
    CustomerDirectory,
    LedgerStore,
    TransactionStore,
    UnitOfWork,
)
from multifinance.service.contract import ContractNumberGenerator


FIXED_TIME = datetime(2026, 10, 19, 9, 30, 15, 123456, tzinfo=timezone.utc)
CUSTOMER_NIK = "3201011201900001"


# =============================================================================
# In-memory stores
# =============================================================================

class InMemoryDatabase:
    """Committed state plus a log of every store call, in order."""

    def __init__(self):
        self.customers: Dict[str, Customer] = {}
        self.limits: Dict[Tuple[str, int], CreditLimit] = {}
        self.transactions: Dict[str, Transaction] = {}
        self.calls: List[str] = []
        self.commits = 0
        self.rollbacks = 0

    def add_customer(self, nik: str = CUSTOMER_NIK) -> None:
        self.customers[nik] = Customer(
            nik=nik,
            full_name="Budi Santoso",
            legal_name="Budi Santoso",
            birth_place="Bandung",
            birth_date=date(1990, 1, 12),
            salary=8_000_000,
        )

    def add_limit(self, tenor: int, amount: int, nik: str = CUSTOMER_NIK) -> None:
        self.limits[(nik, tenor)] = CreditLimit(nik, tenor, amount)

    def remaining(self, tenor: int, nik: str = CUSTOMER_NIK) -> int:
        return self.limits[(nik, tenor)].remaining_amount


class InMemoryUnitOfWork(UnitOfWork):
    """Stages writes and applies them to the database on commit."""

    def __init__(self, db: InMemoryDatabase, fail_commit: bool = False):
        self.db = db
        self.fail_commit = fail_commit
        self.pending_limits: Dict[Tuple[str, int], CreditLimit] = {}
        self.pending_transactions: Dict[str, Transaction] = {}
        self._open = False

    async def begin(self) -> None:
        self._open = True

    async def commit(self) -> None:
        self.db.calls.append("commit")
        if self.fail_commit:
            raise CommitFailureException()
        self.db.limits.update(self.pending_limits)
        self.db.transactions.update(self.pending_transactions)
        self.db.commits += 1
        self._open = False

    async def rollback(self) -> None:
        self.pending_limits.clear()
        self.pending_transactions.clear()
        self.db.rollbacks += 1
        self._open = False

    async def close(self) -> None:
        if self._open:
            await self.rollback()


class InMemoryCustomerDirectory(CustomerDirectory):
    def __init__(self, db: InMemoryDatabase):
        self.db = db
        self.fail_lookup = False

    async def exists(self, customer_nik, scope=None) -> bool:
        self.db.calls.append("exists")
        if self.fail_lookup:
            raise LookupFailureException()
        return customer_nik in self.db.customers

    async def get(self, customer_nik):
        return self.db.customers.get(customer_nik)

    async def add(self, customer, scope=None) -> None:
        if customer.nik in self.db.customers:
            raise CustomerAlreadyExistsException(customer.nik)
        self.db.customers[customer.nik] = customer


class InMemoryLedgerStore(LedgerStore):
    def __init__(self, db: InMemoryDatabase):
        self.db = db
        self.fail_update = False
        self.conflicts = 0
        self.read_delay = 0.0

    async def get(self, customer_nik, tenor, scope=None) -> Optional[CreditLimit]:
        self.db.calls.append("get_limit")
        if self.read_delay:
            await asyncio.sleep(self.read_delay)
        key = (customer_nik, tenor)
        if scope is not None and key in scope.pending_limits:
            return scope.pending_limits[key]
        return self.db.limits.get(key)

    async def set(self, customer_nik, tenor, new_amount, scope=None) -> CreditLimit:
        self.db.calls.append("set_limit")
        if self.conflicts:
            self.conflicts -= 1
            raise LimitConflictException(customer_nik, tenor)
        if self.fail_update:
            raise LedgerUpdateFailureException()
        limit = CreditLimit(customer_nik, tenor, new_amount)
        scope.pending_limits[(customer_nik, tenor)] = limit
        return limit

    async def add(self, limit, scope=None) -> None:
        key = (limit.customer_nik, limit.tenor)
        if key in self.db.limits or key in scope.pending_limits:
            raise LimitAlreadyProvisionedException(limit.customer_nik, limit.tenor)
        scope.pending_limits[key] = limit

    async def list_for_customer(self, customer_nik) -> List[CreditLimit]:
        return sorted(
            (l for (nik, _), l in self.db.limits.items() if nik == customer_nik),
            key=lambda l: l.tenor,
        )


class InMemoryTransactionStore(TransactionStore):
    def __init__(self, db: InMemoryDatabase):
        self.db = db
        self.fail_append = False

    async def append(self, transaction, scope=None) -> None:
        self.db.calls.append("append")
        if self.fail_append:
            raise PersistFailureException()
        number = transaction.contract_number
        if number in self.db.transactions or number in scope.pending_transactions:
            raise DuplicateContractNumberException(number)
        scope.pending_transactions[number] = transaction

    async def get(self, contract_number):
        return self.db.transactions.get(contract_number)

    async def list_for_customer(self, customer_nik, limit=10, offset=0):
        found = sorted(
            (t for t in self.db.transactions.values() if t.customer_nik == customer_nik),
            key=lambda t: (t.created_at, t.contract_number),
            reverse=True,
        )
        return found[offset:offset + limit]


class ScriptedContractNumbers(ContractNumberGenerator):
    """Hands out a fixed sequence of contract numbers."""

    def __init__(self, numbers: List[str]):
        super().__init__()
        self.numbers = list(numbers)

    def generate(self, customer_nik: str) -> str:
        return self.numbers.pop(0)


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def db() -> InMemoryDatabase:
    """Database with one customer approved for tenors 1, 3 and 6."""
    database = InMemoryDatabase()
    database.add_customer()
    database.add_limit(1, 100_000)
    database.add_limit(3, 500_000)
    database.add_limit(6, 10_000_000)
    return database


@pytest.fixture
def stores(db):
    """Customer directory, ledger and transaction store over ``db``."""
    return (
        InMemoryCustomerDirectory(db),
        InMemoryLedgerStore(db),
        InMemoryTransactionStore(db),
    )


@pytest.fixture
def make_coordinator(db, stores):
    """Build a coordinator over the in-memory stores."""
    customers, ledger, transactions = stores

    def _make(
        fail_commit: bool = False,
        contract_numbers: Optional[ContractNumberGenerator] = None,
        **kwargs,
    ) -> CreditTransactionCoordinator:
        return CreditTransactionCoordinator(
            unit_of_work_factory=lambda: InMemoryUnitOfWork(db, fail_commit=fail_commit),
            customer_directory=customers,
            ledger_store=ledger,
            transaction_store=transactions,
            contract_numbers=contract_numbers,
            clock=lambda: FIXED_TIME,
            **kwargs,
        )

    return _make


@pytest.fixture
def scripted_numbers():
    return ScriptedContractNumbers
