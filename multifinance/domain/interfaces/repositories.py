"""Store interfaces for customers, credit limits and transactions."""

from abc import ABC, abstractmethod
from typing import List, Optional

from multifinance.domain.entities import CreditLimit, Customer, Transaction

from .unit_of_work import UnitOfWork


class CustomerDirectory(ABC):
    """
    Read access to customer identity records.

    The transaction engine only uses ``exists``; the other methods serve
    the onboarding endpoints.
    """

    @abstractmethod
    async def exists(
        self,
        customer_nik: str,
        scope: Optional[UnitOfWork] = None,
    ) -> bool:
        """
        Check whether a customer is registered.

        Raises:
            LookupFailureException: If the store cannot be read
        """
        ...

    @abstractmethod
    async def get(self, customer_nik: str) -> Optional[Customer]:
        """
        Retrieve a customer by NIK.

        Returns:
            The customer if found, None otherwise
        """
        ...

    @abstractmethod
    async def add(
        self,
        customer: Customer,
        scope: Optional[UnitOfWork] = None,
    ) -> Customer:
        """
        Register a new customer.

        Raises:
            CustomerAlreadyExistsException: If the NIK is already registered
        """
        ...


class LedgerStore(ABC):
    """
    Durable access to ``(customer, tenor) -> remaining limit``.

    ``get`` and ``set`` take part in the caller's unit of work when a
    scope is given. Inside a scope, implementations must protect the
    read-then-write of a limit row against lost updates.
    """

    @abstractmethod
    async def get(
        self,
        customer_nik: str,
        tenor: int,
        scope: Optional[UnitOfWork] = None,
    ) -> Optional[CreditLimit]:
        """
        Read the remaining limit for a tenor.

        Args:
            customer_nik: The customer's NIK
            tenor: Tenor in months
            scope: Unit of work to read in; the row stays protected
                against concurrent writers until the scope ends

        Returns:
            The limit if the customer is approved for the tenor, None otherwise

        Raises:
            LookupFailureException: If the store cannot be read
        """
        ...

    @abstractmethod
    async def set(
        self,
        customer_nik: str,
        tenor: int,
        new_amount: int,
        scope: Optional[UnitOfWork] = None,
    ) -> CreditLimit:
        """
        Overwrite the remaining limit for a tenor.

        Raises:
            LimitConflictException: If the row changed since it was read
                in this scope
            LedgerUpdateFailureException: If the write fails
        """
        ...

    @abstractmethod
    async def add(
        self,
        limit: CreditLimit,
        scope: Optional[UnitOfWork] = None,
    ) -> CreditLimit:
        """
        Create a limit row for a tenor that has none.

        Raises:
            LimitAlreadyProvisionedException: If the tenor already has a row
        """
        ...

    @abstractmethod
    async def list_for_customer(self, customer_nik: str) -> List[CreditLimit]:
        """Retrieve every limit row of a customer, ordered by tenor."""
        ...


class TransactionStore(ABC):
    """
    Append-only store of recorded transactions.

    Records are never updated or deleted.
    """

    @abstractmethod
    async def append(
        self,
        transaction: Transaction,
        scope: Optional[UnitOfWork] = None,
    ) -> Transaction:
        """
        Persist a new transaction.

        Raises:
            DuplicateContractNumberException: If the contract number exists
            PersistFailureException: If the write fails for any other reason
        """
        ...

    @abstractmethod
    async def get(self, contract_number: str) -> Optional[Transaction]:
        """Retrieve a transaction by contract number."""
        ...

    @abstractmethod
    async def list_for_customer(
        self,
        customer_nik: str,
        limit: int = 10,
        offset: int = 0,
    ) -> List[Transaction]:
        """
        Retrieve a customer's transactions.

        Returns:
            Transactions ordered by created_at descending
        """
        ...
