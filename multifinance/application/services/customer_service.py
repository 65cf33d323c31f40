"""Customer service - onboarding, limit provisioning and history lookups."""

from typing import Callable, List

import structlog

from multifinance.application.dto import (
    CreditLimitsResponse,
    CustomerRequest,
    CustomerResponse,
    LimitProvision,
    TransactionHistoryResponse,
)
from multifinance.domain.entities import CreditLimit, Customer
from multifinance.domain.exceptions import (
    CustomerNotFoundException,
    InvalidRequestException,
)
from multifinance.domain.interfaces import (
    CustomerDirectory,
    LedgerStore,
    TransactionStore,
    UnitOfWork,
)

logger = structlog.get_logger(__name__)


class CustomerService:
    """
    Application service for customer use cases.

    Limits created here are never changed afterwards except by the
    transaction coordinator's deductions.
    """

    def __init__(
        self,
        unit_of_work_factory: Callable[[], UnitOfWork],
        customer_directory: CustomerDirectory,
        ledger_store: LedgerStore,
        transaction_store: TransactionStore,
    ):
        self._unit_of_work_factory = unit_of_work_factory
        self._customers = customer_directory
        self._ledger = ledger_store
        self._transactions = transaction_store

    async def register_customer(self, request: CustomerRequest) -> CustomerResponse:
        """
        Onboard a new customer.

        Raises:
            CustomerAlreadyExistsException: If the NIK is already registered
        """
        customer = Customer(
            nik=request.nik,
            full_name=request.full_name,
            legal_name=request.legal_name,
            birth_place=request.birth_place,
            birth_date=request.birth_date,
            salary=request.salary,
            photo_ktp=request.photo_ktp,
            photo_selfie=request.photo_selfie,
        )
        await self._customers.add(customer)

        logger.info("customer_registered", customer_nik=customer.nik)

        return CustomerResponse.from_entity(customer)

    async def get_customer(self, customer_nik: str) -> CustomerResponse:
        """
        Retrieve a customer by NIK.

        Raises:
            CustomerNotFoundException: If customer not found
        """
        customer = await self._customers.get(customer_nik)
        if customer is None:
            logger.warning("customer_not_found", customer_nik=customer_nik)
            raise CustomerNotFoundException(customer_nik)

        return CustomerResponse.from_entity(customer)

    async def provision_limits(
        self,
        customer_nik: str,
        provisions: List[LimitProvision],
    ) -> CreditLimitsResponse:
        """
        Create approved limits for tenors the customer has no limit for.

        All tenors are created together or not at all.

        Raises:
            InvalidRequestException: If a tenor appears twice or an amount is invalid
            CustomerNotFoundException: If customer not found
            LimitAlreadyProvisionedException: If a tenor already has a limit
        """
        tenors = [p.tenor for p in provisions]
        if not provisions:
            raise InvalidRequestException("at least one limit is required")
        if len(set(tenors)) != len(tenors):
            raise InvalidRequestException("each tenor can only be provisioned once")

        try:
            limits = [
                CreditLimit(
                    customer_nik=customer_nik,
                    tenor=p.tenor,
                    remaining_amount=p.limit_amount,
                )
                for p in provisions
            ]
        except ValueError as exc:
            raise InvalidRequestException(str(exc)) from exc

        async with self._unit_of_work_factory() as scope:
            if not await self._customers.exists(customer_nik, scope=scope):
                raise CustomerNotFoundException(customer_nik)

            for limit in limits:
                await self._ledger.add(limit, scope=scope)

            await scope.commit()

        logger.info("limits_provisioned", customer_nik=customer_nik, tenors=tenors)

        return await self.get_limits(customer_nik)

    async def get_limits(self, customer_nik: str) -> CreditLimitsResponse:
        """
        Retrieve the remaining limit for every tenor of a customer.

        Raises:
            CustomerNotFoundException: If customer not found
        """
        if not await self._customers.exists(customer_nik):
            raise CustomerNotFoundException(customer_nik)

        limits = await self._ledger.list_for_customer(customer_nik)
        return CreditLimitsResponse.from_entities(customer_nik, limits)

    async def get_transaction_history(
        self,
        customer_nik: str,
        limit: int = 10,
        offset: int = 0,
    ) -> TransactionHistoryResponse:
        """
        Retrieve a customer's transactions, newest first.

        Raises:
            CustomerNotFoundException: If customer not found
        """
        if not await self._customers.exists(customer_nik):
            raise CustomerNotFoundException(customer_nik)

        transactions = await self._transactions.list_for_customer(
            customer_nik, limit=limit, offset=offset
        )

        logger.info(
            "transaction_history_retrieved",
            customer_nik=customer_nik,
            count=len(transactions),
        )

        return TransactionHistoryResponse.from_entities(customer_nik, transactions)
