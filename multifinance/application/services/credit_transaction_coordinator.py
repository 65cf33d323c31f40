"""Credit transaction coordinator - records purchases against credit limits."""

import asyncio
from typing import Callable, Optional

import structlog

from multifinance.application.dto import TransactionRequest
from multifinance.core.metrics import (
    record_contract_number_collision,
    record_limit_conflict_retry,
    record_transaction_failure,
    record_transaction_recorded,
    track_record_latency,
)
from multifinance.domain.entities import Transaction
from multifinance.domain.exceptions import (
    CustomerNotFoundException,
    DeadlineExceededException,
    DuplicateContractNumberException,
    InvalidRequestException,
    LimitConflictException,
    LimitExceededException,
    LimitNotFoundException,
    TransactionErrorKind,
    TransactionException,
    TransactionNotFoundException,
)
from multifinance.domain.interfaces import (
    CustomerDirectory,
    LedgerStore,
    TransactionStore,
    UnitOfWork,
)
from multifinance.service.contract import Clock, ContractNumberGenerator, utc_now

logger = structlog.get_logger(__name__)

UnitOfWorkFactory = Callable[[], UnitOfWork]


class CreditTransactionCoordinator:
    """
    Records a purchase on credit as one atomic unit of work.

    Inside a single scope it checks that the customer exists, reads the
    remaining limit for the tenor, rejects purchases whose otr + admin_fee
    exceed it, appends the transaction and writes the reduced limit. Any
    failure before the commit rolls the whole scope back.

    The coordinator holds no locks or per-customer state. Concurrent calls
    for the same (customer, tenor) are serialized by the ledger store.
    """

    DUPLICATE_KEY_RETRIES = 1
    MAX_CONFLICT_RETRIES = 3

    def __init__(
        self,
        unit_of_work_factory: UnitOfWorkFactory,
        customer_directory: CustomerDirectory,
        ledger_store: LedgerStore,
        transaction_store: TransactionStore,
        contract_numbers: Optional[ContractNumberGenerator] = None,
        clock: Optional[Clock] = None,
        max_conflict_retries: Optional[int] = None,
        timeout: Optional[float] = None,
    ):
        self._unit_of_work_factory = unit_of_work_factory
        self._customers = customer_directory
        self._ledger = ledger_store
        self._transactions = transaction_store
        self._clock = clock or utc_now
        self._contract_numbers = contract_numbers or ContractNumberGenerator(clock=self._clock)
        self._max_conflict_retries = (
            self.MAX_CONFLICT_RETRIES if max_conflict_retries is None else max_conflict_retries
        )
        self._timeout = timeout

    async def record(
        self,
        request: TransactionRequest,
        timeout: Optional[float] = None,
    ) -> Transaction:
        """
        Record a purchase and deduct it from the customer's limit.

        Args:
            request: The purchase to record
            timeout: Seconds before the attempt is abandoned; overrides the
                coordinator default. None or 0 means no deadline.

        Returns:
            The recorded transaction

        Raises:
            InvalidRequestException: If the request fails field validation
            CustomerNotFoundException: If the customer doesn't exist
            LimitNotFoundException: If the customer has no limit for the tenor
            LimitExceededException: If otr + admin_fee exceeds the remaining limit
            StoreFailureException: If the store fails; nothing was written
            DuplicateContractNumberException: If contract numbers collide twice
            DeadlineExceededException: If the deadline passes before the commit
        """
        errors = request.validate()
        if errors:
            raise InvalidRequestException("; ".join(errors))

        log = logger.bind(
            customer_nik=request.customer_nik,
            tenor=request.tenor,
            total_amount=request.total_amount,
        )
        log.info("transaction_requested")

        deadline = self._timeout if timeout is None else timeout

        try:
            with track_record_latency():
                if deadline:
                    transaction = await asyncio.wait_for(
                        self._record_with_retries(request, log),
                        timeout=deadline,
                    )
                else:
                    transaction = await self._record_with_retries(request, log)
        except asyncio.TimeoutError as exc:
            log.warning("transaction_deadline_exceeded", timeout=deadline)
            record_transaction_failure(TransactionErrorKind.DEADLINE_EXCEEDED.value)
            raise DeadlineExceededException(deadline) from exc
        except TransactionException as exc:
            record_transaction_failure(exc.kind.value)
            raise

        record_transaction_recorded(transaction.total_amount)
        log.info(
            "transaction_recorded",
            contract_number=transaction.contract_number,
        )

        return transaction

    async def get_transaction(self, contract_number: str) -> Transaction:
        """
        Get a recorded transaction by contract number.

        Raises:
            TransactionNotFoundException: If no such transaction exists
        """
        transaction = await self._transactions.get(contract_number)
        if transaction is None:
            logger.warning("transaction_not_found", contract_number=contract_number)
            raise TransactionNotFoundException(contract_number)
        return transaction

    async def _record_with_retries(self, request: TransactionRequest, log) -> Transaction:
        """
        Run the unit of work, re-running it after retryable conflicts.

        A contract number collision is retried once with a fresh number.
        A concurrent limit update is retried up to max_conflict_retries
        times, each time against a fresh read of the limit.
        """
        collisions = 0
        conflicts = 0

        while True:
            try:
                return await self._record_once(request, log)
            except DuplicateContractNumberException as exc:
                record_contract_number_collision()
                if collisions >= self.DUPLICATE_KEY_RETRIES:
                    log.error(
                        "contract_number_collision_exhausted",
                        contract_number=exc.contract_number,
                    )
                    raise
                collisions += 1
                log.warning(
                    "contract_number_collision",
                    contract_number=exc.contract_number,
                )
            except LimitConflictException:
                if conflicts >= self._max_conflict_retries:
                    log.error("limit_conflict_retries_exhausted", attempts=conflicts + 1)
                    raise
                conflicts += 1
                record_limit_conflict_retry()
                log.warning("limit_conflict_retry", attempt=conflicts)

    async def _record_once(self, request: TransactionRequest, log) -> Transaction:
        """One attempt: check, append and deduct inside a single scope."""
        async with self._unit_of_work_factory() as scope:
            # Existence first, so a missing customer wins over a missing limit
            if not await self._customers.exists(request.customer_nik, scope=scope):
                log.info("customer_not_found")
                raise CustomerNotFoundException(request.customer_nik)

            limit = await self._ledger.get(request.customer_nik, request.tenor, scope=scope)
            if limit is None:
                log.info("limit_not_found")
                raise LimitNotFoundException(request.customer_nik, request.tenor)

            total_amount = request.total_amount
            if not limit.can_cover(total_amount):
                log.info("limit_exceeded", remaining_amount=limit.remaining_amount)
                raise LimitExceededException(total_amount, limit.remaining_amount)

            transaction = Transaction(
                contract_number=self._contract_numbers.generate(request.customer_nik),
                customer_nik=request.customer_nik,
                tenor=request.tenor,
                otr=request.otr,
                admin_fee=request.admin_fee,
                installment=request.installment,
                interest=request.interest,
                asset_name=request.asset_name,
                created_at=self._clock(),
            )

            await self._transactions.append(transaction, scope=scope)
            await self._ledger.set(
                request.customer_nik,
                request.tenor,
                limit.deduct(total_amount).remaining_amount,
                scope=scope,
            )
            await scope.commit()

        return transaction
