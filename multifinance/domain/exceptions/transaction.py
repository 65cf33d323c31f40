"""Exceptions raised while recording a credit transaction.

The engine's failure modes form a closed set, ``TransactionErrorKind``.
Every exception below carries exactly one kind, so callers can dispatch on
``exc.kind`` instead of on message text.
"""

from enum import Enum

from .base import DomainException


class TransactionErrorKind(str, Enum):
    """Closed set of outcomes a failed ``record`` call can report."""

    CUSTOMER_NOT_FOUND = "CUSTOMER_NOT_FOUND"
    LIMIT_NOT_FOUND = "LIMIT_NOT_FOUND"
    LIMIT_EXCEEDED = "LIMIT_EXCEEDED"
    PERSIST_FAILURE = "PERSIST_FAILURE"
    LEDGER_UPDATE_FAILURE = "LEDGER_UPDATE_FAILURE"
    COMMIT_FAILURE = "COMMIT_FAILURE"
    DUPLICATE_KEY = "DUPLICATE_KEY"
    LOOKUP_FAILURE = "LOOKUP_FAILURE"
    DEADLINE_EXCEEDED = "DEADLINE_EXCEEDED"


class TransactionException(DomainException):
    """
    Base exception for the credit transaction engine.

    Attributes:
        kind: Which member of the taxonomy this error is
        retryable: Whether retrying the whole call is safe and may succeed
    """

    kind: TransactionErrorKind
    retryable: bool = False

    def __init__(self, message: str):
        super().__init__(message=message, code=self.kind.value)


# Business outcomes


class CustomerNotFoundException(TransactionException):
    """Raised when no customer exists for the identifier."""

    kind = TransactionErrorKind.CUSTOMER_NOT_FOUND

    def __init__(self, customer_nik: str):
        super().__init__(f"Customer not found: {customer_nik}")
        self.customer_nik = customer_nik


class LimitNotFoundException(TransactionException):
    """Raised when the customer has no approved limit for the tenor."""

    kind = TransactionErrorKind.LIMIT_NOT_FOUND

    def __init__(self, customer_nik: str, tenor: int):
        super().__init__(f"No credit limit available for tenor {tenor}")
        self.customer_nik = customer_nik
        self.tenor = tenor


class LimitExceededException(TransactionException):
    """Raised when otr + admin_fee is larger than the remaining limit."""

    kind = TransactionErrorKind.LIMIT_EXCEEDED

    def __init__(self, requested_amount: int, remaining_amount: int):
        super().__init__("Transaction amount exceeds available limit")
        self.requested_amount = requested_amount
        self.remaining_amount = remaining_amount


# Store failures. None of these leave partial state behind.


class StoreFailureException(TransactionException):
    """Base for failures of the backing store."""

    retryable = True


class LookupFailureException(StoreFailureException):
    """Raised when reading customers or limits fails."""

    kind = TransactionErrorKind.LOOKUP_FAILURE

    def __init__(self, message: str = "Failed to read from the store"):
        super().__init__(message)


class PersistFailureException(StoreFailureException):
    """Raised when the transaction record cannot be written."""

    kind = TransactionErrorKind.PERSIST_FAILURE

    def __init__(self, message: str = "Failed to persist transaction"):
        super().__init__(message)


class LedgerUpdateFailureException(StoreFailureException):
    """Raised when the limit deduction cannot be written."""

    kind = TransactionErrorKind.LEDGER_UPDATE_FAILURE

    def __init__(self, message: str = "Failed to update credit limit"):
        super().__init__(message)


class LimitConflictException(LedgerUpdateFailureException):
    """Raised when the limit row changed after it was read."""

    def __init__(self, customer_nik: str, tenor: int):
        super().__init__(
            f"Credit limit for tenor {tenor} was modified concurrently"
        )
        self.customer_nik = customer_nik
        self.tenor = tenor


class CommitFailureException(StoreFailureException):
    """Raised when committing the unit of work fails."""

    kind = TransactionErrorKind.COMMIT_FAILURE

    def __init__(self, message: str = "Failed to commit transaction"):
        super().__init__(message)


class DuplicateContractNumberException(TransactionException):
    """Raised when a generated contract number already exists."""

    kind = TransactionErrorKind.DUPLICATE_KEY

    def __init__(self, contract_number: str):
        super().__init__(f"Contract number already exists: {contract_number}")
        self.contract_number = contract_number


class DeadlineExceededException(TransactionException):
    """Raised when the caller's deadline passes before the commit."""

    kind = TransactionErrorKind.DEADLINE_EXCEEDED
    retryable = True

    def __init__(self, timeout: float):
        super().__init__("Transaction could not be completed in time")
        self.timeout = timeout
