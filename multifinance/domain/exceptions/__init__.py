"""Domain Exceptions - Business rule violations and domain errors."""

from .base import DomainException
from .customer import (
    CustomerAlreadyExistsException,
    InvalidRequestException,
    LimitAlreadyProvisionedException,
    TransactionNotFoundException,
)
from .transaction import (
    TransactionErrorKind,
    TransactionException,
    CustomerNotFoundException,
    LimitNotFoundException,
    LimitExceededException,
    StoreFailureException,
    LookupFailureException,
    PersistFailureException,
    LedgerUpdateFailureException,
    LimitConflictException,
    CommitFailureException,
    DuplicateContractNumberException,
    DeadlineExceededException,
)

__all__ = [
    "DomainException",
    "CustomerAlreadyExistsException",
    "InvalidRequestException",
    "LimitAlreadyProvisionedException",
    "TransactionNotFoundException",
    "TransactionErrorKind",
    "TransactionException",
    "CustomerNotFoundException",
    "LimitNotFoundException",
    "LimitExceededException",
    "StoreFailureException",
    "LookupFailureException",
    "PersistFailureException",
    "LedgerUpdateFailureException",
    "LimitConflictException",
    "CommitFailureException",
    "DuplicateContractNumberException",
    "DeadlineExceededException",
]
