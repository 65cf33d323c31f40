"""Data Transfer Objects for application layer."""

from .customer import (
    CreditLimitDTO,
    CreditLimitsResponse,
    CustomerRequest,
    CustomerResponse,
    LimitProvision,
)
from .transaction import (
    TransactionHistoryResponse,
    TransactionRequest,
    TransactionResponse,
)

__all__ = [
    "CreditLimitDTO",
    "CreditLimitsResponse",
    "CustomerRequest",
    "CustomerResponse",
    "LimitProvision",
    "TransactionHistoryResponse",
    "TransactionRequest",
    "TransactionResponse",
]
