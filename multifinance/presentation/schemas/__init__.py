"""Pydantic schemas for API request/response validation."""

from .customer import (
    CreditLimitSchema,
    CreditLimitsResponseSchema,
    CustomerRequestSchema,
    CustomerResponseSchema,
    LimitProvisionRequestSchema,
    LimitProvisionSchema,
)
from .error import ErrorResponseSchema
from .transaction import (
    TransactionHistoryResponseSchema,
    TransactionRequestSchema,
    TransactionResponseSchema,
)

__all__ = [
    "CreditLimitSchema",
    "CreditLimitsResponseSchema",
    "CustomerRequestSchema",
    "CustomerResponseSchema",
    "LimitProvisionRequestSchema",
    "LimitProvisionSchema",
    "ErrorResponseSchema",
    "TransactionHistoryResponseSchema",
    "TransactionRequestSchema",
    "TransactionResponseSchema",
]
