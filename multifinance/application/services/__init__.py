"""Application services (use cases)."""

from .credit_transaction_coordinator import CreditTransactionCoordinator
from .customer_service import CustomerService

__all__ = [
    "CreditTransactionCoordinator",
    "CustomerService",
]
