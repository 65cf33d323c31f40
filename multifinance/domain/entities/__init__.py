"""Domain Entities - Core business objects."""

from .customer import Customer
from .credit_limit import CreditLimit
from .transaction import Transaction

__all__ = [
    "Customer",
    "CreditLimit",
    "Transaction",
]
