"""
Domain Interfaces (Ports)
"""

from .repositories import CustomerDirectory, LedgerStore, TransactionStore
from .unit_of_work import UnitOfWork

__all__ = [
    "CustomerDirectory",
    "LedgerStore",
    "TransactionStore",
    "UnitOfWork",
]
