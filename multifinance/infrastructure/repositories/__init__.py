"""Store implementations."""

from .customer_repository import SqlAlchemyCustomerDirectory
from .limit_repository import SqlAlchemyLedgerStore
from .transaction_repository import SqlAlchemyTransactionStore

__all__ = [
    "SqlAlchemyCustomerDirectory",
    "SqlAlchemyLedgerStore",
    "SqlAlchemyTransactionStore",
]
