"""Database infrastructure."""

from .connection import (
    DatabaseSessionManager,
    configure_sqlite_engine,
    create_engine,
    create_sessionmaker,
    db_manager,
    get_session_factory,
)
from .models import Base, CustomerModel, CreditLimitModel, TransactionModel
from .unit_of_work import SqlAlchemyUnitOfWork

__all__ = [
    "DatabaseSessionManager",
    "configure_sqlite_engine",
    "create_engine",
    "create_sessionmaker",
    "db_manager",
    "get_session_factory",
    "Base",
    "CustomerModel",
    "CreditLimitModel",
    "TransactionModel",
    "SqlAlchemyUnitOfWork",
]
