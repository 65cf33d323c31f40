"""Session handling shared by the SQLAlchemy stores."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from multifinance.domain.interfaces import UnitOfWork
from multifinance.infrastructure.database.unit_of_work import SqlAlchemyUnitOfWork


UNIQUE_VIOLATION_SQLSTATE = "23505"
SQLITE_UNIQUE_VIOLATIONS = frozenset(
    {"SQLITE_CONSTRAINT_PRIMARYKEY", "SQLITE_CONSTRAINT_UNIQUE"}
)


def is_duplicate_key_error(exc: IntegrityError) -> bool:
    """
    Check whether an IntegrityError is a unique/primary key violation.

    PostgreSQL drivers report the SQLSTATE, sqlite3 (Python 3.11+) the
    extended error name. The message is only consulted for sqlite3
    builds that expose neither.
    """
    orig = exc.orig

    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate is not None:
        return sqlstate == UNIQUE_VIOLATION_SQLSTATE

    error_name = getattr(orig, "sqlite_errorname", None)
    if error_name is not None:
        return error_name in SQLITE_UNIQUE_VIOLATIONS

    return str(orig).startswith("UNIQUE constraint failed")


class SqlAlchemyStore:
    """
    Base class for stores that can run inside or outside a unit of work.

    With a scope, statements run on the scope's session and nothing is
    committed here. Without one, a short-lived session is opened and
    writes are committed before it is closed.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    @asynccontextmanager
    async def _session(
        self,
        scope: Optional[UnitOfWork] = None,
        write: bool = False,
    ) -> AsyncGenerator[AsyncSession, None]:
        if scope is not None:
            if not isinstance(scope, SqlAlchemyUnitOfWork):
                raise TypeError(
                    f"{type(self).__name__} requires a SqlAlchemyUnitOfWork, "
                    f"got {type(scope).__name__}"
                )
            yield scope.session
            return

        async with self._session_factory() as session:
            yield session
            if write:
                await session.commit()
