"""SQLAlchemy implementation of the UnitOfWork."""

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from multifinance.domain.exceptions import CommitFailureException
from multifinance.domain.interfaces import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """
    Unit of work backed by one AsyncSession and one database transaction.

    Stores given this scope run their statements on ``session``.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory
        self._session: AsyncSession | None = None

    @property
    def session(self) -> AsyncSession:
        if self._session is None:
            raise RuntimeError("Unit of work is not active. Use 'async with'.")
        return self._session

    async def begin(self) -> None:
        self._session = self._session_factory()
        await self._session.begin()

    async def commit(self) -> None:
        try:
            await self.session.commit()
        except SQLAlchemyError as exc:
            # close() rolls back whatever the failed commit left open
            raise CommitFailureException() from exc

    async def rollback(self) -> None:
        await self.session.rollback()

    async def close(self) -> None:
        if self._session is None:
            return
        try:
            if self._session.in_transaction():
                await self._session.rollback()
        finally:
            await self._session.close()
            self._session = None
