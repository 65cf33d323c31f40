"""Atomic scope interface shared by the stores."""

from abc import ABC, abstractmethod
from types import TracebackType
from typing import Optional, Type


class UnitOfWork(ABC):
    """
    A unit of work in which reads and writes either all take effect or
    none do.

    Used as an async context manager. Leaving the block without a
    successful ``commit()`` (an exception, a cancellation or a deadline)
    rolls everything back.

    Example:
        async with uow_factory() as scope:
            limit = await ledger.get(nik, tenor, scope=scope)
            await ledger.set(nik, tenor, amount, scope=scope)
            await scope.commit()
    """

    async def __aenter__(self) -> "UnitOfWork":
        await self.begin()
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        await self.close()

    @abstractmethod
    async def begin(self) -> None:
        """Open the scope."""
        ...

    @abstractmethod
    async def commit(self) -> None:
        """
        Make every write in the scope durable.

        Raises:
            CommitFailureException: If the store rejects the commit; the
                scope is rolled back and nothing is persisted
        """
        ...

    @abstractmethod
    async def rollback(self) -> None:
        """Discard every write in the scope."""
        ...

    @abstractmethod
    async def close(self) -> None:
        """Release the scope, rolling back anything not committed."""
        ...
