"""Generic database abstraction interfaces."""

from abc import ABC, abstractmethod
from typing import Any, Optional, Dict, List, AsyncContextManager


class IDatabaseConnection(ABC):
    """Generic database connection interface."""

    @abstractmethod
    async def execute(self, query: str, *args) -> str:
        """Execute a query without returning results."""
        pass

    @abstractmethod
    async def executemany(self, query: str, args: List[tuple]) -> None:
        """Execute a query multiple times with different arguments."""
        pass

    @abstractmethod
    async def fetchrow(self, query: str, *args) -> Optional[Dict[str, Any]]:
        """Execute a query and return a single row as a dictionary."""
        pass

    @abstractmethod
    async def fetch(self, query: str, *args) -> List[Dict[str, Any]]:
        """Execute a query and return all rows as list of dictionaries."""
        pass

    @abstractmethod
    async def fetchval(self, query: str, *args, column: int = 0) -> Any:
        """Execute a query and return a single value."""
        pass

    @abstractmethod
    def transaction(self) -> AsyncContextManager[None]:
        """Start a database transaction."""
        pass


class IDatabasePool(ABC):
    """Generic database connection pool interface."""

    @abstractmethod
    def acquire(self) -> AsyncContextManager[IDatabaseConnection]:
        """
        Acquire a connection from the pool.

        Returns:
            AsyncContextManager that yields a IDatabaseConnection
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close all connections in the pool."""
        pass
