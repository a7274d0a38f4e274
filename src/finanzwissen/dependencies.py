"""Shared FastAPI dependencies."""

from collections.abc import AsyncGenerator

from finanzwissen.config import get_settings
from finanzwissen.database import get_session
from finanzwissen.store import MemoryStore, SqlStore, Store

_memory_store: MemoryStore | None = None


def get_memory_store() -> MemoryStore:
    """Process-wide in-memory store, created on first use."""
    global _memory_store  # noqa: PLW0603
    if _memory_store is None:
        _memory_store = MemoryStore()
    return _memory_store


def reset_memory_store() -> None:
    """Drop the in-memory store (useful for testing)."""
    global _memory_store  # noqa: PLW0603
    _memory_store = None


async def get_store() -> AsyncGenerator[Store, None]:
    """Yield the configured store as a FastAPI dependency.

    The database backend gets one session per request; routers call
    ``store.commit()`` after a successful mutation.
    """
    settings = get_settings()
    if settings.storage_backend == "database":
        async for session in get_session():
            yield SqlStore(session)
    else:
        yield get_memory_store()
