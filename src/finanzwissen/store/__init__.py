"""Entity storage: protocol, in-memory and SQL implementations."""

from finanzwissen.store.memory import MemoryStore
from finanzwissen.store.protocol import Store
from finanzwissen.store.sql import SqlStore

__all__ = ["MemoryStore", "SqlStore", "Store"]
