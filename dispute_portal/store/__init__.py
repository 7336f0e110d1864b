"""Row store backends and the HTTP client for the portal endpoint."""
from dispute_portal.store.base import RowStore
from dispute_portal.store.client import PortalClient
from dispute_portal.store.memory import MemoryRowStore

__all__ = ["MemoryRowStore", "PortalClient", "RowStore"]
