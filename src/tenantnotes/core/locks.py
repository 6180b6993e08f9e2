"""Per-tenant write locks.

Read-check-write sequences (plan limit checks followed by an insert, plan
changes touching every user row) hold the tenant's lock so two requests
from the same tenant cannot both pass a limit check.
"""

import asyncio
import weakref
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional
from uuid import UUID


class TenantLockRegistry:
    """Lazily created asyncio.Lock per tenant id.

    Entries are weak: a lock lives only while some request holds or waits
    on it, so the registry stays bounded by the number of busy tenants.
    """

    def __init__(self):
        self._locks: "weakref.WeakValueDictionary[UUID, asyncio.Lock]" = (
            weakref.WeakValueDictionary()
        )

    def get_lock(self, tenant_id: UUID) -> asyncio.Lock:
        lock = self._locks.get(tenant_id)
        if lock is None:
            # no await between lookup and insert, so this is race free on one loop
            lock = asyncio.Lock()
            self._locks[tenant_id] = lock
        return lock

    @asynccontextmanager
    async def hold(self, tenant_id: UUID) -> AsyncIterator[None]:
        """Serialize tenant-wide writes."""
        lock = self.get_lock(tenant_id)
        async with lock:
            yield

    def __len__(self) -> int:
        return len(self._locks)


# Singleton instance
_tenant_locks: Optional[TenantLockRegistry] = None


def get_tenant_locks() -> TenantLockRegistry:
    """Get the process wide lock registry."""
    global _tenant_locks
    if _tenant_locks is None:
        _tenant_locks = TenantLockRegistry()
    return _tenant_locks
