"""Per-user mutation locks."""

import asyncio
import weakref
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager


class UserLocks:
    """Registry of one asyncio.Lock per user id.

    Locks are held weakly, so a user's lock disappears once no request
    is holding or waiting on it.
    """

    def __init__(self):
        self._locks: weakref.WeakValueDictionary[str, asyncio.Lock] = weakref.WeakValueDictionary()

    def lock_for(self, user_id: str) -> asyncio.Lock:
        lock = self._locks.get(user_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[user_id] = lock
        return lock

    @asynccontextmanager
    async def hold(self, user_id: str) -> AsyncIterator[None]:
        """Serialize the enclosed block against other holders for ``user_id``."""
        lock = self.lock_for(user_id)
        async with lock:
            yield

    def __len__(self) -> int:
        return len(self._locks)


# Process-wide registry shared by every QueueService
user_locks = UserLocks()
