"""
Per-user mutual exclusion for progression-mutating operations.

Completing a mission, spending an attribute point and the login-time daily
reset all read a user's state, compute a new snapshot and write it back. The
registry hands out one ``asyncio.Lock`` per user id so that these
read-compute-write sequences never interleave within a process. Across
processes the row lock taken by ``UserDBHandler.get_user_for_update`` does
the same job on PostgreSQL.
"""

from __future__ import annotations

import asyncio
import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from app.utils.logger import setup_logger

logger = setup_logger("user_locks")


class UserLockRegistry:
    def __init__(self):
        self._locks: dict[uuid.UUID, asyncio.Lock] = {}
        self._holders: dict[uuid.UUID, int] = {}

    @asynccontextmanager
    async def hold(self, user_id: uuid.UUID) -> AsyncIterator[None]:
        """Serialize the enclosed block against other holders for ``user_id``."""
        lock = self._locks.get(user_id)
        if lock is None:
            lock = self._locks[user_id] = asyncio.Lock()
        self._holders[user_id] = self._holders.get(user_id, 0) + 1

        try:
            if lock.locked():
                logger.debug(f"Waiting for progression lock of user {user_id}")
            async with lock:
                yield
        finally:
            self._holders[user_id] -= 1
            # Idle locks are dropped once their last holder leaves
            if self._holders[user_id] == 0:
                del self._holders[user_id]
                del self._locks[user_id]

    def active_users(self) -> int:
        return len(self._locks)


user_locks = UserLockRegistry()
