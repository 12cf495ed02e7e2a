"""
Pending deletion registry.

Holds unconfirmed delete requests in memory, keyed by (channel, thread).
They do not persist across server restarts.

Handling of one key must happen under `lock(key)` so that reading,
deciding and writing a pending entry is atomic per thread. Different keys
never block each other.
"""

import asyncio
import logging
import weakref
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

from decision_bot.models.decision import PendingDeletion

logger = logging.getLogger(__name__)

PendingKey = Tuple[str, str]


class PendingDeletionExistsError(Exception):
    """Raised when opening a confirmation for a key that already has one."""

    pass


class PendingDeletionRegistry:
    """At most one PendingDeletion per (channel, thread) key."""

    def __init__(self, ttl_seconds: int = 0):
        """
        Args:
            ttl_seconds: Abandoned confirmations expire after this many
                seconds; 0 keeps them until confirmed or cancelled
        """
        self.ttl_seconds = ttl_seconds
        self._entries: Dict[PendingKey, PendingDeletion] = {}
        self._locks: "weakref.WeakValueDictionary[PendingKey, asyncio.Lock]" = (
            weakref.WeakValueDictionary()
        )

    def lock(self, key: PendingKey) -> asyncio.Lock:
        """Per-key lock; released locks are garbage collected."""
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        return lock

    def get(self, key: PendingKey) -> Optional[PendingDeletion]:
        """Pending deletion for key, discarding it first if it has expired."""
        pending = self._entries.get(key)
        if pending is not None and self._is_expired(pending):
            logger.info(
                f"Pending deletion of {pending.decision_id} for {key} expired, discarding"
            )
            del self._entries[key]
            return None
        return pending

    def open(self, key: PendingKey, pending: PendingDeletion) -> None:
        """
        Register a pending deletion.

        Raises:
            PendingDeletionExistsError: If key already awaits confirmation
        """
        if self.get(key) is not None:
            raise PendingDeletionExistsError(
                f"A deletion is already awaiting confirmation in {key}"
            )
        self._entries[key] = pending
        logger.info(f"Awaiting delete confirmation for {pending.decision_id} in {key}")

    def clear(self, key: PendingKey) -> Optional[PendingDeletion]:
        """Remove and return the pending deletion for key, if any."""
        pending = self._entries.pop(key, None)
        if pending is not None:
            logger.info(f"Cleared pending deletion of {pending.decision_id} in {key}")
        return pending

    def items(self) -> List[Tuple[PendingKey, PendingDeletion]]:
        """Snapshot of all live pending deletions."""
        for key in list(self._entries):
            self.get(key)
        return list(self._entries.items())

    def __len__(self) -> int:
        return len(self._entries)

    def _is_expired(self, pending: PendingDeletion) -> bool:
        if self.ttl_seconds <= 0:
            return False
        age = (datetime.now(timezone.utc) - pending.created_at).total_seconds()
        return age > self.ttl_seconds
