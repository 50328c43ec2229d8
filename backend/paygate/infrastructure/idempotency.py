"""Idempotency Recorder — process-wide set of seen idempotency keys with expiry.

Invariants:
    - seen_before(key) looks up and marks in one step under an asyncio.Lock:
      of two concurrent calls with the same fresh key exactly one returns False
    - A key whose mark is older than ttl_seconds is treated as fresh and re-marked
    - Expired keys are pruned lazily on each call, oldest first; keys are held in
      mark order, which is also expiry order, so pruning stops at the first live key

Design Decisions:
    - In-memory only: a single-process uvicorn worker shares one recorder;
      multi-worker deployments get per-worker replay protection
    - Created in the lifespan and injected (api/deps.py), never imported as a global
    - clock is injectable (monotonic seconds) so expiry is testable without sleeping
"""

import asyncio
import time
from collections import OrderedDict
from collections.abc import Callable


class IdempotencyRecorder:
    def __init__(
        self,
        ttl_seconds: float = 3600,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._seen: OrderedDict[str, float] = OrderedDict()
        self._lock = asyncio.Lock()

    async def seen_before(self, key: str) -> bool:
        """True when key was marked within the TTL; otherwise marks it and returns False."""
        async with self._lock:
            now = self._clock()
            self._prune(now)
            if key in self._seen:
                return True
            self._seen[key] = now
            return False

    def __len__(self) -> int:
        return len(self._seen)

    def _prune(self, now: float) -> None:
        while self._seen:
            oldest = next(iter(self._seen.values()))
            if now - oldest < self.ttl_seconds:
                return
            self._seen.popitem(last=False)
