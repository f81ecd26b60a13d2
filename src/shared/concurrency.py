"""Per-entity serialization and detached background work.

Protean command handlers run synchronously, so a command never interleaves
with another one on the event loop. Operations that await something between
loading an aggregate and saving it (catalogue and price lookups) hold the
entity's lock for the whole operation instead, and every other mutation of
that entity waits for it. Locks exist only while someone holds or waits for
them, so reads and finished operations leave nothing behind.

Work that must never delay or fail the caller, such as the recommendation
refresh after checkout, runs as a tracked detached task.
"""

import asyncio
from contextlib import asynccontextmanager

import structlog
from protean.utils.globals import current_domain

logger = structlog.get_logger(__name__)


class KeyedLocks:
    """One ``asyncio.Lock`` per entity identity, created on demand."""

    def __init__(self, name: str):
        self.name = name
        self._locks: dict[str, asyncio.Lock] = {}
        self._users: dict[str, int] = {}

    def __len__(self) -> int:
        return len(self._locks)

    def __contains__(self, key) -> bool:
        return str(key) in self._locks

    @asynccontextmanager
    async def hold(self, key):
        key = str(key)
        lock = self._locks.setdefault(key, asyncio.Lock())
        self._users[key] = self._users.get(key, 0) + 1
        try:
            async with lock:
                yield
        finally:
            remaining = self._users.get(key, 0) - 1
            if remaining > 0:
                self._users[key] = remaining
            else:
                self._users.pop(key, None)
                self._locks.pop(key, None)

    async def process(self, key, command):
        """Process ``command`` once every earlier operation on ``key`` is done."""
        async with self.hold(key):
            return current_domain.process(command, asynchronous=False)

    def reset(self) -> None:
        self._locks.clear()
        self._users.clear()


class BackgroundTasks:
    """Detached tasks whose outcome is logged and never returned to anyone."""

    def __init__(self, name: str):
        self.name = name
        self._tasks: set[asyncio.Task] = set()

    def __len__(self) -> int:
        return len(self._tasks)

    def spawn(self, coro, task_type: str) -> asyncio.Task:
        task = asyncio.create_task(coro, name=f"{self.name}:{task_type}")
        self._tasks.add(task)
        task.add_done_callback(self._on_task_done)
        logger.debug("background_task_started", domain=self.name, task_type=task_type)
        return task

    def _on_task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            logger.debug("background_task_cancelled", domain=self.name, task_name=task.get_name())
            return
        exc = task.exception()
        if exc is not None:
            logger.error(
                "background_task_failed",
                domain=self.name,
                task_name=task.get_name(),
                error=str(exc),
                exc_info=exc,
            )

    async def drain(self) -> None:
        """Wait until every detached task has finished."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def reset(self) -> None:
        """Cancel in-flight tasks and forget them."""
        for task in list(self._tasks):
            if not task.done() and not task.get_loop().is_closed():
                task.cancel()
        self._tasks.clear()
