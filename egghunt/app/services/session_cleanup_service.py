"""
Session Cleanup Service

Background sweep that deletes expired sessions at a fixed interval,
independent of request handling.
"""

import asyncio
import logging
from datetime import timedelta
from typing import AsyncContextManager, Callable, Optional

from egghunt.app.services.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)

UnitOfWorkFactory = Callable[[], AsyncContextManager[UnitOfWork]]


class SessionCleanupService:
    """
    Periodically asks the session store to delete expired sessions.

    Business Rules:
    - Disabled service returns immediately, never waits or sweeps
    - First sweep runs after initial_delay, then every cleanup_interval
    - A failed sweep is logged and retried on the next tick only
    - stop() wakes any pending wait at once and never interrupts a sweep
    - Every sweep opens its own unit of work
    """

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        cleanup_interval: timedelta,
        initial_delay: timedelta,
        enabled: bool = True,
    ):
        """
        Args:
            uow_factory: Returns an async context manager yielding a UnitOfWork
            cleanup_interval: Wait between sweeps, must be positive
            initial_delay: Wait before the first sweep, must not be negative
            enabled: When False the service does nothing at all
        """
        if uow_factory is None:
            raise ValueError("uow_factory is required")
        if cleanup_interval <= timedelta(0):
            raise ValueError("cleanup_interval must be positive")
        if initial_delay < timedelta(0):
            raise ValueError("initial_delay must not be negative")

        self._uow_factory = uow_factory
        self._cleanup_interval = cleanup_interval
        self._initial_delay = initial_delay
        self._enabled = enabled

        self._stopping = asyncio.Event()
        self._task: Optional[asyncio.Task] = None

        self.sweep_count = 0
        self.failed_sweep_count = 0
        self.last_deleted_count: Optional[int] = None

    @property
    def cleanup_interval(self) -> timedelta:
        return self._cleanup_interval

    @property
    def initial_delay(self) -> timedelta:
        return self._initial_delay

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> asyncio.Task:
        """Schedule run() on the current event loop"""
        if self.is_running:
            return self._task
        self._stopping.clear()
        self._task = asyncio.create_task(self.run(), name="session-cleanup")
        return self._task

    async def stop(self) -> None:
        """Request a stop and wait for the loop to exit"""
        self._stopping.set()
        if self._task is not None:
            await self._task
            self._task = None

    async def run(self) -> None:
        """Main loop"""
        if not self._enabled:
            logger.info("Session cleanup service is disabled")
            return

        logger.info(
            f"Session cleanup service started. Interval: {self._cleanup_interval}, "
            f"initial delay: {self._initial_delay}"
        )

        # Let the host application finish starting up
        await self._wait(self._initial_delay)

        while not self._stopping.is_set():
            await self._sweep()
            if await self._wait(self._cleanup_interval):
                break

        logger.info("Session cleanup service stopped")

    async def cleanup_expired_sessions(self) -> int:
        """
        Run one sweep.

        Returns:
            Number of deleted sessions

        Raises:
            Whatever the session store raises
        """
        logger.debug("Deleting expired sessions")
        async with self._uow_factory() as uow:
            deleted = await uow.sessions.delete_expired()
            await uow.commit()

        if deleted > 0:
            logger.info(f"Session cleanup finished. {deleted} expired session(s) deleted")
        else:
            logger.debug("No expired sessions found")
        return deleted

    async def _sweep(self) -> None:
        self.sweep_count += 1
        try:
            self.last_deleted_count = await self.cleanup_expired_sessions()
        except Exception:
            self.failed_sweep_count += 1
            logger.exception(
                f"Session cleanup failed. Next attempt in {self._cleanup_interval}"
            )

    async def _wait(self, delay: timedelta) -> bool:
        """Sleep for delay. Returns True if a stop was requested meanwhile."""
        try:
            await asyncio.wait_for(self._stopping.wait(), timeout=delay.total_seconds())
        except asyncio.TimeoutError:
            return False
        return True
