"""Fixture orchestration for the mountsim platform simulation.

This module implements the init protocol that prepares the simulated
platform for a test run:

1. Reset the run state and uninstall previous stubs
2. Synthesize one volume descriptor per archive name (synchronous)
3. Acquire every archive concurrently and bind its content
4. Install the platform stubs once every acquisition succeeded
"""

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Coroutine, Mapping, Sequence
from typing import Any

from .models import DEFAULT_STORAGE_KEY, PersistedState, RunState, VolumeDescriptor
from .platform import Platform
from .ports import ArchiveSourcePort, FixturePort

logger = logging.getLogger(__name__)


class FixtureOrchestrator(FixturePort):
    """Owns the simulated world for one test run.

    This service orchestrates:
    - Descriptor and persisted-state synthesis
    - Concurrent archive acquisition through an ArchiveSourcePort
    - Installation of mutually consistent platform stubs
    """

    def __init__(
        self,
        source: ArchiveSourcePort,
        storage_key: str = DEFAULT_STORAGE_KEY,
        platform: Platform | None = None,
    ):
        self.source = source
        self.platform = platform if platform is not None else Platform()
        self._run = RunState(storage_key=storage_key)
        self._pending: Coroutine[Any, Any, Platform] | None = None

    @property
    def storage_key(self) -> str:
        return self._run.storage_key

    @property
    def volumes(self) -> tuple[VolumeDescriptor, ...]:
        return tuple(self._run.volumes)

    @property
    def persisted_state(self) -> PersistedState:
        return self._run.state

    @property
    def state(self) -> Mapping[str, Any]:
        return self._run.state.as_dict()

    def find_volume(self, file_system_id: str) -> VolumeDescriptor | None:
        """Return the descriptor registered under ``file_system_id``.

        With duplicate archive names the most recently registered
        descriptor wins, matching what the stubs answer.
        """
        for volume in reversed(self._run.volumes):
            if volume.file_system_id == file_system_id:
                return volume
        return None

    def init(self, archive_names: Sequence[str]) -> Awaitable[Platform]:
        """Start a new run for ``archive_names``.

        Descriptors and the persisted snapshot are built before this
        returns, so ``volumes`` can be enumerated without awaiting.
        Await the result to acquire the archives and install the stubs.
        A previous init that was never started is discarded.

        Raises:
            TypeError: If archive_names is a single string.
            ValueError: If any archive name is empty.
            RuntimeError: If a previous init is still being awaited.
        """
        if self._pending is not None:
            pending_state = inspect.getcoroutinestate(self._pending)
            if pending_state in (inspect.CORO_RUNNING, inspect.CORO_SUSPENDED):
                raise RuntimeError("init is already in progress")
        if isinstance(archive_names, str):
            raise TypeError("archive_names must be a sequence of names, not a string")

        names = list(archive_names)
        for name in names:
            if not isinstance(name, str) or not name:
                raise ValueError(f"Invalid archive name: {name!r}")

        if self._pending is not None:
            self._pending.close()
        self.platform.reset()
        self._run.reset()
        for name in names:
            self._run.register(name)

        logger.info(f"Prepared {len(names)} volume(s): {names}")
        self._pending = self._acquire_and_install(tuple(self._run.volumes))
        return self._pending

    async def _acquire_and_install(
        self, volumes: tuple[VolumeDescriptor, ...]
    ) -> Platform:
        # Siblings of a failed fetch keep running and still bind their content
        await asyncio.gather(*(self._acquire(volume) for volume in volumes))

        self.platform.install(volumes, self._run.state)
        logger.info(f"Fixture ready with {len(volumes)} volume(s)")
        return self.platform

    async def _acquire(self, volume: VolumeDescriptor) -> None:
        """Fetch one archive and bind it onto its descriptor's entry."""
        try:
            blob = await self.source.fetch(volume.archive_name)
        except Exception as e:
            logger.error(
                f"Failed to acquire archive {volume.archive_name}: {e}",
                exc_info=True,
            )
            raise

        volume.entry.bind(blob)
        logger.debug(f"Bound {blob.size} bytes to {volume.file_system_id}")
