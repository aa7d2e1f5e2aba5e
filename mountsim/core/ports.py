"""Port interfaces for the mountsim fixture.

These abstract base classes define the boundaries between the core
fixture logic and external adapters. Implementations live in the
adapters/ package.

Port Interface Categories:

1. **Driven Ports** (core calls out to adapters)
   - ArchiveSourcePort: Acquire archive payloads by name

2. **Driving Ports** (test code calls into core)
   - FixturePort: Build the simulated platform for a set of archives
"""

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Mapping, Sequence
from typing import Any

from .models import ArchiveBlob, VolumeDescriptor
from .platform import Platform


# ============================================================================
# DRIVEN PORTS (Core calls out to adapters)
# ============================================================================


class ArchiveSourcePort(ABC):
    """Port for acquiring archive payloads.

    Adapters implementing this port fetch the raw bytes of a named archive
    from wherever test archives live (an HTTP server, a local directory).

    Implementations must:
    - Make exactly one attempt per call (no retries)
    - Raise ArchiveFetchError carrying the archive name on any failure
    - Be safe to call concurrently for different archives
    """

    @abstractmethod
    async def fetch(self, archive_name: str) -> ArchiveBlob:
        """Acquire the payload of one archive.

        Args:
            archive_name: Non-empty name of the archive under the
                source's base location.

        Returns:
            ArchiveBlob with the archive's raw bytes.

        Raises:
            ValueError: If archive_name is empty.
            ArchiveFetchError: If the archive could not be acquired.
        """

    async def close(self) -> None:
        """Release any resources held by the source."""


# ============================================================================
# DRIVING PORTS (Test code calls into core)
# ============================================================================


class FixturePort(ABC):
    """Port for preparing the simulated platform.

    Called by test setup before the application under test is started.
    """

    @abstractmethod
    def init(self, archive_names: Sequence[str]) -> Awaitable[Platform]:
        """Start a new run for ``archive_names``.

        Descriptors and the persisted snapshot are complete when this
        returns; the returned awaitable finishes acquisition and installs
        the platform stubs.

        Args:
            archive_names: Archive names, possibly empty, duplicates allowed.

        Returns:
            Awaitable resolving to the configured Platform.

        Raises:
            ArchiveFetchError: (from the awaitable) If any archive fails.
        """

    @property
    @abstractmethod
    def volumes(self) -> tuple[VolumeDescriptor, ...]:
        """Descriptors of the current run, in input order."""

    @property
    @abstractmethod
    def state(self) -> Mapping[str, Any]:
        """Persisted-state snapshot of the current run."""
