"""Core fixture logic for mountsim.

This package contains zero external dependencies: the volume model,
the platform stubs and the init protocol. Archive acquisition is
handled by the adapters package.
"""

from .dispatch import StubCall, StubTable
from .models import (
    ArchiveBlob,
    ArchiveFetchError,
    ContentAccessor,
    FileEntry,
    InvalidArgumentError,
    MountSimError,
    PersistedState,
    PlatformNotConfiguredError,
    RunState,
    VolumeDescriptor,
)
from .orchestrator import FixtureOrchestrator
from .platform import (
    FileSystemProviderStub,
    FileSystemStub,
    Platform,
    StorageStub,
)

__all__ = [
    "ArchiveBlob",
    "ArchiveFetchError",
    "ContentAccessor",
    "FileEntry",
    "FileSystemProviderStub",
    "FileSystemStub",
    "FixtureOrchestrator",
    "InvalidArgumentError",
    "MountSimError",
    "PersistedState",
    "Platform",
    "PlatformNotConfiguredError",
    "RunState",
    "StorageStub",
    "StubCall",
    "StubTable",
    "VolumeDescriptor",
]
