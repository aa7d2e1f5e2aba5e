"""Domain models for the mountsim fixture.

All models in this module use only Python standard library types,
ensuring zero external dependencies in the core domain.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

DEFAULT_STORAGE_KEY = "state"

# Suffixes appended to the archive name. Existing fixtures hard-code these.
FILE_SYSTEM_ID_SUFFIX = "_id"
ENTRY_NAME_SUFFIX = "_name"
ENTRY_ID_SUFFIX = "_entry"


class MountSimError(Exception):
    """Base class for fixture errors."""


class InvalidArgumentError(MountSimError):
    """A platform stub was called with arguments it was not wired for.

    Signals a defect in the application under test, not in the fixture.
    """

    def __init__(self, method: str):
        self.method = method
        super().__init__(f"Invalid argument for {method}.")


class ArchiveFetchError(MountSimError):
    """An archive payload could not be acquired."""

    def __init__(
        self,
        status_text: str,
        archive_name: str,
        status_code: int | None = None,
    ):
        self.status_text = status_text
        self.archive_name = archive_name
        self.status_code = status_code
        super().__init__(f"{status_text}: {archive_name}")


class PlatformNotConfiguredError(MountSimError):
    """A platform API surface was used before its stub was installed."""

    def __init__(self, api: str):
        self.api = api
        super().__init__(
            f"Platform API '{api}' is not configured; "
            "await FixtureOrchestrator.init() before using it"
        )


@dataclass(frozen=True)
class ArchiveBlob:
    """Raw archive payload as returned by an archive source."""

    name: str
    data: bytes
    content_type: str = "application/octet-stream"

    @property
    def size(self) -> int:
        return len(self.data)


class ContentAccessor:
    """Callback-style accessor bound onto ``FileEntry.file``.

    Calling it with a callback hands the callback the archive blob that
    was fetched for the entry. Nothing is re-fetched.
    """

    def __init__(self, blob: ArchiveBlob):
        self.blob = blob
        self.call_count = 0

    def __call__(self, callback: Callable[[ArchiveBlob], Any]) -> None:
        self.call_count += 1
        callback(self.blob)

    def __repr__(self) -> str:
        return f"ContentAccessor({self.blob.name!r}, {self.blob.size} bytes)"


@dataclass(eq=False)
class FileEntry:
    """Synthetic file handle standing in for a platform file entry.

    Entries compare and hash by identity: stubs only recognize the exact
    handle object that was registered with them.
    """

    name: str
    file: ContentAccessor | None = None

    def bind(self, blob: ArchiveBlob) -> None:
        """Bind the content accessor for the fetched blob."""
        if self.file is not None:
            raise RuntimeError(f"Entry {self.name!r} already has content bound")
        self.file = ContentAccessor(blob)


@dataclass
class VolumeDescriptor:
    """One simulated volume: its three identifiers and its file handle.

    Note: mutable on purpose; ``entry.file`` is bound once the archive
    blob arrives.
    """

    archive_name: str
    file_system_id: str
    entry: FileEntry
    entry_id: str

    @classmethod
    def for_archive(cls, archive_name: str) -> "VolumeDescriptor":
        """Derive a descriptor from the archive name alone."""
        if not archive_name:
            raise ValueError("archive_name must be a non-empty string")
        return cls(
            archive_name=archive_name,
            file_system_id=archive_name + FILE_SYSTEM_ID_SUFFIX,
            entry=FileEntry(name=archive_name + ENTRY_NAME_SUFFIX),
            entry_id=archive_name + ENTRY_ID_SUFFIX,
        )

    @property
    def display_name(self) -> str:
        return self.entry.name

    @property
    def is_loaded(self) -> bool:
        return self.entry.file is not None


class PersistedState:
    """What the platform storage would hold from a previous session.

    Shape: ``{storage_key: {file_system_id: {"entryId": entry_id}}}``.
    """

    def __init__(self, storage_key: str = DEFAULT_STORAGE_KEY):
        if not storage_key:
            raise ValueError("storage_key must be a non-empty string")
        self.storage_key = storage_key
        self._data: dict[str, dict[str, dict[str, str]]] = {storage_key: {}}

    def add(self, volume: VolumeDescriptor) -> None:
        self._data[self.storage_key][volume.file_system_id] = {
            "entryId": volume.entry_id
        }

    @property
    def volumes(self) -> Mapping[str, dict[str, str]]:
        """Per-volume records keyed by file system id (read-only view)."""
        return MappingProxyType(self._data[self.storage_key])

    def as_dict(self) -> dict[str, dict[str, dict[str, str]]]:
        """The snapshot object handed to storage ``get`` callbacks."""
        return self._data

    def __len__(self) -> int:
        return len(self._data[self.storage_key])


@dataclass
class RunState:
    """Orchestrator bookkeeping for the current run."""

    storage_key: str = DEFAULT_STORAGE_KEY
    volumes: list[VolumeDescriptor] = field(default_factory=list)
    state: PersistedState = field(init=False)

    def __post_init__(self) -> None:
        self.state = PersistedState(self.storage_key)

    def reset(self) -> None:
        """Drop every descriptor and start an empty snapshot."""
        self.volumes = []
        self.state = PersistedState(self.storage_key)

    def register(self, archive_name: str) -> VolumeDescriptor:
        """Build the descriptor for ``archive_name`` and record it."""
        volume = VolumeDescriptor.for_archive(archive_name)
        self.volumes.append(volume)
        self.state.add(volume)
        return volume
