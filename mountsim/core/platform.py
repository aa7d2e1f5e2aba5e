"""In-memory stand-ins for the platform API surfaces.

Three surfaces are simulated:

- StorageStub: key-value persistence (``get`` / ``set``)
- FileSystemStub: file-handle retention (``retain_entry``,
  ``restore_entry``, ``get_display_path``)
- FileSystemProviderStub: filesystem mounting (``mount`` / ``unmount``)

Each stub is built from the full set of volume descriptors so the three
surfaces agree with each other. The Platform container is the object
passed into the application under test in place of the real platform.
"""

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from .dispatch import StubTable
from .models import (
    FileEntry,
    PersistedState,
    PlatformNotConfiguredError,
    VolumeDescriptor,
)

logger = logging.getLogger(__name__)


class StorageStub:
    """Key-value storage that only answers for the fixture's storage key."""

    def __init__(self, state: PersistedState):
        self.state = state
        self._get: StubTable[Any] = StubTable("get")
        self._get.when([state.storage_key], then=state.as_dict())
        self.set_calls: list[Any] = []

    def get(self, keys: Sequence[str], callback: Callable[[Any], Any]) -> None:
        """Hand the persisted snapshot to ``callback``.

        Raises:
            InvalidArgumentError: If ``keys`` is not exactly the storage key.
        """
        self._get.dispatch(keys, callback=callback)

    def set(self, value: Any, callback: Callable[[], Any] | None = None) -> None:
        """Record what the application tried to persist. Does not mutate state."""
        self.set_calls.append(value)
        if callback is not None:
            callback()

    @property
    def get_calls(self) -> StubTable[Any]:
        return self._get

    def reset_calls(self) -> None:
        self._get.reset_calls()
        self.set_calls.clear()


class FileSystemStub:
    """File-handle retention, a bijection over the registered volumes."""

    def __init__(self, volumes: Sequence[VolumeDescriptor]):
        self._retain: StubTable[str] = StubTable("retainEntry")
        self._restore: StubTable[FileEntry] = StubTable("restoreEntry")
        self._display_path: StubTable[str] = StubTable("displayPath")
        for volume in volumes:
            self._retain.when(volume.entry, then=volume.entry_id)
            self._restore.when(volume.entry_id, then=volume.entry)
            self._display_path.when(volume.entry, then=volume.file_system_id)

    def retain_entry(self, entry: FileEntry) -> str:
        """Return the persisted token for a registered entry."""
        return self._retain.lookup(entry)

    def restore_entry(
        self, entry_id: str, callback: Callable[[FileEntry], Any]
    ) -> None:
        """Hand the entry registered under ``entry_id`` to ``callback``."""
        self._restore.dispatch(entry_id, callback=callback)

    def get_display_path(
        self, entry: FileEntry, callback: Callable[[str], Any]
    ) -> None:
        """Hand the file system id of a registered entry to ``callback``."""
        self._display_path.dispatch(entry, callback=callback)

    @property
    def retain_entry_calls(self) -> StubTable[str]:
        return self._retain

    @property
    def restore_entry_calls(self) -> StubTable[FileEntry]:
        return self._restore

    @property
    def get_display_path_calls(self) -> StubTable[str]:
        return self._display_path

    def reset_calls(self) -> None:
        self._retain.reset_calls()
        self._restore.reset_calls()
        self._display_path.reset_calls()


class FileSystemProviderStub:
    """Mount and unmount that only succeed for registered volumes."""

    def __init__(self, volumes: Sequence[VolumeDescriptor]):
        self._mount: StubTable[None] = StubTable("mount")
        self._unmount: StubTable[None] = StubTable("unmount")
        for volume in volumes:
            self._mount.when(
                {
                    "fileSystemId": volume.file_system_id,
                    "displayName": volume.entry.name,
                },
                then=None,
            )
            self._unmount.when({"fileSystemId": volume.file_system_id}, then=None)

    def mount(
        self, options: Mapping[str, str], callback: Callable[[], Any]
    ) -> None:
        """Report success when ``options`` names a registered volume.

        Raises:
            InvalidArgumentError: If fileSystemId and displayName do not
                match a single registered volume.
        """
        self._mount.dispatch(options, callback=callback)

    def unmount(
        self, options: Mapping[str, str], callback: Callable[[], Any]
    ) -> None:
        """Report success when ``options`` names a registered file system id."""
        self._unmount.dispatch(options, callback=callback)

    @property
    def mount_calls(self) -> StubTable[None]:
        return self._mount

    @property
    def unmount_calls(self) -> StubTable[None]:
        return self._unmount

    def reset_calls(self) -> None:
        self._mount.reset_calls()
        self._unmount.reset_calls()


class Platform:
    """The simulated platform handed to the application under test.

    Until ``install`` is called every surface raises
    PlatformNotConfiguredError, so an application running against a
    fixture whose init failed fails loudly instead of talking to no-ops.
    """

    def __init__(self) -> None:
        self._storage: StorageStub | None = None
        self._file_system: FileSystemStub | None = None
        self._file_system_provider: FileSystemProviderStub | None = None

    def install(
        self, volumes: Sequence[VolumeDescriptor], state: PersistedState
    ) -> None:
        """Wire all three stubs from the final descriptor set."""
        self._storage = StorageStub(state)
        self._file_system = FileSystemStub(volumes)
        self._file_system_provider = FileSystemProviderStub(volumes)
        logger.debug(f"Installed platform stubs for {len(volumes)} volume(s)")

    def reset(self) -> None:
        """Uninstall every stub."""
        self._storage = None
        self._file_system = None
        self._file_system_provider = None

    @property
    def is_installed(self) -> bool:
        return self._storage is not None

    @property
    def storage(self) -> StorageStub:
        if self._storage is None:
            raise PlatformNotConfiguredError("storage")
        return self._storage

    @property
    def file_system(self) -> FileSystemStub:
        if self._file_system is None:
            raise PlatformNotConfiguredError("fileSystem")
        return self._file_system

    @property
    def file_system_provider(self) -> FileSystemProviderStub:
        if self._file_system_provider is None:
            raise PlatformNotConfiguredError("fileSystemProvider")
        return self._file_system_provider

    def reset_calls(self) -> None:
        """Forget recorded calls, keeping the wiring.

        Used to simulate an application restart against the same volumes.
        """
        self.storage.reset_calls()
        self.file_system.reset_calls()
        self.file_system_provider.reset_calls()
