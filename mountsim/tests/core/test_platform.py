"""Unit tests for the simulated platform API surfaces."""

import pytest

from mountsim.core.models import (
    FileEntry,
    InvalidArgumentError,
    PersistedState,
    PlatformNotConfiguredError,
    VolumeDescriptor,
)
from mountsim.core.platform import (
    FileSystemProviderStub,
    FileSystemStub,
    Platform,
    StorageStub,
)

# ============================================================================
# Test Fixtures
# ============================================================================


@pytest.fixture
def volumes() -> list[VolumeDescriptor]:
    """Create descriptors for three archives."""
    return [
        VolumeDescriptor.for_archive(name)
        for name in ("small.rar", "multi.part1.rar", "big.zip")
    ]


@pytest.fixture
def state(volumes: list[VolumeDescriptor]) -> PersistedState:
    """Create the persisted snapshot for the volumes."""
    snapshot = PersistedState()
    for volume in volumes:
        snapshot.add(volume)
    return snapshot


@pytest.fixture
def platform(volumes: list[VolumeDescriptor], state: PersistedState) -> Platform:
    """Create a platform with every stub installed."""
    result = Platform()
    result.install(volumes, state)
    return result


# ============================================================================
# Storage
# ============================================================================


class TestStorageStub:
    """Tests for the key-value storage stub."""

    def test_get_with_storage_key_returns_snapshot(self, state: PersistedState) -> None:
        storage = StorageStub(state)
        received = []

        storage.get(["state"], received.append)

        assert received == [state.as_dict()]
        assert received[0]["state"]["small.rar_id"] == {"entryId": "small.rar_entry"}

    def test_get_accepts_tuple_of_keys(self, state: PersistedState) -> None:
        storage = StorageStub(state)
        received = []

        storage.get(("state",), received.append)

        assert received == [state.as_dict()]

    @pytest.mark.parametrize(
        "keys",
        ["state", ["other"], ["state", "other"], [], None, {"state": None}],
    )
    def test_get_with_other_key_shape_raises(self, state: PersistedState, keys) -> None:
        storage = StorageStub(state)

        with pytest.raises(InvalidArgumentError, match="Invalid argument for get."):
            storage.get(keys, lambda _: None)

    def test_set_is_recorded_and_does_not_mutate(self, state: PersistedState) -> None:
        storage = StorageStub(state)
        before = {k: dict(v) for k, v in state.as_dict().items()}
        done = []

        storage.set({"state": {}}, lambda: done.append(True))
        storage.set({"state": {"x": {"entryId": "y"}}})

        assert storage.set_calls == [{"state": {}}, {"state": {"x": {"entryId": "y"}}}]
        assert done == [True]
        assert state.as_dict() == before

    def test_get_calls_are_recorded(self, state: PersistedState) -> None:
        storage = StorageStub(state)
        storage.get(["state"], lambda _: None)
        with pytest.raises(InvalidArgumentError):
            storage.get(["nope"], lambda _: None)

        assert storage.get_calls.call_count == 2
        assert storage.get_calls.called_with(["state"])
        assert [call.matched for call in storage.get_calls.calls] == [True, False]


# ============================================================================
# File handles
# ============================================================================


class TestFileSystemStub:
    """Tests for file-handle retention and restoration."""

    def test_retain_returns_entry_id(self, volumes: list[VolumeDescriptor]) -> None:
        file_system = FileSystemStub(volumes)

        for volume in volumes:
            assert file_system.retain_entry(volume.entry) == volume.entry_id

    def test_restore_returns_identical_entry(self, volumes: list[VolumeDescriptor]) -> None:
        file_system = FileSystemStub(volumes)

        for volume in volumes:
            received = []
            file_system.restore_entry(volume.entry_id, received.append)
            assert len(received) == 1
            assert received[0] is volume.entry

    def test_display_path_returns_file_system_id(self, volumes: list[VolumeDescriptor]) -> None:
        file_system = FileSystemStub(volumes)

        for volume in volumes:
            received = []
            file_system.get_display_path(volume.entry, received.append)
            assert received == [volume.file_system_id]

    def test_round_trips(self, volumes: list[VolumeDescriptor]) -> None:
        file_system = FileSystemStub(volumes)

        for volume in volumes:
            restored = []
            file_system.restore_entry(volume.entry_id, restored.append)
            assert file_system.retain_entry(restored[0]) == volume.entry_id

            token = file_system.retain_entry(volume.entry)
            file_system.restore_entry(token, restored.append)
            assert restored[1] is volume.entry

    def test_lookalike_entry_is_rejected(self, volumes: list[VolumeDescriptor]) -> None:
        file_system = FileSystemStub(volumes)
        lookalike = FileEntry(name=volumes[0].entry.name)

        with pytest.raises(InvalidArgumentError, match="retainEntry"):
            file_system.retain_entry(lookalike)
        with pytest.raises(InvalidArgumentError, match="displayPath"):
            file_system.get_display_path(lookalike, lambda _: None)

    def test_unknown_entry_id_is_rejected(self, volumes: list[VolumeDescriptor]) -> None:
        file_system = FileSystemStub(volumes)

        with pytest.raises(InvalidArgumentError, match="restoreEntry"):
            file_system.restore_entry("missing.rar_entry", lambda _: None)

    def test_file_system_id_is_not_an_entry_id(self, volumes: list[VolumeDescriptor]) -> None:
        file_system = FileSystemStub(volumes)

        with pytest.raises(InvalidArgumentError):
            file_system.restore_entry(volumes[0].file_system_id, lambda _: None)

    def test_calls_are_recorded(self, volumes: list[VolumeDescriptor]) -> None:
        file_system = FileSystemStub(volumes)
        file_system.retain_entry(volumes[0].entry)
        file_system.restore_entry(volumes[1].entry_id, lambda _: None)

        assert file_system.retain_entry_calls.called_with(volumes[0].entry)
        assert file_system.restore_entry_calls.call_count == 1
        assert file_system.get_display_path_calls.call_count == 0


# ============================================================================
# Mounting
# ============================================================================


class TestFileSystemProviderStub:
    """Tests for mount and unmount."""

    def test_mount_registered_volume_succeeds(self, volumes: list[VolumeDescriptor]) -> None:
        provider = FileSystemProviderStub(volumes)
        calls = []

        provider.mount(
            {"fileSystemId": "small.rar_id", "displayName": "small.rar_name"},
            lambda *args: calls.append(args),
        )

        assert calls == [()]

    def test_mount_with_wrong_display_name_raises(self, volumes: list[VolumeDescriptor]) -> None:
        provider = FileSystemProviderStub(volumes)

        with pytest.raises(InvalidArgumentError, match="Invalid argument for mount."):
            provider.mount(
                {"fileSystemId": "small.rar_id", "displayName": "wrong"}, lambda: None
            )

    def test_mount_with_pair_from_different_volumes_raises(
        self, volumes: list[VolumeDescriptor]
    ) -> None:
        provider = FileSystemProviderStub(volumes)

        with pytest.raises(InvalidArgumentError):
            provider.mount(
                {
                    "fileSystemId": volumes[0].file_system_id,
                    "displayName": volumes[1].entry.name,
                },
                lambda: None,
            )

    def test_mount_with_missing_or_extra_keys_raises(
        self, volumes: list[VolumeDescriptor]
    ) -> None:
        provider = FileSystemProviderStub(volumes)

        with pytest.raises(InvalidArgumentError):
            provider.mount({"fileSystemId": "small.rar_id"}, lambda: None)
        with pytest.raises(InvalidArgumentError):
            provider.mount(
                {
                    "fileSystemId": "small.rar_id",
                    "displayName": "small.rar_name",
                    "writable": True,
                },
                lambda: None,
            )

    def test_unmount_registered_volume_succeeds(self, volumes: list[VolumeDescriptor]) -> None:
        provider = FileSystemProviderStub(volumes)
        calls = []

        for volume in volumes:
            provider.unmount({"fileSystemId": volume.file_system_id}, lambda: calls.append(1))

        assert len(calls) == len(volumes)

    def test_unmount_unknown_volume_raises(self, volumes: list[VolumeDescriptor]) -> None:
        provider = FileSystemProviderStub(volumes)

        with pytest.raises(InvalidArgumentError, match="Invalid argument for unmount."):
            provider.unmount({"fileSystemId": "missing.rar_id"}, lambda: None)

    def test_calls_are_recorded_with_arguments(self, volumes: list[VolumeDescriptor]) -> None:
        provider = FileSystemProviderStub(volumes)
        options = {"fileSystemId": "big.zip_id", "displayName": "big.zip_name"}

        provider.mount(options, lambda: None)
        provider.mount(options, lambda: None)
        provider.unmount({"fileSystemId": "big.zip_id"}, lambda: None)

        assert provider.mount_calls.call_count == 2
        assert provider.mount_calls.called_with(
            {"displayName": "big.zip_name", "fileSystemId": "big.zip_id"}
        )
        assert provider.unmount_calls.call_count == 1


# ============================================================================
# Platform container
# ============================================================================


class TestPlatform:
    """Tests for stub installation and the unconfigured state."""

    def test_uninstalled_platform_fails_loudly(self) -> None:
        platform = Platform()

        assert platform.is_installed is False
        with pytest.raises(PlatformNotConfiguredError):
            platform.storage
        with pytest.raises(PlatformNotConfiguredError):
            platform.file_system
        with pytest.raises(PlatformNotConfiguredError):
            platform.file_system_provider

    def test_installed_surfaces_agree(
        self, platform: Platform, volumes: list[VolumeDescriptor]
    ) -> None:
        stored = []
        platform.storage.get(["state"], stored.append)

        for file_system_id, record in stored[0]["state"].items():
            restored = []
            platform.file_system.restore_entry(record["entryId"], restored.append)
            paths = []
            platform.file_system.get_display_path(restored[0], paths.append)
            assert paths == [file_system_id]

            mounted = []
            platform.file_system_provider.mount(
                {"fileSystemId": file_system_id, "displayName": restored[0].name},
                lambda: mounted.append(True),
            )
            assert mounted == [True]

    def test_reset_uninstalls(self, platform: Platform) -> None:
        platform.reset()

        assert platform.is_installed is False
        with pytest.raises(PlatformNotConfiguredError):
            platform.file_system_provider.mount({}, lambda: None)

    def test_reset_calls_keeps_wiring(
        self, platform: Platform, volumes: list[VolumeDescriptor]
    ) -> None:
        volume = volumes[0]
        options = {"fileSystemId": volume.file_system_id, "displayName": volume.entry.name}
        platform.file_system_provider.mount(options, lambda: None)
        platform.storage.set({"state": {}})

        platform.reset_calls()

        assert platform.file_system_provider.mount_calls.call_count == 0
        assert platform.storage.set_calls == []
        platform.file_system_provider.mount(options, lambda: None)
        assert platform.file_system_provider.mount_calls.call_count == 1
