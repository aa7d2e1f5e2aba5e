"""Composition root for the mountsim fixture.

This module is the ONLY location that imports both core fixture logic
and concrete adapter implementations. All wiring of dependencies
happens here.

Module Structure:
- Configuration loading via config module
- Archive source selection
- Fixture initialization
- Entry point (``mountsim <archive> [<archive> ...]``) that prepares a
  fixture and prints a JSON summary of the simulated platform
"""

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Sequence
from typing import Any

from mountsim.adapters.archive.directory import DirectoryArchiveSource
from mountsim.adapters.archive.http import HttpArchiveSource
from mountsim.config import Settings, load_settings
from mountsim.core.orchestrator import FixtureOrchestrator
from mountsim.core.ports import ArchiveSourcePort


_LOG_FORMATS = {
    "text": "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
    "json": '{"time": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", "message": "%(message)s"}',
}


def configure_logging(log_level: str, log_format: str) -> None:
    """Send mountsim logs to stderr.

    stdout is reserved for the JSON summary printed by ``main``. httpx
    request logging is kept at WARNING unless DEBUG is requested, so a
    run over many archives does not log one line per download.
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_LOG_FORMATS.get(log_format, _LOG_FORMATS["text"])))

    package_logger = logging.getLogger("mountsim")
    package_logger.handlers[:] = [handler]
    package_logger.setLevel(getattr(logging, log_level, logging.INFO))

    logging.getLogger("httpx").setLevel(
        logging.DEBUG if log_level == "DEBUG" else logging.WARNING
    )


def build_archive_source(settings: Settings) -> ArchiveSourcePort:
    """Instantiate the archive source selected by configuration."""
    if settings.archive_source == "directory":
        return DirectoryArchiveSource(settings.archive_dir)
    return HttpArchiveSource(
        base_url=settings.archive_base_url,
        timeout=settings.fetch_timeout_seconds,
    )


def summarize(orchestrator: FixtureOrchestrator) -> dict[str, Any]:
    """Describe the prepared fixture as a JSON-serializable dictionary."""
    volumes = []
    for volume in orchestrator.volumes:
        accessor = volume.entry.file
        volumes.append(
            {
                "archive": volume.archive_name,
                "fileSystemId": volume.file_system_id,
                "displayName": volume.entry.name,
                "entryId": volume.entry_id,
                "size": accessor.blob.size if accessor is not None else None,
            }
        )
    return {
        "volumes": volumes,
        "state": orchestrator.state,
        "installed": orchestrator.platform.is_installed,
    }


async def bootstrap(
    archive_names: Sequence[str],
    settings: Settings | None = None,
    source: ArchiveSourcePort | None = None,
) -> dict[str, Any]:
    """Load configuration, wire the archive source, and prepare a fixture.

    Steps:
    1. Load configuration from environment
    2. Configure logging
    3. Instantiate the archive source
    4. Run the fixture init protocol

    Returns:
        Summary of the prepared fixture (see ``summarize``).

    Raises:
        ArchiveFetchError: If any archive cannot be acquired.
    """
    if settings is None:
        settings = load_settings()
        configure_logging(settings.log_level, settings.log_format)

    logger = logging.getLogger(__name__)

    if source is None:
        source = build_archive_source(settings)

    orchestrator = FixtureOrchestrator(source, storage_key=settings.storage_key)
    try:
        logger.info(f"Preparing fixture for {len(archive_names)} archive(s)...")
        await orchestrator.init(archive_names)
        return summarize(orchestrator)
    finally:
        await source.close()


def main(argv: Sequence[str] | None = None) -> None:
    """Command-line entry point.

    Exit codes:
        0: Fixture prepared successfully
        1: An archive could not be acquired, or another fatal error
        130: Interrupted by user (SIGINT/KeyboardInterrupt)
    """
    parser = argparse.ArgumentParser(
        prog="mountsim",
        description="Prepare a simulated platform for the given test archives.",
    )
    parser.add_argument("archives", nargs="*", help="Archive names to load")
    args = parser.parse_args(argv)

    logger = logging.getLogger(__name__)
    try:
        summary = asyncio.run(bootstrap(args.archives))
    except KeyboardInterrupt:
        logger.warning("Interrupted by user (SIGINT)")
        sys.exit(130)
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        sys.exit(1)

    print(json.dumps(summary, indent=2))


if __name__ == "__main__":
    main()
