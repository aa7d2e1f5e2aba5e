"""HTTP archive source adapter.

Implements ArchiveSourcePort by downloading archives from a static file
server, typically the one the test runner serves the archives directory
from.
"""

import logging
from typing import Any

import httpx

from mountsim.core.models import ArchiveBlob, ArchiveFetchError
from mountsim.core.ports import ArchiveSourcePort

logger = logging.getLogger(__name__)


class HttpArchiveSource(ArchiveSourcePort):
    """Archive source backed by a binary HTTP GET per archive."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize HTTP archive source.

        Args:
            base_url: URL of the directory holding the archives
                (e.g., http://localhost:9876/base-test/archives/).
            timeout: Timeout for a single download in seconds.
            transport: Optional httpx transport, used by tests.
        """
        self.base_url = base_url.rstrip("/")
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "HttpArchiveSource":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.client.aclose()

    async def close(self) -> None:
        """Close the httpx client and clean up resources."""
        await self.client.aclose()

    async def fetch(self, archive_name: str) -> ArchiveBlob:
        """Download one archive.

        Args:
            archive_name: Name of the archive under the base URL.

        Returns:
            ArchiveBlob with the response body.

        Raises:
            ValueError: If archive_name is empty.
            ArchiveFetchError: On any status other than 200 or on a
                transport error. The message is "<status text>: <name>".
        """
        if not archive_name:
            raise ValueError("archive_name must be a non-empty string")

        try:
            response = await self.client.get(archive_name)
        except httpx.HTTPError as e:
            logger.error(f"Network error fetching {archive_name}: {e}")
            raise ArchiveFetchError(
                str(e) or type(e).__name__, archive_name
            ) from e

        if response.status_code != 200:
            logger.error(
                f"Fetching {archive_name} returned HTTP {response.status_code}"
            )
            raise ArchiveFetchError(
                response.reason_phrase, archive_name, response.status_code
            )

        logger.debug(f"Fetched {archive_name} ({len(response.content)} bytes)")
        return ArchiveBlob(
            name=archive_name,
            data=response.content,
            content_type=response.headers.get(
                "content-type", "application/octet-stream"
            ),
        )
