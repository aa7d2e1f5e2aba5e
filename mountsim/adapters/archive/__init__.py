"""Archive source adapters for acquiring test archive payloads.

Implementations support multiple locations:
- HTTP server (the test runner's static file server)
- Local directory
"""

from .directory import DirectoryArchiveSource
from .http import HttpArchiveSource

__all__ = ["DirectoryArchiveSource", "HttpArchiveSource"]
