"""Fake implementations of core ports for testing.

These in-memory implementations allow the fixture core to be tested
without a file server:

- FakeArchiveSource: Canned archive payloads and configurable failures
"""

from .archive import FakeArchiveSource

__all__ = ["FakeArchiveSource"]
