"""Integration tests for archive source adapters.

These tests exercise adapters against mocked HTTP transports and
temporary directories to validate translation into ArchiveBlob and
ArchiveFetchError.
"""
