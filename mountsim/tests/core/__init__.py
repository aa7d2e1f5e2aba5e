"""Unit tests for core fixture logic.

These tests exercise the volume model, the platform stubs and the init
protocol without a file server. The archive source is replaced with the
in-memory fake from tests/fakes/.
"""
