"""Test suite for the mountsim fixture.

Organized into three categories:

1. core/: Unit tests for the volume model, stubs and init protocol
   - Minimal dependencies, fast execution
   - Uses in-memory fakes for ports

2. adapters/: Tests for archive source adapters
   - HTTP adapter against httpx.MockTransport
   - Directory adapter against a temporary directory

3. fakes/: Port implementations for testing
   - In-memory ArchiveSourcePort with canned payloads
"""
