"""External adapters for the mountsim fixture.

This package contains all external dependencies (HTTP clients, the local
filesystem) and provides implementations of the core port interfaces.

Adapter Organization:

- archive/: Adapters for acquiring archive payloads (HTTP, local directory)
"""
