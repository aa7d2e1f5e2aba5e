"""Argument-keyed dispatch tables backing the platform stubs.

A StubTable maps a frozen argument key to a canned response. Lookups
that miss fall through to a single default branch that raises
InvalidArgumentError. Every call is recorded so tests can assert on how
the application under test used the platform.
"""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from .models import InvalidArgumentError

logger = logging.getLogger(__name__)

R = TypeVar("R")


def freeze(value: Any) -> Any:
    """Turn an argument into a hashable lookup key.

    Mappings become frozensets of their items and sequences become tuples,
    so ``{"fileSystemId": "a"}`` and ``["key"]`` can be matched exactly.
    Anything else (including FileEntry handles) is used as-is.
    """
    if isinstance(value, Mapping):
        return frozenset((k, freeze(v)) for k, v in value.items())
    if isinstance(value, (list, tuple)):
        return tuple(freeze(v) for v in value)
    return value


@dataclass(frozen=True)
class StubCall:
    """One recorded invocation of a stub method."""

    args: tuple[Any, ...]
    matched: bool


class StubTable(Generic[R]):
    """Explicit argument -> response table with a raising default."""

    def __init__(self, method: str):
        self.method = method
        self._responses: dict[Any, R] = {}
        self.calls: list[StubCall] = []

    def when(self, *args: Any, then: R) -> None:
        """Register the response for an exact argument tuple.

        Registering the same arguments twice keeps the latest response.
        """
        self._responses[freeze(args)] = then

    def lookup(self, *args: Any) -> R:
        """Return the canned response for ``args``.

        Raises:
            InvalidArgumentError: If no response is registered for ``args``.
        """
        try:
            key = freeze(args)
            response = self._responses[key]
        except (KeyError, TypeError):
            self.calls.append(StubCall(args=args, matched=False))
            logger.debug(f"No stub response for {self.method}{args!r}")
            raise InvalidArgumentError(self.method) from None
        self.calls.append(StubCall(args=args, matched=True))
        return response

    def dispatch(self, *args: Any, callback: Callable[..., Any]) -> None:
        """Look up ``args`` and pass the response to ``callback``.

        A ``None`` response calls ``callback()`` with no arguments, the way
        the platform reports success for mount-style calls.
        """
        response = self.lookup(*args)
        if response is None:
            callback()
        else:
            callback(response)

    @property
    def call_count(self) -> int:
        return len(self.calls)

    def called_with(self, *args: Any) -> bool:
        """Whether any recorded call used exactly ``args``."""
        key = freeze(args)
        return any(freeze(call.args) == key for call in self.calls)

    def reset_calls(self) -> None:
        self.calls.clear()

    def __len__(self) -> int:
        return len(self._responses)

    def __repr__(self) -> str:
        return f"StubTable({self.method!r}, {len(self)} responses)"
