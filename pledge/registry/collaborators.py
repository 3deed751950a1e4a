"""
Collaborators the registry consumes but does not own.

- IdentityResolver: yields the acting identity for each call. The
  registry trusts the value and never re-validates it.
- LogicalClock: yields a non-decreasing counter (e.g. a block height),
  read only when a deadline is set.
"""

from __future__ import annotations

import logging
from typing import Protocol

logger = logging.getLogger(__name__)


class IdentityResolver(Protocol):
    """Protocol for resolving the caller of an operation."""

    def resolve(self) -> str:
        """Return the identity acting on the current call."""
        ...


class LogicalClock(Protocol):
    """Protocol for the shared monotonic counter."""

    def current(self) -> int:
        """Return the current counter value."""
        ...


class StaticIdentity:
    """
    Resolve every call to one identity until switched.

    The host sets the identity per invocation; tests switch it to act as
    several participants against the same registry.
    """

    def __init__(self, identity: str):
        self.identity = identity

    def resolve(self) -> str:
        return self.identity

    def switch(self, identity: str) -> None:
        self.identity = identity


class ManualClock:
    """Clock advanced explicitly by the host. It never moves backwards."""

    def __init__(self, height: int = 0):
        if height < 0:
            raise ValueError("clock height must be non-negative")
        self._height = height

    def current(self) -> int:
        return self._height

    def advance(self, steps: int = 1) -> int:
        """
        Move the clock forward and return the new height.

        Args:
            steps: Number of ticks to advance (0 is allowed, negative is not)
        """
        if steps < 0:
            raise ValueError(f"clock cannot move backwards (steps={steps})")
        self._height += steps
        logger.info(f"clock advanced by {steps} to {self._height}")
        return self._height
