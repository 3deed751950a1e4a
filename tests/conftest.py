"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from pledge.registry import CommitmentRegistry, ManualClock, StaticIdentity


@pytest.fixture
def identity() -> StaticIdentity:
    """Caller identity, starting as alice."""
    return StaticIdentity("alice")


@pytest.fixture
def clock() -> ManualClock:
    """Logical clock starting at height 100."""
    return ManualClock(100)


@pytest.fixture
def registry(identity: StaticIdentity, clock: ManualClock) -> CommitmentRegistry:
    """Fresh registry with empty stores."""
    return CommitmentRegistry(identity, clock)


@pytest.fixture
def state_dir(tmp_path: Path) -> Path:
    """State directory for host-level tests (not created yet)."""
    return tmp_path / ".pledge"
