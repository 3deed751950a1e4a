"""
On-disk registry state for the command-line host.

The three stores and the clock height are kept together in
<state_dir>/state.json so that records persist between invocations.
The file is rewritten whole on each save (temp file, then rename); the
host saves only after an operation succeeds.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .registry.stores import RegistryStores

logger = logging.getLogger(__name__)

STATE_VERSION = 1
DEFAULT_STATE_DIR = ".pledge"


class StateError(Exception):
    """The state file exists but cannot be used."""


@dataclass
class RegistryState:
    stores: RegistryStores
    clock: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Serialize to JSON-compatible dict."""
        data: dict[str, Any] = {"version": STATE_VERSION, "clock": self.clock}
        data.update(self.stores.to_dict())
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RegistryState:
        """Reconstruct from JSON dict."""
        version = data.get("version")
        if version != STATE_VERSION:
            raise StateError(f"Unsupported state version: {version!r}")

        clock = data.get("clock", 0)
        if not isinstance(clock, int) or isinstance(clock, bool) or clock < 0:
            raise StateError(f"Invalid clock value: {clock!r}")

        try:
            stores = RegistryStores.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            raise StateError(f"Invalid store data: {e}") from e
        return cls(stores=stores, clock=clock)


class StateFile:
    """
    Load and save RegistryState under a state directory.

        .pledge/state.json
    """

    def __init__(self, state_dir: Path):
        """
        Initialize state file.

        Args:
            state_dir: Directory holding state.json (created on first save)
        """
        self.state_dir = state_dir
        self.path = state_dir / "state.json"

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> RegistryState:
        """Read state, or return empty stores at clock 0 if nothing is saved yet."""
        if not self.path.exists():
            return RegistryState(stores=RegistryStores())

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise StateError(f"Cannot read {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise StateError(f"{self.path} does not contain a JSON object")

        state = RegistryState.from_dict(data)
        logger.debug(
            f"loaded {self.path}: {len(state.stores.commitments)} commitments at clock {state.clock}"
        )
        return state

    def save(self, state: RegistryState) -> None:
        """Write state atomically."""
        self.state_dir.mkdir(parents=True, exist_ok=True)
        serialized = json.dumps(state.to_dict(), indent=2, sort_keys=True)

        temp_path = self.path.with_suffix(".tmp")
        temp_path.write_text(serialized + "\n", encoding="utf-8")
        temp_path.replace(self.path)
        logger.debug(f"saved {self.path}")
