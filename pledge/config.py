"""
Optional host settings read from <state_dir>/config.toml.

    identity = "alice"   # default acting identity
    clock_step = 1       # default steps for `clock advance`
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "config.toml"
_KNOWN_KEYS = frozenset({"identity", "clock_step"})


class ConfigError(ValueError):
    """config.toml is present but malformed."""


@dataclass(frozen=True)
class RegistryConfig:
    identity: str | None = None
    clock_step: int = 1


def load_config(state_dir: Path) -> RegistryConfig:
    """
    Load <state_dir>/config.toml.

    A missing file yields defaults. Unknown keys are ignored.
    """
    import tomllib

    path = state_dir / CONFIG_FILENAME
    if not path.exists():
        return RegistryConfig()

    try:
        data: dict[str, Any] = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"{path}: {e}") from e

    for key in sorted(set(data) - _KNOWN_KEYS):
        logger.warning(f"Ignoring unknown config key in {path}: {key}")

    identity = data.get("identity")
    if identity is not None:
        if not isinstance(identity, str) or not identity.strip():
            raise ConfigError("identity must be a non-empty string")
        identity = identity.strip()

    clock_step = data.get("clock_step", 1)
    if not isinstance(clock_step, int) or isinstance(clock_step, bool) or clock_step < 0:
        raise ConfigError("clock_step must be a non-negative integer")

    return RegistryConfig(identity=identity, clock_step=clock_step)
