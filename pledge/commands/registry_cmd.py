"""Registry CLI commands."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

from rich.console import Console
from rich.table import Table

from ..registry import CommitmentRegistry, ManualClock, RegistryError, StaticIdentity
from ..state_file import RegistryState, StateError, StateFile


def _open(state_dir: Path, identity: str) -> tuple[StateFile, RegistryState, CommitmentRegistry, ManualClock]:
    state_file = StateFile(state_dir)
    state = state_file.load()
    clock = ManualClock(state.clock)
    registry = CommitmentRegistry(StaticIdentity(identity), clock, stores=state.stores)
    return state_file, state, registry, clock


def _mutate(state_dir: Path, identity: str, operation: Callable[[CommitmentRegistry], str]) -> int:
    err = Console(stderr=True)
    try:
        state_file, state, registry, _ = _open(state_dir, identity)
        message = operation(registry)
        state_file.save(state)
    except RegistryError as e:
        err.print(f"{e.kind}: {e}", style="bold red")
        return 1
    except (StateError, OSError) as e:
        err.print(str(e), style="bold red")
        return 1
    err.print(message, style="green")
    return 0


def run_create(state_dir: Path, identity: str, description: str) -> int:
    return _mutate(state_dir, identity, lambda r: r.create(description))


def run_modify(state_dir: Path, identity: str, description: str, *, completed: bool) -> int:
    return _mutate(state_dir, identity, lambda r: r.modify(description, completed))


def run_delete(state_dir: Path, identity: str) -> int:
    return _mutate(state_dir, identity, lambda r: r.delete())


def run_delegate(state_dir: Path, identity: str, target: str, description: str) -> int:
    return _mutate(state_dir, identity, lambda r: r.delegate_create(target, description))


def run_set_priority(state_dir: Path, identity: str, weight: int) -> int:
    return _mutate(state_dir, identity, lambda r: r.set_priority(weight))


def run_set_deadline(state_dir: Path, identity: str, window: int) -> int:
    return _mutate(state_dir, identity, lambda r: r.set_deadline(window))


def run_query(state_dir: Path, identity: str, *, output_json: bool = False) -> int:
    err = Console(stderr=True)
    console = Console()
    try:
        _, _, registry, _ = _open(state_dir, identity)
    except StateError as e:
        err.print(str(e), style="bold red")
        return 1

    result = registry.query()
    if output_json:
        print(json.dumps(result.to_dict(), indent=2, sort_keys=True))
        return 0

    if not result.exists:
        console.print(f"{identity}: no commitment", style="dim")
        return 0
    status = "completed" if result.completed else "open"
    console.print(f"{identity}: {status} ({result.description_length} characters)")
    return 0


def run_records(state_dir: Path, identity: str, *, output_json: bool = False) -> int:
    """Show the identity's raw record in each store, including orphaned ones."""
    err = Console(stderr=True)
    console = Console()
    try:
        _, state, _, _ = _open(state_dir, identity)
    except StateError as e:
        err.print(str(e), style="bold red")
        return 1

    data: dict[str, Any] = {"identity": identity, "clock": state.clock}
    for store in state.stores.all():
        record = store.get(identity)
        data[store.name] = record.to_dict() if record is not None else None

    if output_json:
        print(json.dumps(data, indent=2, sort_keys=True))
        return 0

    table = Table(title=f"Records: {identity} (clock {state.clock})")
    table.add_column("store", style="cyan", no_wrap=True)
    table.add_column("record")

    for store in state.stores.all():
        record = data[store.name]
        if record is None:
            table.add_row(store.name, "[dim]none[/dim]")
        else:
            table.add_row(store.name, ", ".join(f"{k}={v}" for k, v in sorted(record.items())))

    console.print(table)
    return 0


def run_clock_show(state_dir: Path) -> int:
    err = Console(stderr=True)
    console = Console()
    try:
        state = StateFile(state_dir).load()
    except StateError as e:
        err.print(str(e), style="bold red")
        return 1
    console.print(f"clock: {state.clock}")
    return 0


def run_clock_advance(state_dir: Path, steps: int) -> int:
    err = Console(stderr=True)
    console = Console()
    state_file = StateFile(state_dir)
    try:
        state = state_file.load()
        clock = ManualClock(state.clock)
        state.clock = clock.advance(steps)
        state_file.save(state)
    except (StateError, OSError, ValueError) as e:
        err.print(str(e), style="bold red")
        return 1
    console.print(f"clock: {state.clock}")
    return 0
