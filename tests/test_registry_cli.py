"""
Tests for the registry CLI commands.

The run_* functions are exercised directly with capsys; the click wiring
(identity resolution, exit codes, clock defaults) goes through CliRunner.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from pledge.cli import cli
from pledge.commands.registry_cmd import (
    run_clock_advance,
    run_clock_show,
    run_create,
    run_delegate,
    run_delete,
    run_modify,
    run_query,
    run_records,
    run_set_deadline,
    run_set_priority,
)
from pledge.state_file import StateFile


def test_create_and_query(state_dir: Path, capsys) -> None:
    assert run_create(state_dir, "alice", "Ship the beta") == 0
    captured = capsys.readouterr()
    assert "Commitment created" in captured.err

    assert run_query(state_dir, "alice", output_json=True) == 0
    captured = capsys.readouterr()
    assert json.loads(captured.out) == {"exists": True, "description_length": 13, "completed": False}


def test_query_text_output(state_dir: Path, capsys) -> None:
    run_query(state_dir, "alice")
    assert "alice: no commitment" in capsys.readouterr().out

    run_create(state_dir, "alice", "abc")
    run_modify(state_dir, "alice", "abcd", completed=True)
    capsys.readouterr()

    run_query(state_dir, "alice")
    assert "alice: completed (4 characters)" in capsys.readouterr().out


def test_error_returns_one_and_keeps_state(state_dir: Path, capsys) -> None:
    run_create(state_dir, "alice", "first")
    before = (state_dir / "state.json").read_text(encoding="utf-8")
    capsys.readouterr()

    assert run_create(state_dir, "alice", "second") == 1
    captured = capsys.readouterr()
    assert "RecordCollision" in captured.err

    assert (state_dir / "state.json").read_text(encoding="utf-8") == before


def test_failed_first_operation_writes_nothing(state_dir: Path, capsys) -> None:
    assert run_create(state_dir, "alice", "") == 1
    assert "InvalidInput" in capsys.readouterr().err
    assert not (state_dir / "state.json").exists()


def test_delete_keeps_other_records(state_dir: Path, capsys) -> None:
    run_create(state_dir, "alice", "goal")
    run_set_priority(state_dir, "alice", 2)
    run_set_deadline(state_dir, "alice", 5)
    assert run_delete(state_dir, "alice") == 0
    capsys.readouterr()

    assert run_records(state_dir, "alice", output_json=True) == 0
    data = json.loads(capsys.readouterr().out)
    assert data == {
        "identity": "alice",
        "clock": 0,
        "commitments": None,
        "priorities": {"weight": 2},
        "deadlines": {"deadline": 5, "alert_armed": False},
    }


def test_records_table(state_dir: Path, capsys) -> None:
    run_create(state_dir, "alice", "goal")
    run_set_priority(state_dir, "alice", 1)
    capsys.readouterr()

    assert run_records(state_dir, "alice") == 0
    output = capsys.readouterr().out
    assert "Records: alice" in output
    assert "weight=1" in output
    assert "none" in output


def test_delegate(state_dir: Path, capsys) -> None:
    assert run_delegate(state_dir, "alice", "bob", "Review") == 0
    assert "Commitment created for bob" in capsys.readouterr().err

    run_query(state_dir, "alice", output_json=True)
    assert json.loads(capsys.readouterr().out)["exists"] is False

    run_query(state_dir, "bob", output_json=True)
    assert json.loads(capsys.readouterr().out)["description_length"] == 6


def test_priority_out_of_range(state_dir: Path, capsys) -> None:
    run_create(state_dir, "alice", "goal")
    capsys.readouterr()

    assert run_set_priority(state_dir, "alice", 4) == 1
    assert "InvalidInput" in capsys.readouterr().err


def test_deadline_uses_persisted_clock(state_dir: Path, capsys) -> None:
    run_create(state_dir, "alice", "goal")
    assert run_clock_advance(state_dir, 20) == 0
    assert run_set_deadline(state_dir, "alice", 4) == 0
    assert "Deadline set to 24" in capsys.readouterr().err

    state = StateFile(state_dir).load()
    assert state.clock == 20
    assert state.stores.deadlines.get("alice").deadline == 24


def test_clock_show_and_advance(state_dir: Path, capsys) -> None:
    assert run_clock_show(state_dir) == 0
    assert "clock: 0" in capsys.readouterr().out

    run_clock_advance(state_dir, 3)
    capsys.readouterr()
    run_clock_show(state_dir)
    assert "clock: 3" in capsys.readouterr().out

    assert run_clock_advance(state_dir, -1) == 1


def test_corrupt_state_reported(state_dir: Path, capsys) -> None:
    state_dir.mkdir(parents=True)
    (state_dir / "state.json").write_text("{", encoding="utf-8")

    assert run_query(state_dir, "alice") == 1
    assert "Cannot read" in capsys.readouterr().err


# -----------------------------------------------------------------------------
# click wiring
# -----------------------------------------------------------------------------


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def test_cli_requires_identity(runner: CliRunner, state_dir: Path) -> None:
    result = runner.invoke(cli, ["--state-dir", str(state_dir), "create", "goal"], env={"PLEDGE_IDENTITY": None})
    assert result.exit_code == 2
    assert "No identity given" in result.output


def test_cli_identity_from_option_and_env(runner: CliRunner, state_dir: Path) -> None:
    result = runner.invoke(cli, ["--state-dir", str(state_dir), "--as", "alice", "create", "goal"])
    assert result.exit_code == 0

    result = runner.invoke(
        cli, ["--state-dir", str(state_dir), "query", "--json"], env={"PLEDGE_IDENTITY": "alice"}
    )
    assert result.exit_code == 0
    assert json.loads(result.stdout)["exists"] is True


def test_cli_identity_from_config(runner: CliRunner, state_dir: Path) -> None:
    state_dir.mkdir(parents=True)
    (state_dir / "config.toml").write_text('identity = "carol"\nclock_step = 10\n', encoding="utf-8")

    result = runner.invoke(cli, ["--state-dir", str(state_dir), "create", "goal"], env={"PLEDGE_IDENTITY": None})
    assert result.exit_code == 0
    assert "carol" in StateFile(state_dir).load().stores.commitments

    result = runner.invoke(cli, ["--state-dir", str(state_dir), "clock", "advance"])
    assert result.exit_code == 0
    assert StateFile(state_dir).load().clock == 10


def test_cli_error_exit_code(runner: CliRunner, state_dir: Path) -> None:
    result = runner.invoke(cli, ["--state-dir", str(state_dir), "--as", "alice", "delete"])
    assert result.exit_code == 1


def test_cli_modify_flag(runner: CliRunner, state_dir: Path) -> None:
    base = ["--state-dir", str(state_dir), "--as", "alice"]
    runner.invoke(cli, [*base, "create", "goal"])

    result = runner.invoke(cli, [*base, "modify", "goal", "--completed"])
    assert result.exit_code == 0
    assert StateFile(state_dir).load().stores.commitments.get("alice").completed is True


def test_cli_clock_rejects_negative_steps(runner: CliRunner, state_dir: Path) -> None:
    result = runner.invoke(cli, ["--state-dir", str(state_dir), "clock", "advance", "-2"])
    assert result.exit_code == 2


def test_cli_malformed_config(runner: CliRunner, state_dir: Path) -> None:
    state_dir.mkdir(parents=True)
    (state_dir / "config.toml").write_text("clock_step = -1\n", encoding="utf-8")

    result = runner.invoke(cli, ["--state-dir", str(state_dir), "clock", "show"])
    assert result.exit_code == 1
    assert "clock_step" in result.output


def test_invalid_record_in_state_reported(state_dir: Path, capsys) -> None:
    state_dir.mkdir(parents=True)
    (state_dir / "state.json").write_text(
        '{"version": 1, "commitments": {"alice": {"description": 5}}}', encoding="utf-8"
    )

    assert run_query(state_dir, "alice", output_json=True) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Invalid store data" in captured.err


def test_unwritable_state_dir_reported(tmp_path: Path, capsys) -> None:
    blocked = tmp_path / "blocked"
    blocked.write_text("not a directory", encoding="utf-8")

    assert run_create(blocked, "alice", "goal") == 1
    assert run_clock_advance(blocked, 1) == 1
    assert "Traceback" not in capsys.readouterr().err
