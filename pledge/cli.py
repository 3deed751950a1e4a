"""CLI entrypoint for pledge."""

import logging
import sys
from pathlib import Path

import click

from . import __version__
from .config import ConfigError, load_config
from .state_file import DEFAULT_STATE_DIR


def _configure_logging(verbose: bool) -> None:
    if not verbose:
        return
    from rich.console import Console
    from rich.logging import RichHandler

    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _identity(ctx: click.Context) -> str:
    """Acting identity: --as / PLEDGE_IDENTITY, then config.toml."""
    identity = ctx.obj["identity"] or ctx.obj["config"].identity
    if not identity:
        raise click.UsageError("No identity given. Pass --as IDENTITY, set PLEDGE_IDENTITY, or set identity in config.toml.")
    return identity


@click.group()
@click.version_option(__version__, prog_name="pledge")
@click.option(
    "--state-dir",
    "-d",
    type=click.Path(exists=False, file_okay=False, dir_okay=True, path_type=Path),
    default=DEFAULT_STATE_DIR,
    show_default=True,
    help="Directory holding state.json and config.toml",
)
@click.option(
    "--as",
    "identity",
    envvar="PLEDGE_IDENTITY",
    default=None,
    metavar="IDENTITY",
    help="Identity acting on this call (env: PLEDGE_IDENTITY)",
)
@click.option("--verbose", is_flag=True, help="Log registry activity to stderr")
@click.pass_context
def cli(ctx: click.Context, state_dir: Path, identity: str | None, verbose: bool) -> None:
    """pledge - Per-identity commitment registry.

    Record a commitment, mark it complete, give it a priority and a
    deadline on the shared logical clock.
    """
    _configure_logging(verbose)
    ctx.ensure_object(dict)
    try:
        config = load_config(state_dir)
    except ConfigError as e:
        raise click.ClickException(str(e)) from e

    ctx.obj["state_dir"] = state_dir
    ctx.obj["identity"] = identity.strip() if identity else None
    ctx.obj["config"] = config


@cli.command()
@click.argument("description")
@click.pass_context
def create(ctx: click.Context, description: str) -> None:
    """Create a commitment for the acting identity."""
    from .commands.registry_cmd import run_create

    sys.exit(run_create(ctx.obj["state_dir"], _identity(ctx), description))


@cli.command()
@click.argument("description")
@click.option(
    "--completed/--open",
    default=False,
    show_default=True,
    help="Completion flag to store alongside the new description",
)
@click.pass_context
def modify(ctx: click.Context, description: str, completed: bool) -> None:
    """Replace the description and completion flag of your commitment."""
    from .commands.registry_cmd import run_modify

    sys.exit(run_modify(ctx.obj["state_dir"], _identity(ctx), description, completed=completed))


@cli.command()
@click.pass_context
def delete(ctx: click.Context) -> None:
    """Delete your commitment.

    Priority and deadline records are kept.
    """
    from .commands.registry_cmd import run_delete

    sys.exit(run_delete(ctx.obj["state_dir"], _identity(ctx)))


@cli.command()
@click.argument("target")
@click.argument("description")
@click.pass_context
def delegate(ctx: click.Context, target: str, description: str) -> None:
    """Create a commitment on behalf of TARGET.

    Any identity may do this for any TARGET that has no commitment yet.

    Examples:

        pledge --as alice delegate bob "Review the release notes"
    """
    from .commands.registry_cmd import run_delegate

    sys.exit(run_delegate(ctx.obj["state_dir"], _identity(ctx), target, description))


@cli.command()
@click.argument("weight", type=int)
@click.pass_context
def priority(ctx: click.Context, weight: int) -> None:
    """Set the priority of your commitment (1-3)."""
    from .commands.registry_cmd import run_set_priority

    sys.exit(run_set_priority(ctx.obj["state_dir"], _identity(ctx), weight))


@cli.command()
@click.argument("window", type=int)
@click.pass_context
def deadline(ctx: click.Context, window: int) -> None:
    """Set your deadline WINDOW ticks after the current clock value."""
    from .commands.registry_cmd import run_set_deadline

    sys.exit(run_set_deadline(ctx.obj["state_dir"], _identity(ctx), window))


@cli.command()
@click.option("--json", "output_json", is_flag=True, help="Output result as JSON")
@click.pass_context
def query(ctx: click.Context, output_json: bool) -> None:
    """Report whether you have a commitment, its length and completion."""
    from .commands.registry_cmd import run_query

    sys.exit(run_query(ctx.obj["state_dir"], _identity(ctx), output_json=output_json))


@cli.command()
@click.option("--json", "output_json", is_flag=True, help="Output records as JSON")
@click.pass_context
def records(ctx: click.Context, output_json: bool) -> None:
    """Show your record in each store, including orphaned ones."""
    from .commands.registry_cmd import run_records

    sys.exit(run_records(ctx.obj["state_dir"], _identity(ctx), output_json=output_json))


# -----------------------------------------------------------------------------
# Clock commands - the host side of the logical clock
# -----------------------------------------------------------------------------


@cli.group()
def clock() -> None:
    """Inspect or advance the logical clock."""
    pass


@clock.command("show")
@click.pass_context
def clock_show(ctx: click.Context) -> None:
    """Print the current clock value."""
    from .commands.registry_cmd import run_clock_show

    sys.exit(run_clock_show(ctx.obj["state_dir"]))


@clock.command("advance")
@click.argument("steps", type=click.IntRange(min=0), required=False)
@click.pass_context
def clock_advance(ctx: click.Context, steps: int | None) -> None:
    """Advance the clock by STEPS (default: clock_step from config.toml)."""
    from .commands.registry_cmd import run_clock_advance

    if steps is None:
        steps = ctx.obj["config"].clock_step
    sys.exit(run_clock_advance(ctx.obj["state_dir"], steps))


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
