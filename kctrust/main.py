"""kctrust entry points."""

from pathlib import Path

import click
import tomllib

from .trust_click import register_trust_commands


def get_version() -> str:
    """Get version from _version.py (built package) or pyproject.toml (development)."""
    try:
        from ._version import __version__

        return __version__
    except ImportError:
        try:
            current_dir = Path(__file__).parent
            pyproject_path = current_dir.parent / "pyproject.toml"

            with open(pyproject_path, "rb") as f:
                pyproject_data = tomllib.load(f)

            return pyproject_data["tool"]["poetry"]["version"]
        except (OSError, KeyError, tomllib.TOMLDecodeError):
            return "unknown"


CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])


@click.group(context_settings=CONTEXT_SETTINGS, invoke_without_command=True)
@click.option("--version", "-v", is_flag=True, help="Show version and exit")
@click.pass_context
def cli(ctx: click.Context, version: bool) -> None:
    """kctrust - Manage certificate trust in the macOS login keychain."""
    if version:
        click.echo(f"kctrust version {get_version()}")
        ctx.exit()
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_trust_commands(cli)
