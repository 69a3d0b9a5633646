"""Run the macOS ``security`` tool for trust subcommands."""

import subprocess
from typing import List, Optional, Sequence

from .config import ToolConfig, debug_command, resolve_config
from .errors import CommandError
from .settings import ADD_TRUSTED_CERT, REMOVE_TRUSTED_CERT, VERIFY_CERT, Settings


def run_tool(cmd: Sequence[str], config: ToolConfig) -> str:
    """Run an external command and return its combined stdout/stderr text.

    Args:
        cmd: Full command line, executable first
        config: Tool configuration (used for debug echo)

    Returns:
        The captured output

    Raises:
        CommandError: If the command exits with a non-zero status
    """
    debug_command(config, cmd)
    result = subprocess.run(  # noqa: S603
        list(cmd), stdout=subprocess.PIPE, stderr=subprocess.STDOUT, text=True
    )
    if result.returncode != 0:
        raise CommandError(result.stdout or "")
    return result.stdout or ""


def run_security(
    subcommand: str, args: Sequence[str], config: Optional[ToolConfig] = None
) -> str:
    """Invoke ``security <subcommand> <args...>``.

    Raises:
        CommandError: If the tool exits with a non-zero status
    """
    config = resolve_config(config)
    cmd: List[str] = [config.security_bin, subcommand, *args]
    return run_tool(cmd, config)


def execute(settings: Settings, subcommand: str, config: Optional[ToolConfig] = None) -> str:
    """Marshal ``settings`` for ``subcommand`` and run it."""
    args = settings.marshal(subcommand)
    return run_security(subcommand, args, config)


def verify_cert(settings: Settings, config: Optional[ToolConfig] = None) -> str:
    """Run ``security verify-cert``."""
    return execute(settings, VERIFY_CERT, config)


def add_trusted_cert(settings: Settings, config: Optional[ToolConfig] = None) -> str:
    """Run ``security add-trusted-cert``."""
    return execute(settings, ADD_TRUSTED_CERT, config)


def remove_trusted_cert(settings: Settings, config: Optional[ToolConfig] = None) -> str:
    """Run ``security remove-trusted-cert``."""
    return execute(settings, REMOVE_TRUSTED_CERT, config)
