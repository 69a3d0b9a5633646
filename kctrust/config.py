"""Environment-driven configuration for kctrust.

kctrust keeps no configuration file of its own. Tool locations and diagnostics
are controlled through environment variables, read at call time:

    KCTRUST_SECURITY_BIN=/path  -> trust-store tool (default /usr/bin/security)
    KCTRUST_OPENSSL_BIN=/path   -> certificate inspection tool (default /usr/bin/openssl)
    KCTRUST_DEBUG=1             -> Echo every external command line to stderr
"""

import os
from dataclasses import dataclass
from typing import Optional, Sequence

import click

DEFAULT_SECURITY_BIN = "/usr/bin/security"
DEFAULT_OPENSSL_BIN = "/usr/bin/openssl"


@dataclass(frozen=True)
class ToolConfig:
    """Locations of the external tools and diagnostic switches."""

    security_bin: str = DEFAULT_SECURITY_BIN
    openssl_bin: str = DEFAULT_OPENSSL_BIN
    debug: bool = False

    @classmethod
    def from_env(cls) -> "ToolConfig":
        """Build a configuration from the current process environment."""
        return cls(
            security_bin=os.environ.get("KCTRUST_SECURITY_BIN") or DEFAULT_SECURITY_BIN,
            openssl_bin=os.environ.get("KCTRUST_OPENSSL_BIN") or DEFAULT_OPENSSL_BIN,
            debug=os.environ.get("KCTRUST_DEBUG") == "1",
        )


def resolve_config(config: Optional[ToolConfig] = None) -> ToolConfig:
    """Return ``config`` or, when omitted, one read from the environment."""
    return config if config is not None else ToolConfig.from_env()


def debug_command(config: ToolConfig, cmd: Sequence[str]) -> None:
    """Echo an external command line to stderr when debugging is enabled."""
    if config.debug:
        click.echo(f"[kctrust] Debug: running {' '.join(cmd)}", err=True)
