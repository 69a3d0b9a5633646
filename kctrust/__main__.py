"""Entry point for the kctrust command-line tool."""

from __future__ import annotations

# Absolute import so the module also works when executed as a standalone script
from kctrust.main import cli


def main() -> None:
    """Run the kctrust CLI."""
    cli()


if __name__ == "__main__":
    main()
