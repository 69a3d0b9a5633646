"""CLI commands for keychain trust operations."""

from pathlib import Path
from typing import Any, Callable, Dict, Optional, Type

import click

from .errors import TrustError
from .security import add_trusted_cert, remove_trusted_cert, verify_cert
from .settings import (
    ADD_TRUSTED_CERT,
    OPTION_FIELDS,
    REMOVE_TRUSTED_CERT,
    SUBCOMMANDS,
    VERIFY_CERT,
    AllowedError,
    FieldKind,
    OptionField,
    Policy,
    ResultType,
    Settings,
    fields_for,
)
from .utils import format_success, handle_trust_error, output_list_data
from .workflow import TrustWorkflow

_CHOICE_TYPES: Dict[str, Type[Any]] = {
    "policy": Policy,
    "result_type": ResultType,
    "allowed_error": AllowedError,
}


def _option_name(option: OptionField) -> str:
    return "--" + option.name.replace("_", "-")


def _click_option(option: OptionField) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Build the click option decorator for one settings field."""
    if option.kind is FieldKind.BOOL:
        return click.option(
            _option_name(option), option.name, is_flag=True, default=False, help=option.description
        )
    if option.kind is FieldKind.CHOICE:
        choices = [member.value for member in _CHOICE_TYPES[option.name]]
        return click.option(
            _option_name(option),
            option.name,
            type=click.Choice(choices),
            default=None,
            help=option.description,
        )
    return click.option(_option_name(option), option.name, default="", help=option.description)


def settings_options(subcommand: str) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Attach one click option per settings field accepted by ``subcommand``."""

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        # click applies decorators bottom-up, so reverse to keep field order in --help
        for option in reversed(fields_for(subcommand)):
            func = _click_option(option)(func)
        return func

    return decorator


def build_settings(values: Dict[str, Any]) -> Settings:
    """Create ``Settings`` from parsed click option values.

    Args:
        values: Mapping of field name to raw option value

    Returns:
        Populated settings; choice values are converted to their enum types
    """
    settings = Settings()
    for name, value in values.items():
        if name in _CHOICE_TYPES and value is not None:
            value = _CHOICE_TYPES[name](value)
        setattr(settings, name, value)
    return settings


def _run_operation(operation: Callable[[Settings], str], values: Dict[str, Any]) -> None:
    try:
        output = operation(build_settings(values))
    except (TrustError, OSError) as exc:
        handle_trust_error(exc)
    if output:
        click.echo(output.rstrip("\n"))


def register_trust_commands(cli: Any) -> None:
    """Register the trust commands with the CLI.

    Args:
        cli: The Click CLI group to register commands with.
    """

    @cli.command(name="verify")
    @settings_options(VERIFY_CERT)
    def verify(**values: Any) -> None:
        """Verify a certificate (security verify-cert)."""
        _run_operation(verify_cert, values)

    @cli.command(name="add")
    @settings_options(ADD_TRUSTED_CERT)
    def add(**values: Any) -> None:
        """Add trusted certificate settings (security add-trusted-cert)."""
        _run_operation(add_trusted_cert, values)

    @cli.command(name="remove")
    @settings_options(REMOVE_TRUSTED_CERT)
    def remove(**values: Any) -> None:
        """Remove trusted certificate settings (security remove-trusted-cert)."""
        _run_operation(remove_trusted_cert, values)

    @cli.command(name="ensure")
    @click.argument("cert_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
    def ensure(cert_file: Path) -> None:
        """Trust CERT_FILE in the login keychain unless it is already present.

        The certificate is added for the SSL policy and tolerates hostname
        mismatches. Running the command again is a no-op.
        """
        try:
            added = TrustWorkflow().ensure_trusted(cert_file.read_bytes())
        except (TrustError, OSError, RuntimeError) as exc:
            handle_trust_error(exc)
        if added:
            format_success("Certificate added to login keychain", {"file": str(cert_file)})
        else:
            format_success("Certificate already trusted", {"file": str(cert_file)})

    @cli.command(name="options")
    @click.option(
        "--subcommand",
        "-s",
        type=click.Choice(list(SUBCOMMANDS)),
        default=None,
        help="Only list options accepted by this security subcommand",
    )
    @click.option("--format", "-f", type=click.Choice(["table", "json"]), default="table")
    def options(subcommand: Optional[str], format: str) -> None:
        """List the security options kctrust can pass through."""
        fields = fields_for(subcommand) if subcommand else list(OPTION_FIELDS)
        items = [
            {
                "name": option.name,
                "flag": f"-{option.flag}",
                "kind": option.kind.value,
                "subcommands": [s for s in SUBCOMMANDS if s in option.subcommands],
            }
            for option in fields
        ]
        output_list_data(
            items,
            format,
            ["Field", "Flag", "Kind", "Subcommands"],
            lambda item: [item["name"], item["flag"], item["kind"], ", ".join(item["subcommands"])],
            empty_message="No options found.",
        )
