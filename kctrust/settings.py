"""Option schema for the macOS ``security`` trust subcommands.

``Settings`` holds every option understood by ``verify-cert``,
``add-trusted-cert`` and ``remove-trusted-cert``. ``OPTION_FIELDS`` describes,
for each field, the flag it renders as, how it is rendered and which
subcommands accept it. ``marshal`` walks that table in order to build the
argument vector handed to the tool.
"""

from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, List, Optional, Sequence

from .errors import UnsupportedFieldTypeError

VERIFY_CERT = "verify-cert"
ADD_TRUSTED_CERT = "add-trusted-cert"
REMOVE_TRUSTED_CERT = "remove-trusted-cert"

SUBCOMMANDS = (VERIFY_CERT, ADD_TRUSTED_CERT, REMOVE_TRUSTED_CERT)

# Subcommands that take the certificate as a trailing positional argument
POSITIONAL_SUBCOMMANDS: FrozenSet[str] = frozenset({ADD_TRUSTED_CERT, REMOVE_TRUSTED_CERT})


class Policy(str, Enum):
    """Trust policy selector (``-p``)."""

    SSL = "ssl"
    SMIME = "smime"
    CODE_SIGN = "codeSign"
    IP_SEC = "IPSec"
    ICHAT = "iChat"
    BASIC = "basic"
    SW_UPDATE = "swUpdate"
    PKG_SIGN = "pkgSign"
    PKINIT_CLIENT = "pkinitClient"
    PKINIT_SERVER = "pkinitServer"
    EAP = "eap"


class ResultType(str, Enum):
    """Trust result type for ``add-trusted-cert`` (``-r``)."""

    TRUST_ROOT = "trustRoot"
    TRUST_AS_ROOT = "trustAsRoot"
    DENY = "deny"
    UNSPECIFIED = "unspecified"


class AllowedError(str, Enum):
    """Error tolerated by a trust setting (``-e``)."""

    CERT_EXPIRED = "certExpired"
    HOSTNAME_MISMATCH = "hostnameMismatch"


class FieldKind(Enum):
    """How a field value is rendered onto the command line."""

    TEXT = "text"
    BOOL = "bool"
    CHOICE = "choice"


@dataclass(frozen=True)
class OptionField:
    """Static description of one ``Settings`` field."""

    name: str
    flag: Optional[str]
    kind: FieldKind
    subcommands: FrozenSet[str]
    description: str = ""

    def applies_to(self, subcommand: str) -> bool:
        """Return True if this field is accepted by ``subcommand``."""
        return subcommand in self.subcommands


def _cmds(*names: str) -> FrozenSet[str]:
    return frozenset(names)


# Declaration order is the rendering order.
OPTION_FIELDS: Sequence[OptionField] = (
    OptionField(
        "cert_file",
        "c",
        FieldKind.TEXT,
        _cmds(VERIFY_CERT, ADD_TRUSTED_CERT, REMOVE_TRUSTED_CERT),
        "Certificate file",
    ),
    OptionField("root_cert_file", "r", FieldKind.TEXT, _cmds(VERIFY_CERT), "Root certificate file"),
    OptionField("policy", "p", FieldKind.CHOICE, _cmds(VERIFY_CERT, ADD_TRUSTED_CERT), "Policy"),
    OptionField("keychain", "k", FieldKind.TEXT, _cmds(VERIFY_CERT, ADD_TRUSTED_CERT), "Keychain"),
    OptionField(
        "no_keychains", "n", FieldKind.BOOL, _cmds(VERIFY_CERT), "Do not search any keychains"
    ),
    OptionField("local_only", "L", FieldKind.BOOL, _cmds(VERIFY_CERT), "Use local resources only"),
    OptionField("is_leaf", "l", FieldKind.BOOL, _cmds(VERIFY_CERT), "Certificate is a leaf"),
    OptionField("email_address", "e", FieldKind.TEXT, _cmds(VERIFY_CERT), "Email address"),
    OptionField("ssl_host", "s", FieldKind.TEXT, _cmds(VERIFY_CERT), "SSL host name"),
    OptionField("quiet", "q", FieldKind.BOOL, _cmds(VERIFY_CERT), "Quiet, no stdout output"),
    OptionField(
        "add_to_admin",
        "d",
        FieldKind.BOOL,
        _cmds(ADD_TRUSTED_CERT, REMOVE_TRUSTED_CERT),
        "Use the admin cert store",
    ),
    OptionField("result_type", "r", FieldKind.CHOICE, _cmds(ADD_TRUSTED_CERT), "Result type"),
    OptionField("app_path", "a", FieldKind.TEXT, _cmds(ADD_TRUSTED_CERT), "Application path"),
    OptionField("policy_string", "s", FieldKind.TEXT, _cmds(ADD_TRUSTED_CERT), "Policy string"),
    OptionField("allowed_error", "e", FieldKind.CHOICE, _cmds(ADD_TRUSTED_CERT), "Allowed error"),
    OptionField("key_usage", "u", FieldKind.TEXT, _cmds(ADD_TRUSTED_CERT), "Key usage"),
    OptionField(
        "settings_file_in", "i", FieldKind.TEXT, _cmds(ADD_TRUSTED_CERT), "Input settings file"
    ),
    OptionField(
        "settings_file_out", "o", FieldKind.TEXT, _cmds(ADD_TRUSTED_CERT), "Output settings file"
    ),
    # -D is applied to add-trusted-cert as well as remove-trusted-cert
    OptionField(
        "default_setting",
        "D",
        FieldKind.BOOL,
        _cmds(ADD_TRUSTED_CERT, REMOVE_TRUSTED_CERT),
        "Default trust setting",
    ),
)


@dataclass
class Settings:
    """Options for a single trust operation.

    All fields start empty, False or unset. Nothing is validated here; a field
    is only rendered when ``marshal`` decides it applies.
    """

    cert_file: str = ""
    root_cert_file: str = ""
    policy: Optional[Policy] = None
    keychain: str = ""
    no_keychains: bool = False
    local_only: bool = False
    is_leaf: bool = False
    email_address: str = ""
    ssl_host: str = ""
    quiet: bool = False
    add_to_admin: bool = False
    result_type: Optional[ResultType] = None
    app_path: str = ""
    policy_string: str = ""
    allowed_error: Optional[AllowedError] = None
    key_usage: str = ""
    settings_file_in: str = ""
    settings_file_out: str = ""
    default_setting: bool = False

    def marshal(self, subcommand: str) -> List[str]:
        """Arrange these settings into command arguments for ``subcommand``."""
        return marshal(self, subcommand)


def _choice_text(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def marshal(
    settings: Settings,
    subcommand: str,
    fields: Sequence[OptionField] = OPTION_FIELDS,
) -> List[str]:
    """Build the argument vector for ``subcommand`` from ``settings``.

    Args:
        settings: Populated options
        subcommand: One of the ``security`` trust subcommands
        fields: Field table to walk, in rendering order

    Returns:
        Flags and values in field order, followed by the certificate path as a
        positional argument for ``add-trusted-cert`` and ``remove-trusted-cert``

    Raises:
        UnsupportedFieldTypeError: If a field has a kind that cannot be rendered
    """
    flags: List[str] = []
    positional = ""

    for option in fields:
        if not option.flag:
            continue
        if not option.applies_to(subcommand):
            continue

        value = getattr(settings, option.name)

        if option.kind in (FieldKind.TEXT, FieldKind.CHOICE):
            text = _choice_text(value) if option.kind is FieldKind.CHOICE else value
            if not text:
                continue
            if option.name == "cert_file" and subcommand in POSITIONAL_SUBCOMMANDS:
                positional = text
            else:
                flags.extend([f"-{option.flag}", text])
        elif option.kind is FieldKind.BOOL:
            if not value:
                continue
            flags.append(f"-{option.flag}")
        else:
            raise UnsupportedFieldTypeError(
                f"Field '{option.name}' has unsupported kind: {option.kind!r}"
            )

    if positional:
        flags.append(positional)
    return flags


def fields_for(subcommand: str) -> List[OptionField]:
    """Return the option fields accepted by ``subcommand`` in order."""
    return [option for option in OPTION_FIELDS if option.flag and option.applies_to(subcommand)]
