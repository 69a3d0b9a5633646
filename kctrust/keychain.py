"""Login keychain lookup and insertion used by the ensure-trusted workflow.

A certificate is looked up by the common name read from its subject with
``openssl x509 -subject``. The subject text is matched against a fixed literal
prefix, and "not found" is recognized from the English message printed by
``security find-certificate``. Both depend on the exact output format of those
tools.
"""

from pathlib import Path
from typing import Optional, Protocol, Union

from .config import ToolConfig, resolve_config
from .errors import CertificateNotFoundError, CommandError, SubjectFormatError
from .security import run_security, run_tool
from .settings import ADD_TRUSTED_CERT, AllowedError, Policy

SUBJECT_PREFIX = "subject= /CN="
NOT_FOUND_MESSAGE = "The specified item could not be found in the keychain."

PathLike = Union[str, Path]


def login_keychain_path(home_dir: PathLike) -> Path:
    """Return the login keychain location under ``home_dir``."""
    return Path(home_dir) / "Library" / "Keychains" / "login.keychain-db"


def parse_common_name(subject_output: str) -> str:
    """Extract the common name from ``openssl x509 -subject`` output.

    Args:
        subject_output: Text such as ``"subject= /CN=example.local\\n"``

    Returns:
        The common name

    Raises:
        SubjectFormatError: If the text does not start with the subject prefix
            or carries no name
    """
    if not subject_output.startswith(SUBJECT_PREFIX):
        raise SubjectFormatError(f"Unexpected certificate subject: {subject_output!r}")
    common_name = subject_output[len(SUBJECT_PREFIX) :].strip("\n")
    if not common_name:
        raise SubjectFormatError(f"Certificate subject has no common name: {subject_output!r}")
    return common_name


def read_subject(cert_path: PathLike, config: Optional[ToolConfig] = None) -> str:
    """Return the raw subject line of the certificate at ``cert_path``."""
    config = resolve_config(config)
    cmd = [config.openssl_bin, "x509", "-noout", "-subject", "-in", str(cert_path)]
    return run_tool(cmd, config)


def find_trusted_cert(
    cert_path: PathLike, home_dir: PathLike, config: Optional[ToolConfig] = None
) -> None:
    """Check whether the certificate is already in the login keychain.

    Returns normally when a certificate with the same common name is present.

    Raises:
        CertificateNotFoundError: If the keychain has no matching certificate
        CommandError: If inspection or lookup fails for any other reason
        SubjectFormatError: If the certificate subject cannot be parsed
    """
    config = resolve_config(config)
    common_name = parse_common_name(read_subject(cert_path, config))
    keychain = login_keychain_path(home_dir)
    try:
        run_security("find-certificate", ["-c", common_name, "-m", str(keychain)], config)
    except CommandError as exc:
        if NOT_FOUND_MESSAGE in exc.output:
            raise CertificateNotFoundError(exc.output) from exc
        raise


def insert_trusted_cert(
    cert_path: PathLike, home_dir: PathLike, config: Optional[ToolConfig] = None
) -> str:
    """Add the certificate to the login keychain as trusted for SSL.

    Hostname mismatches are tolerated by the added trust setting.

    Raises:
        CommandError: With the tool output if the insertion fails
    """
    keychain = login_keychain_path(home_dir)
    args = [
        "-p",
        Policy.SSL.value,
        "-e",
        AllowedError.HOSTNAME_MISMATCH.value,
        "-k",
        str(keychain),
        str(cert_path),
    ]
    return run_security(ADD_TRUSTED_CERT, args, config)


class TrustStoreClient(Protocol):
    """Lookup and insertion operations against a trust store."""

    def lookup(self, cert_path: PathLike, home_dir: PathLike) -> None:
        """Return if present, raise CertificateNotFoundError if absent."""
        ...

    def insert(self, cert_path: PathLike, home_dir: PathLike) -> str:
        """Add the certificate and return the tool output."""
        ...


class SecurityTrustStore:
    """Trust store client backed by the ``security`` and ``openssl`` tools."""

    def __init__(self, config: Optional[ToolConfig] = None) -> None:
        """Initialize with an optional tool configuration."""
        self.config = config

    def lookup(self, cert_path: PathLike, home_dir: PathLike) -> None:
        """See ``find_trusted_cert``."""
        find_trusted_cert(cert_path, home_dir, self.config)

    def insert(self, cert_path: PathLike, home_dir: PathLike) -> str:
        """See ``insert_trusted_cert``."""
        return insert_trusted_cert(cert_path, home_dir, self.config)
