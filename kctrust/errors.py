"""Exceptions raised by kctrust operations."""


class TrustError(Exception):
    """Base class for all kctrust errors."""


class UnsupportedFieldTypeError(TrustError):
    """Raised when an option field has a kind the marshaler cannot render."""


class CommandError(TrustError):
    """Raised when an external tool exits with a non-zero status.

    The captured combined output of the tool is the only detail; it is kept
    verbatim on ``output`` and used as the exception message.
    """

    def __init__(self, output: str) -> None:
        """Initialize with the raw captured tool output."""
        super().__init__(output)
        self.output = output


class CertificateNotFoundError(CommandError):
    """Raised when the keychain reports that no matching certificate exists."""


class SubjectFormatError(TrustError):
    """Raised when certificate subject text does not have the expected shape."""
