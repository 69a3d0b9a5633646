"""Idempotent "ensure this certificate is trusted" workflow."""

import os
import tempfile
from pathlib import Path
from typing import Callable, Optional, Union

from .errors import CertificateNotFoundError
from .keychain import SecurityTrustStore, TrustStoreClient

HomeResolver = Callable[[], Union[str, Path]]


class TrustWorkflow:
    """Add a certificate to the login keychain only when it is absent.

    The lookup and the insertion are separate tool runs, so another process
    may change the keychain in between. No lock is held.
    """

    def __init__(
        self,
        client: Optional[TrustStoreClient] = None,
        home_resolver: Optional[HomeResolver] = None,
    ) -> None:
        """Initialize the workflow.

        Args:
            client: Trust store client (defaults to the ``security`` tool)
            home_resolver: Returns the current user's home directory
        """
        self.client: TrustStoreClient = client if client is not None else SecurityTrustStore()
        self.home_resolver: HomeResolver = home_resolver if home_resolver is not None else Path.home

    def ensure_trusted(self, certificate: Union[str, bytes]) -> bool:
        """Make sure ``certificate`` is trusted in the login keychain.

        Args:
            certificate: PEM certificate contents

        Returns:
            True if the certificate was added, False if it was already present

        Raises:
            CommandError: If inspection, lookup or insertion fails
            SubjectFormatError: If the certificate subject cannot be parsed
            OSError: If the temporary file cannot be written
            RuntimeError: If the home directory cannot be resolved
        """
        data = certificate.encode("utf-8") if isinstance(certificate, str) else certificate

        temp_file: Optional[str] = None
        try:
            with tempfile.NamedTemporaryFile(suffix=".pem", delete=False) as fh:
                temp_file = fh.name
                fh.write(data)

            home_dir = self.home_resolver()

            try:
                self.client.lookup(temp_file, home_dir)
            except CertificateNotFoundError:
                pass
            else:
                return False

            self.client.insert(temp_file, home_dir)
            return True
        finally:
            if temp_file and os.path.exists(temp_file):
                os.remove(temp_file)


def ensure_trusted(
    certificate: Union[str, bytes], client: Optional[TrustStoreClient] = None
) -> bool:
    """Run the ensure-trusted workflow with default wiring."""
    return TrustWorkflow(client=client).ensure_trusted(certificate)
