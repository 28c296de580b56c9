"""
System Keyring Credentials Backend

Implements CredentialBackend on top of the platform keyring
(macOS Keychain, Windows Credential Manager, Secret Service on Linux)
via the ``keyring`` package.
"""

import logging
from typing import Optional

import keyring
from keyring.backend import KeyringBackend
from keyring.errors import InitError, KeyringError, NoKeyringError

from ..interface import CredentialBackend, StoredCredentials
from ....config import CREDENTIALS_KEY, SERVICE_NAME
from ....errors import BackendUnavailableError, NotFoundError, SecretStoreError

logger = logging.getLogger(__name__)

# Raised when there is no usable keyring or its service is not running
UNAVAILABLE_ERRORS = (NoKeyringError, InitError)


class SystemKeyringBackend(CredentialBackend):
    """
    Platform keyring backend.

    Config:
        service: Keyring service name (default: "s3-vault")
        key: Keyring username/key (default: "aws-credentials")
        keyring_impl: Explicit keyring backend instance; the process-wide
                      default keyring is used when omitted
    """

    backend_type = "keyring"

    def __init__(
        self,
        service: str = SERVICE_NAME,
        key: str = CREDENTIALS_KEY,
        keyring_impl: Optional[KeyringBackend] = None
    ):
        self.service = service
        self.key = key
        self._keyring = keyring_impl

    def _impl(self):
        if self._keyring is not None:
            return self._keyring
        try:
            return keyring.get_keyring()
        except KeyringError as e:
            raise BackendUnavailableError(f"System keyring unavailable: {e}") from e

    def _classify(self, e: KeyringError, action: str) -> Exception:
        if isinstance(e, UNAVAILABLE_ERRORS):
            return BackendUnavailableError(f"System keyring unavailable: {e}")
        return SecretStoreError(f"Failed to {action} keyring entry: {e}")

    def save(self, creds: StoredCredentials) -> None:
        """Store the record as canonical JSON under the fixed identity."""
        payload = creds.to_json()
        try:
            self._impl().set_password(self.service, self.key, payload)
        except KeyringError as e:
            raise self._classify(e, "write") from e
        logger.info(f"Saved credentials to system keyring ({self.service})")

    def load(self) -> StoredCredentials:
        """Read and decode the record."""
        try:
            payload = self._impl().get_password(self.service, self.key)
        except KeyringError as e:
            raise self._classify(e, "read") from e

        if payload is None:
            raise NotFoundError(f"No keyring entry for {self.service}/{self.key}")
        return StoredCredentials.from_json(payload)

    def delete(self) -> None:
        """
        Remove the keyring entry.

        Absence is decided by reading the entry first. Backends also raise
        PasswordDeleteError for refused deletions, so once the entry is
        known to exist that error is a SecretStoreError.
        """
        impl = self._impl()
        try:
            if impl.get_password(self.service, self.key) is None:
                raise NotFoundError(f"No keyring entry for {self.service}/{self.key}")
            impl.delete_password(self.service, self.key)
        except KeyringError as e:
            raise self._classify(e, "delete") from e
        logger.info(f"Deleted credentials from system keyring ({self.service})")
