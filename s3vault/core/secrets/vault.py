"""
Credential Vault

Unifies the system keyring and the fallback file behind one save/load/
delete contract for the single stored credential record.

Policy:
    - The keyring is preferred whenever it is reachable.
    - When the keyring is unavailable, the file store is used instead.
    - A successful keyring write removes any file record, so the keyring
      copy always wins and no stale duplicate remains.

Usage:
    from s3vault.core.secrets import CredentialVault

    vault = CredentialVault()
    vault.save(creds)
    creds = vault.load()  # None when nothing is stored
"""

import logging
from typing import List, Optional

from .backends import FileBackend, SystemKeyringBackend
from .interface import CredentialBackend, StoredCredentials
from ...errors import AggregateError, BackendUnavailableError, NotFoundError, S3VaultError

logger = logging.getLogger(__name__)


class CredentialVault:
    """
    Single-slot credential persistence with keyring-to-file fallback.

    The vault holds no mutable state of its own; concurrent callers race at
    the backend level with last-write-wins semantics.
    """

    def __init__(
        self,
        primary: Optional[CredentialBackend] = None,
        secondary: Optional[CredentialBackend] = None
    ):
        self.primary = primary or SystemKeyringBackend()
        self.secondary = secondary or FileBackend()

    def save(self, creds: StoredCredentials) -> None:
        """
        Persist credentials, preferring the keyring.

        Raises:
            SerializationError: If the record cannot be encoded
            StorageIOError: If the fallback file cannot be written
            SecretStoreError: If the keyring rejects the write
        """
        try:
            self.primary.save(creds)
        except BackendUnavailableError as e:
            logger.warning(f"Keyring unavailable, using file storage: {e}")
            self.secondary.save(creds)
            return

        self._discard_secondary()

    def _discard_secondary(self) -> None:
        """Remove the fallback record after a keyring write. Never raises."""
        try:
            self.secondary.delete()
        except NotFoundError:
            pass
        except S3VaultError as e:
            logger.warning(f"Could not remove stale fallback credentials: {e}")

    def load(self) -> Optional[StoredCredentials]:
        """
        Load credentials, or None when nothing is stored.

        Raises:
            SerializationError: If a stored record is corrupt
            StorageIOError: If the fallback file cannot be read
            SecretStoreError: If the keyring read fails for another reason
        """
        try:
            return self.primary.load()
        except NotFoundError:
            pass
        except BackendUnavailableError as e:
            logger.info(f"Keyring unavailable, reading file storage: {e}")

        try:
            return self.secondary.load()
        except NotFoundError:
            return None

    def delete(self) -> None:
        """
        Delete credentials from both stores.

        Both deletions are always attempted. Missing records are not errors.

        Raises:
            AggregateError: Carrying every failure from either store
        """
        errors: List[S3VaultError] = []

        for backend in (self.primary, self.secondary):
            try:
                backend.delete()
            except (NotFoundError, BackendUnavailableError):
                continue
            except S3VaultError as e:
                logger.error(f"❌ Failed to delete credentials from {backend.backend_type}: {e}")
                errors.append(e)

        if errors:
            raise AggregateError(errors)
