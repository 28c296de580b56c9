"""
File Credentials Backend

Fallback store used when the system keyring is unavailable. Keeps one
record in a per-user file, XOR-obfuscated with a fixed byte.

The obfuscation only deters casual inspection; it is not encryption.
The key byte is shared by every installation and must not change without
a migration, or existing files become unreadable.
"""

import logging
import os
from pathlib import Path
from typing import Optional

from ..interface import CredentialBackend, StoredCredentials
from ....config import FALLBACK_FILE_MODE, XOR_KEY, get_fallback_path
from ....errors import NotFoundError, SerializationError, StorageIOError

logger = logging.getLogger(__name__)


def obfuscate(data: bytes, key: int = XOR_KEY) -> bytes:
    """XOR every byte with ``key``. Applying it twice returns the input."""
    return bytes(b ^ key for b in data)


class FileBackend(CredentialBackend):
    """
    Obfuscated single-file credential backend.

    Config:
        path: Location of the credential file (default: resolved per user)
    """

    backend_type = "file"

    def __init__(self, path: Optional[Path] = None):
        self._path = path

    @property
    def path(self) -> Path:
        # Resolved lazily so environment changes after import are honoured
        return self._path or get_fallback_path()

    def save(self, creds: StoredCredentials) -> None:
        """Write the obfuscated record and restrict it to the owner."""
        path = self.path
        payload = obfuscate(creds.to_json().encode("utf-8"))

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(payload)
        except OSError as e:
            raise StorageIOError(f"Failed to write credentials file: {e}", path=str(path)) from e

        self._restrict_permissions(path)
        logger.info(f"Saved credentials to file store: {path}")

    def load(self) -> StoredCredentials:
        """Read and decode the record."""
        path = self.path
        if not path.exists():
            raise NotFoundError(f"No credentials file at {path}")

        try:
            raw = path.read_bytes()
        except OSError as e:
            raise StorageIOError(f"Failed to read credentials file: {e}", path=str(path)) from e

        try:
            text = obfuscate(raw).decode("utf-8")
        except UnicodeDecodeError as e:
            raise SerializationError(f"Corrupt credentials file {path}: {e}") from e

        return StoredCredentials.from_json(text)

    def delete(self) -> None:
        """Remove the credentials file."""
        path = self.path
        if not path.exists():
            raise NotFoundError(f"No credentials file at {path}")

        try:
            path.unlink()
        except FileNotFoundError as e:
            raise NotFoundError(f"No credentials file at {path}") from e
        except OSError as e:
            raise StorageIOError(f"Failed to delete credentials file: {e}", path=str(path)) from e

        logger.info(f"Deleted credentials file: {path}")

    def _restrict_permissions(self, path: Path) -> None:
        if os.name != "posix":
            return
        try:
            os.chmod(path, FALLBACK_FILE_MODE)
        except OSError as e:
            logger.debug(f"Could not restrict permissions on {path}: {e}")
