"""
Connection Manager

Owns the single active object store connection. Every operation, including
connect, holds one asyncio lock for its full duration (network I/O
included), so operations through the manager never overlap.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from .adapters.s3 import S3Adapter
from .interface import FileEntry, ObjectStoreClient
from ...config import LIST_MAX_KEYS
from ...core.secrets import StoredCredentials
from ...errors import NotConnectedError, S3VaultError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Connection:
    """The connected state: the configuration and the client built from it."""
    config: StoredCredentials
    client: ObjectStoreClient


class ConnectionManager:
    """
    Single-slot connection state machine.

    States are Disconnected (no connection) and Connected. ``connect`` is
    the only transition and may be repeated; the previous client is
    dropped in the same assignment that installs the new one.
    """

    def __init__(self, client_factory: Callable[[StoredCredentials], ObjectStoreClient] = S3Adapter):
        self._client_factory = client_factory
        self._connection: Optional[Connection] = None
        self._lock = asyncio.Lock()

    @property
    def is_connected(self) -> bool:
        return self._connection is not None

    def _require(self) -> Connection:
        if self._connection is None:
            raise NotConnectedError()
        return self._connection

    async def current_config(self) -> Optional[StoredCredentials]:
        """Return the active configuration, or None when disconnected."""
        async with self._lock:
            return self._connection.config if self._connection else None

    async def connect(self, config: StoredCredentials) -> None:
        """
        Build a client for ``config`` and make it the active connection.

        No request is sent; invalid credentials show up on the first
        operation.

        Raises:
            RemoteOperationError: If the client cannot be constructed
        """
        async with self._lock:
            client = self._client_factory(config)
            replaced = self._connection is not None
            self._connection = Connection(config=config, client=client)
        logger.info(
            f"✅ Connected to bucket {config.bucket_name}"
            + (" (replaced previous connection)" if replaced else "")
        )

    async def list_files(self, prefix: Optional[str] = None) -> List[FileEntry]:
        """
        List at most 1000 objects, optionally restricted to ``prefix``.

        There is no automatic pagination past the first page.
        """
        async with self._lock:
            conn = self._require()
            page = await conn.client.list_objects(prefix=prefix, limit=LIST_MAX_KEYS)
            return page.files

    async def download_file(self, key: str) -> bytes:
        async with self._lock:
            conn = self._require()
            return await conn.client.get_object(key)

    async def upload_file(self, key: str, data: bytes) -> None:
        async with self._lock:
            conn = self._require()
            await conn.client.put_object(key, data)

    async def delete_file(self, key: str) -> None:
        async with self._lock:
            conn = self._require()
            await conn.client.delete_object(key)

    # Folder and rename helpers

    async def create_folder(self, name: str) -> str:
        """Create a folder marker object and return its key."""
        key = name if name.endswith("/") else f"{name}/"
        async with self._lock:
            conn = self._require()
            await conn.client.put_object(key, b"")
        return key

    async def rename_file(self, old_key: str, new_key: str) -> None:
        """Copy ``old_key`` to ``new_key``, then delete the original."""
        async with self._lock:
            conn = self._require()
            await conn.client.copy_object(old_key, new_key)
            await conn.client.delete_object(old_key)

    async def rename_folder(self, old_prefix: str, new_prefix: str) -> int:
        """
        Move every object under ``old_prefix`` to ``new_prefix``.

        All keys are listed before the first copy, so a destination nested
        inside the source is not visited twice. Each object is copied, then
        its original deleted. A failed copy stops the rename with that
        object and every later one left in place.

        Returns:
            Number of objects moved

        Raises:
            S3VaultError: If ``old_prefix`` is empty or equals ``new_prefix``
        """
        if not old_prefix:
            raise S3VaultError("Refusing to rename an empty prefix (whole bucket)")
        if old_prefix == new_prefix:
            raise S3VaultError(f"Source and destination are the same: {old_prefix!r}")

        moved = 0
        async with self._lock:
            conn = self._require()
            keys = await self._list_all_keys(conn, old_prefix)
            for key in keys:
                new_key = new_prefix + key[len(old_prefix):]
                await conn.client.copy_object(key, new_key)
                await conn.client.delete_object(key)
                moved += 1
        logger.info(f"Renamed {moved} object(s) from {old_prefix!r} to {new_prefix!r}")
        return moved

    async def _list_all_keys(self, conn: Connection, prefix: str) -> List[str]:
        keys: List[str] = []
        cursor = None
        while True:
            page = await conn.client.list_objects(prefix=prefix, limit=LIST_MAX_KEYS, cursor=cursor)
            keys.extend(entry.key for entry in page.files)
            cursor = page.next_cursor
            if not cursor:
                return keys

    async def delete_folder(self, prefix: str) -> int:
        """
        Delete every object under ``prefix``.

        Returns:
            Number of objects deleted

        Raises:
            S3VaultError: If ``prefix`` is empty (the whole bucket)
        """
        if not prefix:
            raise S3VaultError("Refusing to delete an empty prefix (whole bucket)")

        deleted = 0
        async with self._lock:
            conn = self._require()
            cursor = None
            while True:
                page = await conn.client.list_objects(prefix=prefix, limit=LIST_MAX_KEYS, cursor=cursor)
                keys = [entry.key for entry in page.files]
                if keys:
                    await conn.client.delete_objects(keys)
                    deleted += len(keys)
                cursor = page.next_cursor
                if not cursor:
                    break
        logger.info(f"Deleted {deleted} object(s) under {prefix!r}")
        return deleted
