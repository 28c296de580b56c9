"""In-memory keyrings and a fake object store for tests."""

import asyncio
from typing import Dict, List, Optional

from keyring.backend import KeyringBackend
from keyring.errors import KeyringLocked, NoKeyringError, PasswordDeleteError

from s3vault.core.secrets import StoredCredentials
from s3vault.errors import RemoteOperationError
from s3vault.services.storage import FileEntry, FilePage, ObjectStoreClient


class InMemoryKeyring(KeyringBackend):
    """Keyring that keeps entries in a dict."""

    priority = 1

    def __init__(self):
        super().__init__()
        self.entries: Dict[tuple, str] = {}

    def set_password(self, service, username, password):
        self.entries[(service, username)] = password

    def get_password(self, service, username):
        return self.entries.get((service, username))

    def delete_password(self, service, username):
        try:
            del self.entries[(service, username)]
        except KeyError:
            raise PasswordDeleteError("Password not found")


class UnavailableKeyring(KeyringBackend):
    """Keyring with no reachable secret service."""

    priority = 1

    def set_password(self, service, username, password):
        raise NoKeyringError("No recommended backend was available")

    def get_password(self, service, username):
        raise NoKeyringError("No recommended backend was available")

    def delete_password(self, service, username):
        raise NoKeyringError("No recommended backend was available")


class LockedKeyring(KeyringBackend):
    """Keyring that is reachable but refuses every operation."""

    priority = 1

    def set_password(self, service, username, password):
        raise KeyringLocked("keyring is locked")

    def get_password(self, service, username):
        raise KeyringLocked("keyring is locked")

    def delete_password(self, service, username):
        raise KeyringLocked("keyring is locked")


class FakeObjectStore(ObjectStoreClient):
    """In-memory object store that records every call."""

    adapter_type = "fake"

    def __init__(self, config: StoredCredentials, objects: Optional[Dict[str, bytes]] = None):
        super().__init__(config)
        self.objects: Dict[str, bytes] = dict(objects or {})
        self.calls: List[tuple] = []
        self.fail_with: Optional[str] = None
        # restricts fail_with to calls whose first argument is this key
        self.fail_key: Optional[str] = None
        self.delay = 0.01
        self.active = 0
        self.max_active = 0

    async def _enter(self, *call):
        self.calls.append(call)
        self.active += 1
        self.max_active = max(self.max_active, self.active)
        try:
            await asyncio.sleep(self.delay)
            if self._should_fail(call):
                raise RemoteOperationError(f"{call[0]} failed: AccessDenied", operation=call[0])
        finally:
            self.active -= 1

    def _should_fail(self, call):
        if not self.fail_with or call[0] != self.fail_with:
            return False
        return self.fail_key is None or call[1] == self.fail_key

    async def list_objects(self, prefix=None, limit=1000, cursor=None):
        await self._enter("list", prefix, limit, cursor)
        # cursor is the last key of the previous page, like StartAfter
        keys = sorted(
            k for k in self.objects
            if (not prefix or k.startswith(prefix)) and (cursor is None or k > cursor)
        )
        chunk = keys[:limit]
        next_cursor = chunk[-1] if len(keys) > limit else None
        files = [
            FileEntry(key=k, size=len(self.objects[k]), last_modified="2024-01-01T00:00:00+00:00")
            for k in chunk
        ]
        return FilePage(files=files, next_cursor=next_cursor)

    async def get_object(self, key):
        await self._enter("get", key)
        return self.objects[key]

    async def put_object(self, key, data):
        await self._enter("put", key)
        self.objects[key] = data

    async def delete_object(self, key):
        await self._enter("delete", key)
        self.objects.pop(key, None)

    async def copy_object(self, source_key, dest_key):
        await self._enter("copy", source_key, dest_key)
        self.objects[dest_key] = self.objects[source_key]

    async def delete_objects(self, keys):
        await self._enter("delete_many", tuple(keys))
        for key in keys:
            self.objects.pop(key, None)


class FakeStoreFactory:
    """Client factory that remembers every client it built."""

    def __init__(self, objects: Optional[Dict[str, bytes]] = None):
        self.objects = objects
        self.clients: List[FakeObjectStore] = []

    def __call__(self, config: StoredCredentials) -> FakeObjectStore:
        client = FakeObjectStore(config, self.objects)
        self.clients.append(client)
        return client
