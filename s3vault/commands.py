"""
S3 Vault Commands

The request/response operations a client invokes. Each command raises an
S3VaultError subclass on failure; presentation is left to the caller
(see server.py).

Usage:
    from s3vault.commands import commands

    await commands.connect(StoredCredentials(...))
    files = await commands.list_files("logs/")
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional

from .core.secrets import CredentialVault, StoredCredentials
from .services.storage import ConnectionManager, FileEntry

logger = logging.getLogger(__name__)


class Commands:
    """Binds one credential vault to one connection manager."""

    def __init__(
        self,
        vault: Optional[CredentialVault] = None,
        manager: Optional[ConnectionManager] = None
    ):
        self.vault = vault or CredentialVault()
        self.manager = manager or ConnectionManager()

    async def connect(self, config: StoredCredentials) -> None:
        """
        Connect, then remember the configuration for auto-connect.

        A connect failure skips persistence. A persistence failure is
        raised but leaves the new connection active.
        """
        await self.manager.connect(config)
        await asyncio.to_thread(self.vault.save, config)

    async def list_files(self, prefix: Optional[str] = None) -> List[FileEntry]:
        return await self.manager.list_files(prefix)

    async def download_file(self, key: str) -> bytes:
        return await self.manager.download_file(key)

    async def upload_file(self, key: str, data: bytes) -> None:
        await self.manager.upload_file(key, data)

    async def delete_file(self, key: str) -> None:
        await self.manager.delete_file(key)

    async def create_folder(self, name: str) -> str:
        return await self.manager.create_folder(name)

    async def rename_file(self, old_key: str, new_key: str) -> None:
        await self.manager.rename_file(old_key, new_key)

    async def rename_folder(self, old_prefix: str, new_prefix: str) -> int:
        return await self.manager.rename_folder(old_prefix, new_prefix)

    async def delete_folder(self, prefix: str) -> int:
        return await self.manager.delete_folder(prefix)

    async def load_saved_credentials(self) -> Optional[StoredCredentials]:
        return await asyncio.to_thread(self.vault.load)

    async def clear_credentials(self) -> None:
        await asyncio.to_thread(self.vault.delete)

    async def auto_connect(self) -> bool:
        """Connect with saved credentials. Returns False when none are stored."""
        creds = await self.load_saved_credentials()
        if creds is None:
            logger.info("No saved credentials, staying disconnected")
            return False

        await self.manager.connect(creds)
        return True

    async def connection_status(self) -> Dict[str, Any]:
        """Describe the active connection without exposing secrets."""
        config = await self.manager.current_config()
        if config is None:
            return {"connected": False}
        return {
            "connected": True,
            "bucket_name": config.bucket_name,
            "region": config.region,
            "endpoint_url": config.endpoint_url,
        }


# Singleton instance
commands = Commands()
