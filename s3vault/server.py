"""
S3 Vault MCP Server

Exposes the S3 Vault commands as MCP tools:
- Connection: connect, auto-connect, status
- Files: list, download, upload, delete, rename
- Folders: create, rename, delete
- Credentials: load, clear

Binary payloads travel as base64 text. Tools never raise; failures come
back as "❌ ..." messages.
"""

import base64
import binascii
import logging
import os
from typing import Optional

from fastmcp import FastMCP

from .commands import commands
from .config import DEFAULT_HOST, DEFAULT_PORT, HOST_ENV, PORT_ENV
from .core.secrets import StoredCredentials
from .errors import S3VaultError
from .logging_config import configure_logging

logger = logging.getLogger(__name__)

mcp = FastMCP("S3 Vault")


def _failure(action: str, e: Exception) -> str:
    if isinstance(e, S3VaultError):
        return f"❌ {action} failed: {e}"
    logger.exception(f"Unexpected error during {action.lower()}")
    return f"❌ Unexpected error: {e}"


def _format_size(size: int) -> str:
    for unit in ("B", "KB", "MB", "GB"):
        if size < 1024 or unit == "GB":
            return f"{size} {unit}" if unit == "B" else f"{size:.1f} {unit}"
        size /= 1024
    return f"{size} B"


# =============================================================================
# HEALTH
# =============================================================================
async def ping() -> str:
    """Health check. Returns pong if the S3 Vault server is running."""
    return "pong from S3 Vault 🪣"


# =============================================================================
# CONNECTION TOOLS
# =============================================================================
async def s3_connect(
    access_key_id: str,
    secret_access_key: str,
    region: str,
    bucket_name: str,
    endpoint_url: Optional[str] = None
) -> str:
    """
    Connect to an S3 bucket and remember the credentials.

    Args:
        access_key_id: Access key ID
        secret_access_key: Secret access key
        region: Bucket region (e.g., "us-east-1")
        bucket_name: Bucket to work with
        endpoint_url: Custom endpoint for S3-compatible providers (optional)

    Returns:
        Success or error message
    """
    config = StoredCredentials(
        access_key_id=access_key_id,
        secret_access_key=secret_access_key,
        region=region,
        bucket_name=bucket_name,
        endpoint_url=endpoint_url or None,
    )
    try:
        await commands.connect(config)
    except S3VaultError as e:
        if await commands.manager.current_config() is config:
            return f"⚠️ Connected to {bucket_name}, but credentials were not saved: {e}"
        return _failure("Connect", e)
    except Exception as e:
        return _failure("Connect", e)
    return f"✅ Connected: {bucket_name} ({region})"


async def s3_auto_connect() -> str:
    """
    Connect using saved credentials, if any.

    Returns:
        Whether a connection was made, or an error message
    """
    try:
        connected = await commands.auto_connect()
    except Exception as e:
        return _failure("Auto-connect", e)
    if not connected:
        return "⚪ No saved credentials"
    status = await commands.connection_status()
    return f"✅ Connected: {status['bucket_name']} ({status['region']})"


async def s3_status() -> str:
    """Show the active connection (bucket, region, endpoint)."""
    status = await commands.connection_status()
    if not status["connected"]:
        return "⚪ Not connected"
    lines = [f"🟢 {status['bucket_name']} ({status['region']})"]
    if status.get("endpoint_url"):
        lines.append(f"   Endpoint: {status['endpoint_url']}")
    return "\n".join(lines)


# =============================================================================
# FILE TOOLS
# =============================================================================
async def s3_list(prefix: Optional[str] = None) -> str:
    """
    List objects in the connected bucket (first 1000 only).

    Args:
        prefix: Only list keys starting with this prefix (optional)

    Returns:
        Formatted listing of objects
    """
    try:
        files = await commands.list_files(prefix)
    except Exception as e:
        return _failure("List", e)

    header = f"📂 {prefix or '/'}\n" + "─" * 40
    if not files:
        return f"{header}\n(empty)"

    items = []
    for f in files:
        if f.key.endswith("/"):
            items.append(f"📁 {f.key}")
            continue
        line = f"📄 {f.key} ({_format_size(f.size)}, {f.last_modified}"
        if f.storage_class:
            line += f", {f.storage_class}"
        items.append(line + ")")
    return f"{header}\n" + "\n".join(items)


async def s3_download(key: str) -> str:
    """
    Download an object.

    Args:
        key: Object key

    Returns:
        Object content as base64 text, or error message
    """
    try:
        data = await commands.download_file(key)
    except Exception as e:
        return _failure("Download", e)
    return base64.b64encode(data).decode("ascii")


async def s3_upload(key: str, data_base64: str) -> str:
    """
    Upload an object, replacing any existing one.

    Args:
        key: Object key
        data_base64: Content encoded as base64

    Returns:
        Success message with bytes written
    """
    try:
        data = base64.b64decode(data_base64, validate=True)
    except (binascii.Error, ValueError) as e:
        return f"❌ Invalid base64 data: {e}"

    try:
        await commands.upload_file(key, data)
    except Exception as e:
        return _failure("Upload", e)
    return f"✅ Uploaded: {key} ({len(data)} bytes)"


async def s3_delete(key: str) -> str:
    """
    Delete an object.

    Args:
        key: Object key
    """
    try:
        await commands.delete_file(key)
    except Exception as e:
        return _failure("Delete", e)
    return f"✅ Deleted: {key}"


async def s3_rename(old_key: str, new_key: str) -> str:
    """
    Rename an object (copy, then delete the original).

    Args:
        old_key: Current key
        new_key: New key
    """
    try:
        await commands.rename_file(old_key, new_key)
    except Exception as e:
        return _failure("Rename", e)
    return f"✅ Renamed: {old_key} → {new_key}"


# =============================================================================
# FOLDER TOOLS
# =============================================================================
async def s3_create_folder(name: str) -> str:
    """
    Create a folder (an empty object whose key ends with "/").

    Args:
        name: Folder key, with or without trailing slash
    """
    try:
        key = await commands.create_folder(name)
    except Exception as e:
        return _failure("Create folder", e)
    return f"✅ Created folder: {key}"


async def s3_rename_folder(old_prefix: str, new_prefix: str) -> str:
    """
    Move every object under a prefix to a new prefix.

    Args:
        old_prefix: Current folder prefix (e.g., "logs/")
        new_prefix: New folder prefix (e.g., "archive/logs/")
    """
    try:
        count = await commands.rename_folder(old_prefix, new_prefix)
    except Exception as e:
        return _failure("Rename folder", e)
    return f"✅ Renamed folder: {old_prefix} → {new_prefix} ({count} objects)"


async def s3_delete_folder(prefix: str) -> str:
    """
    Delete every object under a prefix.

    Args:
        prefix: Folder prefix (e.g., "logs/")
    """
    try:
        count = await commands.delete_folder(prefix)
    except Exception as e:
        return _failure("Delete folder", e)
    return f"✅ Deleted folder: {prefix} ({count} objects)"


# =============================================================================
# CREDENTIAL TOOLS
# =============================================================================
async def credentials_load() -> str:
    """
    Return the saved credentials as JSON, or a notice if none are saved.
    """
    try:
        creds = await commands.load_saved_credentials()
    except Exception as e:
        return _failure("Load credentials", e)
    if creds is None:
        return "⚪ No saved credentials"
    return creds.to_json()


async def credentials_clear() -> str:
    """Forget the saved credentials (keyring and fallback file)."""
    try:
        await commands.clear_credentials()
    except Exception as e:
        return _failure("Clear credentials", e)
    return "✅ Credentials cleared"


TOOLS = [
    ping,
    s3_connect,
    s3_auto_connect,
    s3_status,
    s3_list,
    s3_download,
    s3_upload,
    s3_delete,
    s3_rename,
    s3_create_folder,
    s3_rename_folder,
    s3_delete_folder,
    credentials_load,
    credentials_clear,
]

for _tool in TOOLS:
    mcp.tool(_tool)


# =============================================================================
# MAIN
# =============================================================================
def main() -> None:
    configure_logging()
    host = os.getenv(HOST_ENV, DEFAULT_HOST)
    port = int(os.getenv(PORT_ENV, str(DEFAULT_PORT)))
    logger.info(f"Starting S3 Vault MCP server on {host}:{port}")
    mcp.run(transport="http", host=host, port=port)


if __name__ == "__main__":
    main()
