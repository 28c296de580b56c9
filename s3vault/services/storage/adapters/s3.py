"""
S3 Object Store Adapter

Implements ObjectStoreClient for AWS S3 and S3-compatible providers
(Linode, DigitalOcean Spaces, MinIO, ...) using boto3.
"""

import asyncio
import logging
from typing import Any, Callable, Dict, List, Optional

import boto3
from botocore.client import Config
from botocore.exceptions import BotoCoreError, ClientError

from ..interface import FileEntry, FilePage, ObjectStoreClient
from ....config import LIST_MAX_KEYS
from ....core.secrets import StoredCredentials
from ....errors import RemoteOperationError

logger = logging.getLogger(__name__)

REMOTE_ERRORS = (BotoCoreError, ClientError)


def build_boto3_client(config: StoredCredentials):
    """Create a boto3 S3 client with static credentials. No network I/O."""
    client_kwargs: Dict[str, Any] = {
        "config": Config(signature_version="s3v4"),
        "region_name": config.region,
        "aws_access_key_id": config.access_key_id,
        "aws_secret_access_key": config.secret_access_key,
    }
    if config.endpoint_url:
        client_kwargs["endpoint_url"] = config.endpoint_url
    session = boto3.session.Session()
    return session.client("s3", **client_kwargs)


def parse_entry(obj: Dict[str, Any]) -> Optional[FileEntry]:
    """Convert a ListObjectsV2 item, or None when a required field is missing."""
    key = obj.get("Key")
    size = obj.get("Size")
    last_modified = obj.get("LastModified")
    if key is None or size is None or last_modified is None:
        return None

    if hasattr(last_modified, "isoformat"):
        last_modified = last_modified.isoformat()

    return FileEntry(
        key=key,
        size=int(size),
        last_modified=str(last_modified),
        storage_class=obj.get("StorageClass"),
    )


class S3Adapter(ObjectStoreClient):
    """S3 client bound to one bucket configuration."""

    adapter_type = "s3"

    def __init__(
        self,
        config: StoredCredentials,
        client_factory: Callable[[StoredCredentials], Any] = build_boto3_client
    ):
        super().__init__(config)
        try:
            self._client = client_factory(config)
        except (BotoCoreError, ValueError) as e:
            raise RemoteOperationError(f"Failed to create S3 client: {e}", operation="connect") from e
        logger.info(
            f"✅ S3 client ready: bucket={config.bucket_name} region={config.region}"
            + (f" endpoint={config.endpoint_url}" if config.endpoint_url else "")
        )

    async def _call(self, operation: str, key: Optional[str], method: str, **params) -> Any:
        """Run a blocking boto3 call in a worker thread, translating failures."""
        try:
            return await asyncio.to_thread(getattr(self._client, method), **params)
        except REMOTE_ERRORS as e:
            logger.error(f"❌ S3 {operation} failed: {e}")
            raise RemoteOperationError(str(e), operation=operation, key=key) from e

    async def list_objects(
        self,
        prefix: Optional[str] = None,
        limit: int = LIST_MAX_KEYS,
        cursor: Optional[str] = None
    ) -> FilePage:
        """List one page of objects; entries missing key/size/date are skipped."""
        params: Dict[str, Any] = {"Bucket": self.bucket, "MaxKeys": min(limit, LIST_MAX_KEYS)}
        if prefix:
            params["Prefix"] = prefix
        if cursor:
            params["ContinuationToken"] = cursor

        response = await self._call("list", prefix, "list_objects_v2", **params)

        files = []
        for obj in response.get("Contents", []):
            entry = parse_entry(obj)
            if entry is None:
                logger.debug(f"Skipping incomplete listing entry: {obj.get('Key')!r}")
                continue
            files.append(entry)

        next_cursor = response.get("NextContinuationToken") if response.get("IsTruncated") else None
        return FilePage(files=files, next_cursor=next_cursor)

    async def get_object(self, key: str) -> bytes:
        response = await self._call("download", key, "get_object", Bucket=self.bucket, Key=key)
        body = response["Body"]
        try:
            return await asyncio.to_thread(body.read)
        except REMOTE_ERRORS as e:
            raise RemoteOperationError(str(e), operation="download", key=key) from e
        finally:
            body.close()

    async def put_object(self, key: str, data: bytes) -> None:
        await self._call("upload", key, "put_object", Bucket=self.bucket, Key=key, Body=data)

    async def delete_object(self, key: str) -> None:
        await self._call("delete", key, "delete_object", Bucket=self.bucket, Key=key)

    async def copy_object(self, source_key: str, dest_key: str) -> None:
        await self._call(
            "copy",
            source_key,
            "copy_object",
            Bucket=self.bucket,
            Key=dest_key,
            # botocore percent-encodes the key itself
            CopySource={"Bucket": self.bucket, "Key": source_key},
        )

    async def delete_objects(self, keys: List[str]) -> None:
        if not keys:
            return
        response = await self._call(
            "delete",
            None,
            "delete_objects",
            Bucket=self.bucket,
            Delete={"Objects": [{"Key": k} for k in keys], "Quiet": True},
        )
        failed = response.get("Errors") or []
        if failed:
            first = failed[0]
            raise RemoteOperationError(
                f"Failed to delete {len(failed)} object(s): {first.get('Key')}: {first.get('Message')}",
                operation="delete",
                key=first.get("Key"),
            )
