"""
Object Store Interface

Contract for the object store client the connection manager drives.
Adapters implement it for a concrete protocol (S3 via boto3).
"""

from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from ...core.secrets import StoredCredentials


@dataclass
class FileEntry:
    """A listed remote object."""
    key: str
    size: int
    last_modified: str
    storage_class: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class FilePage:
    """One bounded page of listing results."""
    files: List[FileEntry] = field(default_factory=list)
    next_cursor: Optional[str] = None


class ObjectStoreClient(ABC):
    """
    Base class for object store clients.

    A client is bound to one configuration (bucket, region, credentials,
    optional endpoint) for its whole life. Construction must not contact
    the remote service; bad credentials surface on the first real call.
    All failures are raised as RemoteOperationError.
    """

    adapter_type: str = "base"

    def __init__(self, config: StoredCredentials):
        self.config = config

    @property
    def bucket(self) -> str:
        return self.config.bucket_name

    @abstractmethod
    async def list_objects(
        self,
        prefix: Optional[str] = None,
        limit: int = 1000,
        cursor: Optional[str] = None
    ) -> FilePage:
        """List up to ``limit`` objects, optionally under ``prefix``."""
        pass

    @abstractmethod
    async def get_object(self, key: str) -> bytes:
        """Fetch an object's full body."""
        pass

    @abstractmethod
    async def put_object(self, key: str, data: bytes) -> None:
        """Create or overwrite an object."""
        pass

    @abstractmethod
    async def delete_object(self, key: str) -> None:
        """Delete one object."""
        pass

    @abstractmethod
    async def copy_object(self, source_key: str, dest_key: str) -> None:
        """Server-side copy within the bucket."""
        pass

    @abstractmethod
    async def delete_objects(self, keys: List[str]) -> None:
        """Delete several objects in one request (at most 1000 keys)."""
        pass
