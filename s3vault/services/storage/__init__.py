"""Storage Service - single S3 connection with serialized operations."""

from .interface import FileEntry, FilePage, ObjectStoreClient
from .manager import Connection, ConnectionManager
from .adapters.s3 import S3Adapter

__all__ = [
    "ObjectStoreClient",
    "FileEntry",
    "FilePage",
    "Connection",
    "ConnectionManager",
    "S3Adapter",
]
