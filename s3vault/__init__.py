"""
S3 Vault

Remembers one set of S3 connection credentials (system keyring, with an
obfuscated file fallback) and keeps one active, serialized connection to
an S3-compatible bucket.
"""

from .core.secrets import CredentialVault, StoredCredentials
from .services.storage import ConnectionManager, FileEntry

__version__ = "0.1.0"

__all__ = [
    "CredentialVault",
    "StoredCredentials",
    "ConnectionManager",
    "FileEntry",
]
