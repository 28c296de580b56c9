"""
S3 Vault Errors

Typed exceptions shared by the credential vault, the connection manager
and the command layer. Backend adapters translate library errors into
these kinds so callers branch on the class, never on message text.
"""

from typing import Dict, List, Optional


class S3VaultError(Exception):
    """Base exception for all S3 Vault errors."""

    def __init__(self, message: str, details: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


class NotConnectedError(S3VaultError):
    """Raised when a storage operation runs without an active connection."""

    def __init__(self, message: str = "Not connected to S3"):
        super().__init__(message)


class BackendUnavailableError(S3VaultError):
    """
    Raised when the primary secret store cannot be reached.

    Covers both a secret service that is not running and a platform with
    no keyring integration at all. The vault recovers from this by
    switching to the file store; it never reaches the caller.
    """
    pass


class NotFoundError(S3VaultError):
    """Raised by a backend when no credential record exists."""

    def __init__(self, message: str = "No stored credentials"):
        super().__init__(message)


class SerializationError(S3VaultError):
    """Raised when a credential record cannot be encoded or decoded."""
    pass


class StorageIOError(S3VaultError):
    """Raised when the fallback credential file cannot be read or written."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message, {"path": path} if path else None)
        self.path = path


class SecretStoreError(S3VaultError):
    """Raised for primary secret store failures other than unavailability."""
    pass


class RemoteOperationError(S3VaultError):
    """
    Raised when the object store client fails.

    The underlying exception is chained as ``__cause__`` and its text is
    kept unmodified in the message.
    """

    def __init__(self, message: str, operation: Optional[str] = None, key: Optional[str] = None):
        details = {}
        if operation:
            details["operation"] = operation
        if key:
            details["key"] = key
        super().__init__(message, details)
        self.operation = operation
        self.key = key


class AggregateError(S3VaultError):
    """Raised by vault deletion when one or more backends failed."""

    def __init__(self, errors: List[S3VaultError]):
        super().__init__(", ".join(str(e) for e in errors))
        self.errors = list(errors)


__all__ = [
    "S3VaultError",
    "NotConnectedError",
    "BackendUnavailableError",
    "NotFoundError",
    "SerializationError",
    "StorageIOError",
    "SecretStoreError",
    "RemoteOperationError",
    "AggregateError",
]
