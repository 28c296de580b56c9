"""
Credential Secrets Interface

Defines the stored credential record and the narrow contract both
credential backends implement. The vault composes backends explicitly;
this interface only fixes the shape of save/load/delete.
"""

import json
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass, field
from typing import Optional

from ...errors import SerializationError

_REQUIRED_FIELDS = ("access_key_id", "secret_access_key", "region", "bucket_name")


@dataclass
class StoredCredentials:
    """Connection credentials for one S3-compatible bucket."""
    access_key_id: str
    secret_access_key: str = field(repr=False)
    region: str
    bucket_name: str
    endpoint_url: Optional[str] = None  # only for non-AWS providers

    def to_json(self) -> str:
        """Encode as the canonical compact JSON text."""
        try:
            return json.dumps(asdict(self), separators=(",", ":"))
        except (TypeError, ValueError) as e:
            raise SerializationError(f"Failed to encode credentials: {e}") from e

    @classmethod
    def from_json(cls, text: str) -> "StoredCredentials":
        """
        Decode canonical JSON text.

        Raises:
            SerializationError: If the text is not a well-formed record
        """
        try:
            data = json.loads(text)
        except (TypeError, ValueError) as e:
            raise SerializationError(f"Malformed credential record: {e}") from e

        if not isinstance(data, dict):
            raise SerializationError("Malformed credential record: expected a JSON object")

        missing = [name for name in _REQUIRED_FIELDS if name not in data]
        if missing:
            raise SerializationError(f"Malformed credential record: missing {', '.join(missing)}")

        for name in _REQUIRED_FIELDS:
            if not isinstance(data[name], str):
                raise SerializationError(f"Malformed credential record: {name} must be a string")

        endpoint_url = data.get("endpoint_url")
        if endpoint_url is not None and not isinstance(endpoint_url, str):
            raise SerializationError("Malformed credential record: endpoint_url must be a string")

        return cls(
            access_key_id=data["access_key_id"],
            secret_access_key=data["secret_access_key"],
            region=data["region"],
            bucket_name=data["bucket_name"],
            endpoint_url=endpoint_url,
        )


class CredentialBackend(ABC):
    """
    Abstract base class for credential backends.

    Each backend holds at most one record. Implementations translate their
    library's failures into the S3 Vault error kinds at this boundary.
    """

    backend_type: str = "base"

    @abstractmethod
    def save(self, creds: StoredCredentials) -> None:
        """
        Store the record, replacing any existing one.

        Raises:
            BackendUnavailableError: If the backend cannot be reached
            SerializationError: If the record cannot be encoded
        """
        pass

    @abstractmethod
    def load(self) -> StoredCredentials:
        """
        Read the stored record.

        Raises:
            NotFoundError: If no record is stored
            BackendUnavailableError: If the backend cannot be reached
            SerializationError: If the stored record cannot be decoded
        """
        pass

    @abstractmethod
    def delete(self) -> None:
        """
        Remove the stored record.

        Raises:
            NotFoundError: If no record is stored
            BackendUnavailableError: If the backend cannot be reached
        """
        pass
