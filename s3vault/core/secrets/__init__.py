"""
Credential Secrets Module

Persists the single set of S3 connection credentials.

Usage:
    from s3vault.core.secrets import CredentialVault, StoredCredentials

    vault = CredentialVault()
    vault.save(StoredCredentials("AKIA...", "secret", "us-east-1", "my-bucket"))
    creds = vault.load()
    vault.delete()

Storage:
    Primary: system keyring, service "s3-vault", key "aws-credentials"
    Fallback: obfuscated file in the user config directory, used only when
              the keyring is unavailable
"""

from .interface import CredentialBackend, StoredCredentials
from .vault import CredentialVault

__all__ = [
    "CredentialVault",
    "CredentialBackend",
    "StoredCredentials",
]
