"""
S3 Vault Core

Infrastructure:
- secrets: Credential persistence (keyring with file fallback)
"""
