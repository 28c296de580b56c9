"""
S3 Vault Services

- Storage: the single active S3 connection and its file operations

Each service follows the same pattern:
- interface.py: ABC defining the contract + dataclasses
- manager.py: state and routing
- adapters/: protocol-specific implementations
"""
