"""
Credential Backends

The system keyring (primary) and the obfuscated file (fallback).
"""

from .file import FileBackend, obfuscate
from .system_keyring import SystemKeyringBackend

__all__ = ["FileBackend", "SystemKeyringBackend", "obfuscate"]
