"""
Shared configuration constants for S3 Vault.

Import from here to avoid duplication across the vault, the storage
manager and the server.
"""

import os
import sys
from pathlib import Path
from typing import Optional

# Primary secret store identity
SERVICE_NAME = "s3-vault"
CREDENTIALS_KEY = "aws-credentials"

# Fallback credential file
FALLBACK_FILE = ".s3-vault-creds"
FALLBACK_FILE_MODE = 0o600
XOR_KEY = 0x42  # shared by every installation, kept for file compatibility

# Object store
LIST_MAX_KEYS = 1000

# Environment overrides
CONFIG_DIR_ENV = "S3VAULT_CONFIG_DIR"
LOG_LEVEL_ENV = "S3VAULT_LOG_LEVEL"
HOST_ENV = "S3VAULT_HOST"
PORT_ENV = "S3VAULT_PORT"

# Server
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000


def user_config_dir() -> Optional[Path]:
    """Return the platform's per-user configuration directory, if known."""
    if sys.platform == "win32":
        appdata = os.environ.get("APPDATA")
        return Path(appdata) if appdata else None

    home = home_dir()
    if sys.platform == "darwin":
        return home / "Library" / "Application Support" if home else None

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg and Path(xdg).is_absolute():
        return Path(xdg)
    return home / ".config" if home else None


def home_dir() -> Optional[Path]:
    """Return the user's home directory, or None when it cannot be determined."""
    try:
        return Path.home()
    except (KeyError, RuntimeError):
        return None


def get_fallback_path() -> Path:
    """
    Resolve the fallback credential file location.

    Order: S3VAULT_CONFIG_DIR, the user config directory, the home
    directory, then the current working directory.
    """
    override = os.environ.get(CONFIG_DIR_ENV)
    if override:
        return Path(override) / FALLBACK_FILE

    base = user_config_dir() or home_dir() or Path(".")
    return base / FALLBACK_FILE
