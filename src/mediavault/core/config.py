"""Configuration management for MediaVault."""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def get_env(key: str, default: str | None = None) -> str | None:
    """Get environment variable with optional default."""
    return os.getenv(key, default)


def get_env_bool(key: str, default: bool = False) -> bool:
    """Get environment variable as boolean."""
    value = os.getenv(key, "").lower()
    if value in ("true", "1", "yes"):
        return True
    if value in ("false", "0", "no"):
        return False
    return default


# MediaVault Data Directory (defaults to ~/.mediavault)
MEDIAVAULT_DATA_DIR = Path(
    get_env("MEDIAVAULT_DATA_DIR", os.path.expanduser("~/.mediavault"))
    or os.path.expanduser("~/.mediavault")
).expanduser()

# Key-value database backing the vault
DATABASE_PATH = MEDIAVAULT_DATA_DIR / "mediavault.db"

# Picked files are copied here before they are adopted into the vault
MEDIA_DIR = MEDIAVAULT_DATA_DIR / "media"

# Fixed key the serialized collection is stored under
STORE_KEY = get_env("MEDIAVAULT_STORE_KEY", "vault_files") or "vault_files"

# Import defaults
DELETE_ORIGINALS = get_env_bool("MEDIAVAULT_DELETE_ORIGINALS", False)

# Logging
LOG_LEVEL = get_env("LOG_LEVEL", "INFO")


def setup_logging() -> logging.Logger:
    """Configure and return logger."""
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=getattr(logging, (LOG_LEVEL or "INFO").upper(), logging.INFO),
    )
    return logging.getLogger(__name__)


def validate_environment() -> tuple[bool, str]:
    """
    Validate that the data directory is usable.

    Returns:
        (is_valid, message) - If not valid, message explains what's wrong.
    """
    if MEDIAVAULT_DATA_DIR.exists() and not MEDIAVAULT_DATA_DIR.is_dir():
        return (
            False,
            f"MEDIAVAULT_DATA_DIR is not a directory: {MEDIAVAULT_DATA_DIR}",
        )

    return True, ""
