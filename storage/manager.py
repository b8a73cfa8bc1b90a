"""Durable client storage for session state, backed by a TOML file."""

import os
from typing import Dict, Optional
import tomllib
import tomli_w
from config import Config
from logger import get_logger

logger = get_logger()

AUTH_HEADER_KEY = "authHeader"
USERNAME_KEY = "username"

# The auth header decodes back to the password, so only the owner may read it
FILE_MODE = 0o600


class StorageManager:
    """Small key/value store that survives process restarts.

    Values live in a TOML file at ``config.session_path``, readable only by
    its owner. Every write rewrites the whole file; there are only a handful
    of keys. A file that cannot be parsed reads as empty and is replaced on
    the next write.

    Args:
        config: Application configuration object.
    """

    def __init__(self, config: Config):
        """Initialize the storage manager.

        Args:
            config: Config object containing the session storage location.
        """
        self.config = config

    def get(self, key: str) -> Optional[str]:
        """Read a stored value.

        Args:
            key: Storage key.

        Returns:
            The stored string, or None if the key is missing or the file is
            missing or unreadable.
        """
        return (self._read() or {}).get(key)

    def set(self, key: str, value: str) -> None:
        """Store a value under a key, replacing any previous value."""
        data = self._read() or {}
        data[key] = value
        self._write(data)

    def remove(self, key: str) -> None:
        """Remove a key. Removing a missing key is a no-op.

        An unreadable file is rewritten empty.
        """
        data = self._read()
        if data is None:
            self._write({})
        elif key in data:
            del data[key]
            self._write(data)

    def clear(self) -> None:
        """Remove every stored value."""
        path = self.config.session_path
        if path.exists():
            path.unlink()

    def _read(self) -> Optional[Dict[str, str]]:
        """Load the file.

        Returns:
            Stored string values, {} if there is no file, or None if the file
            exists but is not valid TOML.
        """
        path = self.config.session_path
        if not path.exists():
            return {}

        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except (tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
            logger.warning(f"Ignoring unreadable session file {path}: {e}")
            return None

        return {k: v for k, v in data.items() if isinstance(v, str)}

    def _write(self, data: Dict[str, str]) -> None:
        path = self.config.session_path
        path.parent.mkdir(parents=True, exist_ok=True)

        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, FILE_MODE)
        # O_CREAT's mode only applies to new files
        os.chmod(path, FILE_MODE)
        with os.fdopen(fd, "wb") as f:
            tomli_w.dump(data, f)
