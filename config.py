"""Configuration management for Tally.

Reads configuration from ~/.config/tally.toml and creates default config if needed.
"""

from pathlib import Path
from dataclasses import dataclass
import tomllib
import tomli_w


DEFAULT_API_BASE_URL = "http://localhost:5050"
DEFAULT_REQUEST_TIMEOUT = 10.0


@dataclass
class Config:
    """Application configuration."""

    base_dir: Path
    api_base_url: str
    request_timeout: float
    session_dir: Path
    session_filename: str
    log_level: str
    log_dir: Path

    @property
    def session_path(self) -> Path:
        """Get the full session storage path (session_dir/filename)."""
        return self.session_dir / self.session_filename

    @classmethod
    def default(cls) -> "Config":
        """Create a Config with default values."""
        home = Path.home()
        base_dir = home / "data" / "tally"
        return cls(
            base_dir=base_dir,
            api_base_url=DEFAULT_API_BASE_URL,
            request_timeout=DEFAULT_REQUEST_TIMEOUT,
            session_dir=base_dir / "session",
            session_filename="session.toml",
            log_level="INFO",
            log_dir=base_dir / "logs",
        )


def get_config_path() -> Path:
    """Get the path to the config file."""
    return Path.home() / ".config" / "tally.toml"


def load_config() -> Config:
    """Load configuration from file, creating default if it doesn't exist.

    Returns:
        Config object with loaded or default values.
    """
    config_path = get_config_path()

    if not config_path.exists():
        config = Config.default()
        _write_config(config)
        return config

    with open(config_path, "rb") as f:
        data = tomllib.load(f)

    return config_from_dict(data)


def config_from_dict(data: dict) -> Config:
    """Build a Config from parsed TOML data, filling in defaults.

    Args:
        data: Parsed TOML document.

    Returns:
        Config object.
    """
    base_dir = Path(data.get("base_dir", Path.home() / "data" / "tally"))

    api_config = data.get("api", {})
    api_base_url = api_config.get("base_url", DEFAULT_API_BASE_URL)
    request_timeout = float(api_config.get("timeout", DEFAULT_REQUEST_TIMEOUT))

    session_config = data.get("session", {})
    session_dir = Path(session_config.get("dir", base_dir / "session"))
    session_filename = session_config.get("filename", "session.toml")

    log_config = data.get("logging", {})
    log_level = log_config.get("level", "INFO")
    log_dir = Path(log_config.get("log_dir", base_dir / "logs"))

    return Config(
        base_dir=base_dir,
        api_base_url=api_base_url,
        request_timeout=request_timeout,
        session_dir=session_dir,
        session_filename=session_filename,
        log_level=log_level,
        log_dir=log_dir,
    )


def _write_config(config: Config) -> None:
    """Write config to the config file.

    Args:
        config: Config object to write.
    """
    config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = {
        "base_dir": str(config.base_dir),
        "api": {
            "base_url": config.api_base_url,
            "timeout": config.request_timeout,
        },
        "session": {
            "dir": str(config.session_dir),
            "filename": config.session_filename,
        },
        "logging": {
            "level": config.log_level,
            "log_dir": str(config.log_dir),
        },
    }

    with open(config_path, "wb") as f:
        tomli_w.dump(data, f)
