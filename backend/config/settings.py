"""
Runtime Configuration

Reads the service configuration from environment variables.

Includes:
- Database location (any SQLAlchemy URL, SQLite file by default)
- Logging level and optional rotating log file
- Credentials for the HTTP Basic access gate
- CORS origins and bind address
"""
import os
import logging
import secrets
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Mapping, Optional

from constants import EnvKeys, ServerConfig
from exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = Path.home() / ".user-management"
DEFAULT_USERNAME = "user"
DEFAULT_REALM = "User Management"

_VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    """Immutable snapshot of the service configuration."""

    database_url: str
    data_dir: Path
    log_level: str = "INFO"
    log_to_file: bool = True
    auth_username: str = DEFAULT_USERNAME
    auth_password: str = ""
    auth_password_generated: bool = False
    auth_realm: str = DEFAULT_REALM
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    host: str = ServerConfig.HOST
    port: int = ServerConfig.PORT

    @property
    def log_dir(self) -> Path:
        return self.data_dir / "logs"


def _parse_bool(raw: str) -> bool:
    return raw.strip().lower() in ('true', '1', 'yes')


def _parse_port(raw: str) -> int:
    try:
        port = int(raw)
    except ValueError:
        raise ConfigurationError(f"{EnvKeys.PORT} must be an integer, got {raw!r}")
    if not 0 < port < 65536:
        raise ConfigurationError(f"{EnvKeys.PORT} out of range: {port}")
    return port


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build Settings from environment variables.

    Args:
        environ: Mapping to read from (defaults to os.environ)

    Returns:
        Settings instance

    Raises:
        ConfigurationError: If a variable holds an invalid value
    """
    env = os.environ if environ is None else environ

    data_dir = Path(env.get(EnvKeys.DATA_DIR, str(DEFAULT_DATA_DIR))).expanduser()
    database_url = env.get(EnvKeys.DATABASE_URL) or f"sqlite:///{data_dir / 'users.db'}"

    log_level = env.get(EnvKeys.LOG_LEVEL, "INFO").upper()
    if log_level not in _VALID_LOG_LEVELS:
        raise ConfigurationError(f"Unknown log level: {log_level}")

    password = env.get(EnvKeys.AUTH_PASSWORD, "")
    generated = not password
    if generated:
        password = secrets.token_urlsafe(16)

    origins = [o.strip() for o in env.get(EnvKeys.CORS_ORIGINS, "*").split(",") if o.strip()]

    return Settings(
        database_url=database_url,
        data_dir=data_dir,
        log_level=log_level,
        log_to_file=_parse_bool(env.get(EnvKeys.LOG_TO_FILE, "true")),
        auth_username=env.get(EnvKeys.AUTH_USERNAME, DEFAULT_USERNAME),
        auth_password=password,
        auth_password_generated=generated,
        auth_realm=env.get(EnvKeys.AUTH_REALM, DEFAULT_REALM),
        cors_origins=origins or ["*"],
        host=env.get(EnvKeys.HOST, ServerConfig.HOST),
        port=_parse_port(env.get(EnvKeys.PORT, str(ServerConfig.PORT))),
    )
