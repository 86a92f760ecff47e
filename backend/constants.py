"""
Application-wide constants and configuration keys.

This module centralizes all magic strings and numbers used throughout the application
to improve maintainability and reduce duplication.
"""

APP_VERSION = "1.0.0"


class ServerConfig:
    """Server configuration constants"""

    HOST = "0.0.0.0"  # Listen on all interfaces by default
    PORT = 8080


class DatabaseLimits:
    """Bounds of the INTEGER primary key column (signed 64-bit)"""

    MIN_ID = -2**63
    MAX_ID = 2**63 - 1


class ApiPaths:
    """URL prefixes used when mounting routers and building access rules"""

    API_PREFIX = "/api"
    USERS = "/users"
    HEALTH = "/health"


class EnvKeys:
    """Environment variable names read by config.settings"""

    DATABASE_URL = "USERS_DATABASE_URL"
    DATA_DIR = "USERS_DATA_DIR"
    LOG_LEVEL = "USERS_LOG_LEVEL"
    LOG_TO_FILE = "USERS_LOG_TO_FILE"
    AUTH_USERNAME = "USERS_AUTH_USERNAME"
    AUTH_PASSWORD = "USERS_AUTH_PASSWORD"
    AUTH_REALM = "USERS_AUTH_REALM"
    CORS_ORIGINS = "USERS_CORS_ORIGINS"
    HOST = "USERS_HOST"
    PORT = "USERS_PORT"


class LogConfig:
    """Logging defaults"""

    FORMAT = '%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s'
    FILE_NAME = "backend.log"
    MAX_BYTES = 10 * 1024 * 1024  # 10MB
    BACKUP_COUNT = 5
    REQUEST_ID_HEADER = "X-Request-ID"


class HTTPStatus:
    """HTTP status codes used throughout the application"""

    # Success
    OK = 200
    CREATED = 201
    NO_CONTENT = 204

    # Client Errors
    UNAUTHORIZED = 401
    NOT_FOUND = 404

    # Server Errors
    INTERNAL_SERVER_ERROR = 500
    SERVICE_UNAVAILABLE = 503
