from enum import StrEnum


# Largest counter value supported by the code encoder (64-bit unsigned)
MAX_COUNTER = 2**64 - 1

# Values stored at a dedup key that mean "no existing mapping"
EMPTY_RECORD_SENTINELS = frozenset({'', '{}'})


class OutcomeKind(StrEnum):
    """Explicit outcome tags returned to callers of the engine."""

    SUCCESS = 'success'
    NOT_FOUND = 'not_found'
    BACKEND_UNAVAILABLE = 'backend_unavailable'
    INTERNAL_ERROR = 'internal_error'


class RedisDefaults:
    """Default Redis connection parameters."""

    HOST = 'localhost'
    PORT = 6379
    DB = 0
    SOCKET_TIMEOUT = 5.0  # seconds, bounds every backend call
    SOCKET_CONNECT_TIMEOUT = 5.0


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        AWS_SAM_LOCAL = 'AWS_SAM_LOCAL'
        LOG_LEVEL = 'LOG_LEVEL'
        ATOMIC_WRITES = 'SHORTLINKER_ATOMIC_WRITES'

    class AppConfig(StrEnum):
        APP_ID = 'APPCONFIG_APP_ID'
        ENV_ID = 'APPCONFIG_ENV_ID'
        PROFILE_ID = 'APPCONFIG_PROFILE_ID'

    class Redis(StrEnum):
        HOST = 'REDIS_HOST'
        PORT = 'REDIS_PORT'
        DB = 'REDIS_DB'
        USERNAME = 'REDIS_USERNAME'
        PASSWORD = 'REDIS_PASSWORD'  # noqa: S105
        SOCKET_TIMEOUT = 'REDIS_SOCKET_TIMEOUT'


class ErrorCode(StrEnum):
    """Error codes exposed in HTTP response bodies."""

    INVALID_JSON_BODY = 'INVALID_JSON_BODY'
    INVALID_URL = 'INVALID_URL'
    INVALID_EXPIRATION = 'INVALID_EXPIRATION'
    MISSING_SHORTLINK = 'MISSING_SHORTLINK'
    SHORTLINK_NOT_FOUND = 'SHORTLINK_NOT_FOUND'
    BACKEND_UNAVAILABLE = 'BACKEND_UNAVAILABLE'


# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
