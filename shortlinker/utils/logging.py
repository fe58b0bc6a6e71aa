"""Application-wide logging initialization

IMPORTANT: Call `initialize_logging()` in the lambda package's `__init__.py`
before any other logging is done.

Every record is a single JSON line. Fields passed through `extra=` (short
link, fingerprint, outcome kind, ...) are grouped under "context":
{
    "timestamp": "2025-12-26T12:00:00.000Z",
    "level": "INFO",
    "logger": "shortlinker.engine.shortener",
    "message": "Allocated new short code.",
    "service": "shortlinker",
    "env": "dev",
    "context": {"shortlink": "8M0kX", "ttl_minutes": 60}
}

Records at WARNING and above also carry "location" (module:line).
"""

import os
import json
import logging
import logging.config
from datetime import datetime, UTC
from enum import Enum

from shortlinker.constants import ENV


# Attributes every LogRecord has; anything else came from `extra=`
_RECORD_ATTRS = frozenset(logging.LogRecord('', logging.NOTSET, '', 0, '', (), None).__dict__) | {'message', 'asctime'}

# Third-party loggers that are chatty at INFO
QUIET_LOGGERS = ('boto3', 'botocore', 'urllib3')


def _jsonable(value):
    if isinstance(value, Enum):
        return value.value
    return str(value)


class JsonFormatter(logging.Formatter):
    """Render LogRecords as JSON lines tagged with the service and environment"""

    def __init__(self, service: str | None = None, env: str | None = None):
        super().__init__()
        self.service = service or os.getenv(ENV.App.APP_NAME, 'shortlinker')
        self.env = env or os.getenv(ENV.App.APP_ENV, 'local').lower()

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created, tz=UTC).isoformat(timespec='milliseconds').replace('+00:00', 'Z')

        log = {
            'timestamp': timestamp,
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'service': self.service,
            'env': self.env,
        }

        if record.levelno >= logging.WARNING:
            log['location'] = f'{record.module}:{record.lineno}'

        if record.exc_info:
            log['exception'] = self.formatException(record.exc_info)

        context = {key: value for key, value in record.__dict__.items() if key not in _RECORD_ATTRS}
        if context:
            log['context'] = context

        return json.dumps(log, default=_jsonable)


def initialize_logging(level: str | None = None) -> None:
    """Send JSON logs to stdout at `level` (defaults to LOG_LEVEL, then INFO)"""
    log_level = (level or os.getenv(ENV.App.LOG_LEVEL) or 'INFO').upper()
    logging.config.dictConfig(
        {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'json': {'()': JsonFormatter},
            },
            'handlers': {
                'stdout': {
                    'class': 'logging.StreamHandler',
                    'formatter': 'json',
                    'stream': 'ext://sys.stdout',
                }
            },
            'loggers': {name: {'level': 'WARNING'} for name in QUIET_LOGGERS},
            'root': {
                'level': log_level,
                'handlers': ['stdout'],
            },
        }
    )
