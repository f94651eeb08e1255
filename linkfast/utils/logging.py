"""Application-wide logging initialization

IMPORTANT: Call `initialize_logging()` before any other logging is done. The
Lambda handler package (`linkfast.lambdas`) does this on import.

Every log line is a single JSON document on stdout:
{
    "timestamp": "2025-12-26T12:00:00.000Z",
    "level": "INFO",
    "logger": "linkfast.services.shorten_service",
    "message": "Shortened URL.",
    "shortcode": "abcD1234"
}

Fields passed through `extra=` are copied verbatim; values which aren't JSON
serializable are logged via str().
"""

import os
import json
import logging
import logging.config
from datetime import datetime, UTC

from linkfast.constants import ENV


# Attributes every LogRecord carries; anything else came in through `extra=`
_RECORD_ATTRS = frozenset(logging.LogRecord('', logging.NOTSET, '', 0, '', (), None).__dict__) | {'message', 'asctime'}


class JsonFormatter(logging.Formatter):
    """Render LogRecords (including their extras) as JSON documents"""

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=UTC)
        log = {
            'timestamp': created.isoformat(timespec='milliseconds').replace('+00:00', 'Z'),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        log.update((key, value) for key, value in record.__dict__.items() if key not in _RECORD_ATTRS)

        if record.exc_info:
            log['exception'] = self.formatException(record.exc_info)
        if record.stack_info:
            log['stack'] = self.formatStack(record.stack_info)

        return json.dumps(log, default=str)


def initialize_logging() -> None:
    level = os.getenv(ENV.App.LOG_LEVEL, 'INFO').upper()
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
                },
            },
            'loggers': {
                # Keep client library chatter out of DEBUG output
                'redis': {'level': 'WARNING'},
            },
            'root': {
                'level': level,
                'handlers': ['stdout'],
            },
        }
    )
