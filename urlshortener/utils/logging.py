"""Structured JSON logging for the lambda functions.

`initialize_logging()` runs once per lambda package (see `lambdas/<name>/__init__.py`),
after which every module logs through `logging.getLogger(__name__)`. Fields passed
with `extra=` end up as top-level keys of the JSON line:

    >>> logger.info('Redirecting client to target URL.', extra={'shortcode': 'Gh71WPT'})
    {"timestamp": "2025-12-26T12:00:00.000Z", "level": "INFO", "logger": "...", "message": "Redirecting client to target URL.", "shortcode": "Gh71WPT"}
"""

import os
import json
import logging
import logging.config
from datetime import datetime, UTC

from urlshortener.constants import ENV


# Attributes every LogRecord carries; anything else came in through `extra=`
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {'message', 'asctime'}

# Chatty third-party loggers kept at WARNING unless LOG_LEVEL is stricter
_QUIET_LOGGERS = ('botocore', 'boto3', 'urllib3')


class JsonFormatter(logging.Formatter):
    """Render a LogRecord, its `extra` fields and exception info as one JSON object."""

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        created = datetime.fromtimestamp(record.created, tz=UTC)
        return created.isoformat(timespec='milliseconds').replace('+00:00', 'Z')

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            'timestamp': self.formatTime(record),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        payload.update((key, value) for key, value in vars(record).items() if key not in _RECORD_ATTRS and key not in payload)

        if record.exc_info:
            payload['exception'] = self.formatException(record.exc_info)
        if record.stack_info:
            payload['stack'] = self.formatStack(record.stack_info)

        return json.dumps(payload, default=str)


def initialize_logging(level: str | None = None) -> None:
    level = (level or os.getenv(ENV.App.LOG_LEVEL) or 'INFO').upper()
    quiet_level = max(logging.WARNING, logging.getLevelNamesMapping().get(level, logging.WARNING))

    logging.config.dictConfig(
        {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {'json': {'()': JsonFormatter}},
            'handlers': {
                'stdout': {
                    'class': 'logging.StreamHandler',
                    'formatter': 'json',
                    'stream': 'ext://sys.stdout',
                },
            },
            'loggers': {name: {'level': quiet_level} for name in _QUIET_LOGGERS},
            'root': {'level': level, 'handlers': ['stdout']},
        }
    )
