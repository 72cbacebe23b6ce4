"""Process-wide logging set-up

Library modules only create module-level loggers. The embedding application
calls `initialize_logging()` once at start-up to decide where records go.

Two output formats are available, selected with the LOG_FORMAT environment
variable:

    json (default)   one JSON object per line, LogRecord extras included:
        {"timestamp": "2026-10-19T12:00:00.000Z", "level": "INFO",
         "logger": "linkshortener.services.shorten", "message": "Short link created.",
         "shortcode": "abc123", "target": "https://example.com"}

    text             human readable lines for local development:
        2026-10-19 12:00:00,000 INFO linkshortener.services.shorten: Short link created.
"""

import os
import json
import logging
import logging.config
from datetime import datetime, UTC

from linkshortener.utils.constants import LOG_LEVEL_ENV, LOG_FORMAT_ENV


# Attributes every LogRecord has, anything else was passed through `extra`
_RECORD_ATTRS = frozenset(logging.LogRecord('', logging.NOTSET, '', 0, '', (), None).__dict__) | {'message', 'asctime'}

TEXT_FORMAT = '%(asctime)s %(levelname)s %(name)s: %(message)s'


def _json_default(value):
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


class JsonFormatter(logging.Formatter):
    """Render a LogRecord, extras included, as a single JSON line"""

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
            log['exc_info'] = self.formatException(record.exc_info)
        if record.stack_info:
            log['stack_info'] = self.formatStack(record.stack_info)

        return json.dumps(log, default=_json_default)


def initialize_logging() -> None:
    """Send every record to stdout at LOG_LEVEL (default INFO) in LOG_FORMAT."""
    log_level = os.getenv(LOG_LEVEL_ENV, 'INFO').upper()
    log_format = os.getenv(LOG_FORMAT_ENV, 'json').lower()

    formatters = {
        'json': {'()': JsonFormatter},
        'text': {'format': TEXT_FORMAT},
    }
    if log_format not in formatters:
        log_format = 'json'

    # fmt: off
    logging.config.dictConfig({
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {log_format: formatters[log_format]},
        'handlers': {
            'stdout': {
                'class': 'logging.StreamHandler',
                'formatter': log_format,
                'stream': 'ext://sys.stdout',
            }
        },
        'root': {
            'level': log_level,
            'handlers': ['stdout'],
        },
    })
    # fmt: on
