"""Application-wide logging initialization

IMPORTANT: Call `initialize_logging()` in the CLI entry point before any
other logging is done.

Log records always go to stderr, so command output on stdout stays clean.
Two formats are available, picked with `LOG_FORMAT`:

    rich (default) – colored, human-readable lines through rich's RichHandler
    json           – one JSON object per record, `extra` fields included:

        {
            "timestamp": "2026-10-17T12:00:00.000Z",
            "level": "WARNING",
            "logger": "tinifier.dao.file.url_entry_file_dao",
            "message": "Skipped malformed lines in entry file.",
            "path": "/tmp/tinifier",
            "skipped": 2
        }
"""

import os
import json
import logging
import logging.config
from datetime import datetime, UTC

from rich.console import Console
from rich.logging import RichHandler

from tinifier.constants import ENV


class JsonFormatter(logging.Formatter):
    """JSON formatter that includes LogRecord extras"""

    # Attributes every LogRecord carries, anything else came in through `extra`
    STANDARD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {'message', 'asctime'}

    def format(self, record: logging.LogRecord) -> str:
        # fmt: off
        timestamp = datetime.fromtimestamp(record.created, tz=UTC) \
                            .isoformat(timespec="milliseconds") \
                            .replace("+00:00", "Z")
        # fmt: on

        log = {
            'timestamp': timestamp,
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        log.update((key, value) for key, value in vars(record).items() if key not in self.STANDARD_ATTRS)

        if record.exc_info:
            log['exception'] = self.formatException(record.exc_info)

        return json.dumps(log, default=str)


def _rich_handler() -> RichHandler:
    return RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=True)


def initialize_logging(level: str | None = None, log_format: str | None = None) -> None:
    """Configure the root logger to write to stderr

    Args:
        level (str | None):
            Log level name. Defaults to `LOG_LEVEL`, or 'WARNING' if unset.
        log_format (str | None):
            'rich' or 'json'. Defaults to `LOG_FORMAT`, or 'rich' if unset.
            Unknown formats fall back to 'rich'.
    """
    log_level = (level or os.getenv(ENV.App.LOG_LEVEL, 'WARNING')).upper()
    log_format = (log_format or os.getenv(ENV.App.LOG_FORMAT, 'rich')).lower()

    if log_format == 'json':
        handler = {'class': 'logging.StreamHandler', 'formatter': 'json', 'stream': 'ext://sys.stderr'}
    else:
        handler = {'()': _rich_handler}

    logging.config.dictConfig(
        {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'json': {
                    '()': JsonFormatter,
                }
            },
            'handlers': {
                'stderr': handler,
            },
            'root': {
                'level': log_level,
                'handlers': ['stderr'],
            },
        }
    )
