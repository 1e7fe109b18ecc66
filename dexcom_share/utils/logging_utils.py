"""
Logging utilities for redacting credentials from logs and emitting JSON records.

Example:
    from dexcom_share.utils.logging_utils import redact_sensitive_data
    safe = redact_sensitive_data({'password': 'abc', 'minutes': 10})
    # safe == {'password': '***REDACTED***', 'minutes': 10}
"""

import json
import logging
from datetime import datetime, timezone

# Lower-cased; Share payload keys are camelCase so they are compared case-insensitively
SENSITIVE_KEYS = {
    'password', 'accountname', 'account_name', 'accountid', 'account_id',
    'sessionid', 'session_id', 'applicationid', 'application_id',
    'token', 'secret', 'access_token', 'refresh_token',
}

REDACTED = '***REDACTED***'

# Attributes every LogRecord carries; anything else came in through ``extra=``
_RESERVED_ATTRS = set(vars(logging.makeLogRecord({}))) | {'message', 'asctime'}


def redact_sensitive_data(obj):
    """
    Recursively redacts sensitive fields in dicts/lists.
    Keys are matched case-insensitively against SENSITIVE_KEYS.
    """
    if isinstance(obj, dict):
        return {
            k: (REDACTED if str(k).lower() in SENSITIVE_KEYS else redact_sensitive_data(v))
            for k, v in obj.items()
        }
    elif isinstance(obj, list):
        return [redact_sensitive_data(i) for i in obj]
    else:
        return obj


class JSONFormatter(logging.Formatter):
    """
    Formats log records as JSON with standard fields plus any ``extra`` fields.
    """
    def format(self, record):
        log_record = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno
        }
        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith('_'):
                log_record[key] = redact_sensitive_data(value)
        return json.dumps(log_record, default=str)


def setup_json_logging(level=logging.INFO, output='stdout', file_path=None):
    """
    Set up structured JSON logging.
    Args:
        level: Logging level (default: INFO), name or number
        output: 'stdout' or 'file'
        file_path: Path to log file if output is 'file'
    """
    logger = logging.getLogger()
    logger.setLevel(level)
    # Remove existing handlers
    for h in list(logger.handlers):
        logger.removeHandler(h)
    if output == 'file' and file_path:
        handler = logging.FileHandler(file_path)
    else:
        handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter())
    logger.addHandler(handler)
    return logger
