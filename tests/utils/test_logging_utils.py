import io
import json
import logging

from dexcom_share.utils.logging_utils import (
    REDACTED,
    JSONFormatter,
    redact_sensitive_data,
    setup_json_logging,
)


def test_redacts_share_payload_keys():
    data = {
        "accountName": "someone",
        "password": "hunter2",
        "applicationId": "app",
        "minutes": 10,
        "nested": [{"sessionId": "sid", "maxCount": 1}],
    }
    redacted = redact_sensitive_data(data)
    assert redacted == {
        "accountName": REDACTED,
        "password": REDACTED,
        "applicationId": REDACTED,
        "minutes": 10,
        "nested": [{"sessionId": REDACTED, "maxCount": 1}],
    }
    # input untouched
    assert data["password"] == "hunter2"


def test_redact_passes_through_scalars():
    assert redact_sensitive_data("plain") == "plain"
    assert redact_sensitive_data(None) is None


def test_json_formatter_includes_extra_fields():
    logger = logging.getLogger("dexcom_share.test_formatter")
    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(JSONFormatter())
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    logger.propagate = False
    try:
        logger.info("hello", extra={"log_type": "request", "body": {"password": "x", "minutes": 10}})
        record = json.loads(stream.getvalue().strip())
    finally:
        logger.removeHandler(handler)
        logger.propagate = True
    assert record["message"] == "hello"
    assert record["level"] == "INFO"
    assert record["log_type"] == "request"
    assert record["body"] == {"password": REDACTED, "minutes": 10}
    assert record["timestamp"].endswith("Z")


def test_setup_json_logging_replaces_handlers():
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        logger = setup_json_logging(level="WARNING")
        assert logger is root
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JSONFormatter)
        assert root.level == logging.WARNING
    finally:
        for h in list(root.handlers):
            root.removeHandler(h)
        for h in saved_handlers:
            root.addHandler(h)
        root.setLevel(saved_level)
