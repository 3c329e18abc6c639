"""Tests for structured logging setup."""
import json
import logging

import pytest

from fyla.logging_config import generate_request_id, get_logger, setup_structured_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Point the root handler back at stderr once a test has replaced it."""
    yield
    logging.basicConfig(level=logging.WARNING, force=True)


def test_generate_request_id_format():
    """Request ids are 'req-' plus 12 hex characters and unique."""
    first = generate_request_id()
    second = generate_request_id()

    assert first.startswith("req-")
    assert len(first) == 16
    int(first[4:], 16)
    assert first != second


def test_json_logs_written_to_stdout(capsys):
    """JSON mode should emit one JSON object per event."""
    setup_structured_logging("INFO", json_logs=True)
    logger = get_logger("fyla.test")

    logger.info("feature_flag_changed", flag="USE_REAL_CHAT_API", value=False)

    line = capsys.readouterr().out.strip().splitlines()[-1]
    payload = json.loads(line)
    assert payload["event"] == "feature_flag_changed"
    assert payload["flag"] == "USE_REAL_CHAT_API"
    assert payload["level"] == "info"


def test_log_level_applied():
    setup_structured_logging("WARNING")

    assert logging.getLogger().level == logging.WARNING
